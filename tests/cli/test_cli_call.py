"""Tests for ``mcpedge call`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

if TYPE_CHECKING:
    from pathlib import Path

from mcpedge.cli import main


class TestCall:
    def test_ping(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "ping", "--id", "7", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"jsonrpc": "2.0", "id": 7, "result": {}}

    def test_status_line(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "tools/list"])

        assert result.exit_code == 0
        assert "HTTP 200" in result.output
        assert "random_number" in result.output

    def test_params(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["call", "tools/call", "-p", '{"name": "echo", "arguments": {"text": "hi"}}', "--json"],
        )

        assert result.exit_code == 0
        body = json.loads(result.output)
        assert body["result"]["content"][0]["text"] == "Echo: hi"

    def test_string_id(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "ping", "--id", "abc", "--json"])

        assert json.loads(result.output)["id"] == "abc"

    def test_notification(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "notifications/initialized", "--notification"])

        assert result.exit_code == 0
        assert "HTTP 202" in result.output
        assert "(empty body)" in result.output

    def test_unknown_method(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "nope", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["error"]["code"] == -32601

    def test_invalid_params_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["call", "ping", "-p", "{bad"])

        assert result.exit_code == 1
        assert "Invalid --params JSON" in result.output

    def test_config_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "server.yaml"
        cfg.write_text("name: from-file\n")
        runner = CliRunner()
        result = runner.invoke(main, ["call", "initialize", "--config", str(cfg), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["result"]["serverInfo"]["name"] == "from-file"

    def test_bad_config_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "server.yaml"
        cfg.write_text("port: not-a-port\n")
        runner = CliRunner()
        result = runner.invoke(main, ["call", "ping", "--config", str(cfg)])

        assert result.exit_code == 1
        assert "Config error" in result.output
