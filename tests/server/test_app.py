"""Tests for the FastAPI application."""

from __future__ import annotations

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from mcpedge.config.models import ServerConfig
from mcpedge.registry.registry import CapabilityRegistry
from mcpedge.server.app import create_app
from mcpedge.server.logging_state import LogLevel, LogLevelState

HEADERS = {"Accept": "application/json, text/event-stream", "Content-Type": "application/json"}


@pytest.fixture
def client(registry: CapabilityRegistry, config: ServerConfig, log_state: LogLevelState) -> TestClient:
    return TestClient(create_app(config, registry=registry, log_state=log_state))


class TestEndpoint:
    def test_ping(self, client: TestClient) -> None:
        resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "ping"}, headers=HEADERS)
        assert resp.status_code == 200
        assert resp.json() == {"jsonrpc": "2.0", "id": 7, "result": {}}
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_tools_call(self, client: TestClient) -> None:
        resp = client.post(
            "/mcp",
            json={
                "jsonrpc": "2.0",
                "id": "a",
                "method": "tools/call",
                "params": {"name": "echo", "arguments": {"text": "hi"}},
            },
            headers=HEADERS,
        )
        assert resp.json()["result"]["content"][0]["text"] == "Echo: hi"

    def test_notification(self, client: TestClient) -> None:
        resp = client.post(
            "/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"}, headers=HEADERS
        )
        assert resp.status_code == 202
        assert resp.content == b""

    def test_get_is_not_allowed(self, client: TestClient) -> None:
        resp = client.get("/mcp", headers={"Accept": "text/event-stream"})
        assert resp.status_code == 405
        assert resp.headers["allow"] == "POST"

    def test_delete_is_not_allowed(self, client: TestClient) -> None:
        assert client.delete("/mcp").status_code == 405

    def test_bad_json(self, client: TestClient) -> None:
        resp = client.post("/mcp", content=b"{oops", headers=HEADERS)
        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == -32603

    def test_wrong_protocol_version(self, client: TestClient) -> None:
        resp = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 1, "method": "ping"},
            headers={**HEADERS, "MCP-Protocol-Version": "2024-11-05"},
        )
        assert resp.status_code == 400
        assert resp.text == "Unsupported MCP protocol version"

    def test_set_level_reaches_shared_state(self, client: TestClient, log_state: LogLevelState) -> None:
        client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 1, "method": "logging/setLevel", "params": {"level": "error"}},
            headers=HEADERS,
        )
        assert log_state.level is LogLevel.ERROR

    def test_custom_endpoint(self, registry: CapabilityRegistry) -> None:
        client = TestClient(create_app(ServerConfig(endpoint="/rpc"), registry=registry))
        ok = client.post("/rpc", json={"jsonrpc": "2.0", "id": 1, "method": "ping"}, headers=HEADERS)
        assert ok.status_code == 200
        missing = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "ping"}, headers=HEADERS)
        assert missing.status_code == 404


class TestPreflight:
    @pytest.mark.parametrize("path", ["/mcp", "/", "/anything/else"])
    def test_options(self, client: TestClient, path: str) -> None:
        resp = client.options(path)
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, POST, DELETE, OPTIONS"
        assert "MCP-Protocol-Version" in resp.headers["access-control-allow-headers"]


class TestRoot:
    def test_descriptor(self, client: TestClient, config: ServerConfig) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {
            "name": config.name,
            "title": config.title,
            "version": config.version,
            "protocol": "2025-06-18",
            "transport": "streamable-http",
            "endpoint": "/mcp",
        }

    def test_post_to_root(self, client: TestClient) -> None:
        resp = client.post("/", json={})
        assert resp.status_code == 404
        assert resp.text == "Not Found"

    def test_unknown_path(self, client: TestClient) -> None:
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.text == "Not Found"


class TestAsgi:
    @pytest.mark.asyncio
    async def test_over_asgi_transport(self, registry: CapabilityRegistry, config: ServerConfig) -> None:
        app = create_app(config, registry=registry)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            resp = await http.post(
                "/mcp",
                json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
                headers=HEADERS,
            )
        assert resp.status_code == 200
        assert len(resp.json()["result"]["tools"]) == 3

    def test_state_exposes_components(self, config: ServerConfig) -> None:
        app = create_app(config)
        assert app.state.config is config
        assert app.state.dispatcher.log_state.level is LogLevel.INFO


class TestConfiguredLogLevel:
    def test_config_level_applies_to_package_logger(self) -> None:
        package_logger = logging.getLogger("mcpedge")
        try:
            create_app(ServerConfig(log_level="warning"))
            assert package_logger.level == logging.WARNING
            assert not package_logger.isEnabledFor(logging.INFO)
        finally:
            package_logger.setLevel(logging.NOTSET)
