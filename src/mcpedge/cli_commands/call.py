"""``mcpedge call`` — push one JSON-RPC message through the server in-process."""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from mcpedge.cli_commands._config import load_config
from mcpedge.cli_commands._output import console, print_reply


@click.command()
@click.argument("method")
@click.option("--params", "-p", default=None, help="JSON object passed as params.")
@click.option("--id", "request_id", default="1", show_default=True, help="Request id (numeric ids are sent as numbers).")
@click.option("--notification", is_flag=True, help="Send without an id.")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="Server config YAML.")
@click.option("--json", "as_json", is_flag=True, help="Print only the response body.")
def call(
    method: str,
    params: str | None,
    request_id: str,
    notification: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Send METHOD to an in-process server and print the HTTP reply.

    The message goes through the same transport gate as HTTP traffic, so
    notifications come back as 202 with an empty body.
    """
    from mcpedge.registry.builtin import build_default_registry
    from mcpedge.server.dispatcher import MethodDispatcher
    from mcpedge.server.transport import HttpRequest, TransportGate

    cfg = load_config(config_path)

    envelope: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
    if not notification:
        envelope["id"] = int(request_id) if request_id.lstrip("-").isdigit() else request_id
    if params is not None:
        try:
            envelope["params"] = json.loads(params)
        except json.JSONDecodeError as exc:
            console.print(f"[red]Invalid --params JSON:[/red] {exc}")
            sys.exit(1)

    gate = TransportGate(MethodDispatcher(build_default_registry(cfg), cfg), cfg)
    reply = gate.handle(
        HttpRequest(
            "POST",
            {"Accept": "application/json", "Content-Type": "application/json"},
            json.dumps(envelope).encode("utf-8"),
        )
    )
    print_reply(reply, as_json=as_json)
