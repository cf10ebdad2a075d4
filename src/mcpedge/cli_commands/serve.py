"""``mcpedge serve`` — run the HTTP server with uvicorn."""

from __future__ import annotations

import sys

import click

from mcpedge.cli_commands._config import load_config
from mcpedge.cli_commands._output import console


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="Server config YAML.")
@click.option("--host", default=None, help="Bind address (overrides config).")
@click.option("--port", type=int, default=None, help="Bind port (overrides config).")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(config_path: str | None, host: str | None, port: int | None, telemetry: bool) -> None:
    """Serve the MCP endpoint over HTTP."""
    import uvicorn

    from mcpedge.server.app import create_app
    from mcpedge.utils.telemetry import configure_telemetry

    cfg = load_config(config_path)
    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    if telemetry or cfg.telemetry.enabled:
        try:
            configure_telemetry(cfg.telemetry, service_name=cfg.name)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    console.print(f"Serving [bold]{cfg.title}[/bold] on http://{cfg.host}:{cfg.port}{cfg.endpoint}")
    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port, log_level=cfg.log_level)
