"""``mcpedge catalog`` — list the built-in tools, resources and prompts."""

from __future__ import annotations

import click

from mcpedge.cli_commands._config import load_config
from mcpedge.cli_commands._output import print_catalog


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="Server config YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog(config_path: str | None, as_json: bool) -> None:
    """Show the capability catalog the server would advertise."""
    from mcpedge.registry.builtin import build_default_registry

    cfg = load_config(config_path)
    print_catalog(build_default_registry(cfg), as_json=as_json)
