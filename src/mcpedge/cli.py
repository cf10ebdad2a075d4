"""mcpedge CLI entrypoint."""

from __future__ import annotations

import logging

import click

from mcpedge import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcpedge")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error", "critical"]),
    default="warning",
    show_default=True,
    help="Root logging level.",
)
def main(log_level: str) -> None:
    """mcpedge — stateless MCP server over HTTP."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from mcpedge.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
