"""Config loading shared by the subcommands."""

from __future__ import annotations

import sys
from pathlib import Path

from rich.markup import escape

from mcpedge.cli_commands._output import console
from mcpedge.config.errors import ConfigError
from mcpedge.config.loader import ConfigLoader
from mcpedge.config.models import ServerConfig


def load_config(config_path: str | None) -> ServerConfig:
    """Load *config_path*, or the defaults when none is given; exit 1 on errors."""
    if config_path is None:
        return ServerConfig()
    try:
        return ConfigLoader(Path(config_path)).load()
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        sys.exit(1)
