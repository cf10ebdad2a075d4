"""mcpedge — a stateless Model Context Protocol server over plain HTTP POST."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from mcpedge.server.app import create_app as create_app
    from mcpedge.server.dispatcher import MethodDispatcher as MethodDispatcher

_SERVER_EXPORTS = {
    "create_app": "mcpedge.server.app",
    "MethodDispatcher": "mcpedge.server.dispatcher",
}


def __getattr__(name: str) -> object:
    module_path = _SERVER_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'mcpedge' has no attribute {name!r}")
