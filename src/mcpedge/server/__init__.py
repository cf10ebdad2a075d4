"""Server layer — transport gate, method dispatcher and the HTTP app."""

from mcpedge.server.dispatcher import Method, MethodDispatcher
from mcpedge.server.logging_state import LogLevel, LogLevelState
from mcpedge.server.transport import HttpReply, HttpRequest, TransportGate, TransportRejection

__all__ = [
    "HttpReply",
    "HttpRequest",
    "LogLevel",
    "LogLevelState",
    "Method",
    "MethodDispatcher",
    "TransportGate",
    "TransportRejection",
]
