"""Error types for the protocol and domain layers.

Two families that must never be confused:

* :class:`McpError` and its subclasses are *protocol* errors. The dispatcher
  turns them into a JSON-RPC ``error`` object.
* :class:`ToolError` and its subclasses are *domain* failures. The registry
  turns them into a successful ``tools/call`` result with ``isError: true``.
"""

from __future__ import annotations

from typing import Any

# JSON-RPC 2.0 reserved codes. Unparseable bodies are answered with
# INTERNAL_ERROR by the transport gate, so -32700 is never emitted.
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class McpError(Exception):
    """Base error for failures reported as a JSON-RPC ``error`` object."""

    code: int = INTERNAL_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, *, data: Any = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class InvalidRequestError(McpError):
    """The envelope is not a valid JSON-RPC 2.0 request."""

    code = INVALID_REQUEST
    default_message = "Invalid Request"


class MethodNotFoundError(McpError):
    """The method name is not in the dispatch table."""

    code = METHOD_NOT_FOUND
    default_message = "Method not found"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__()


class InvalidParamsError(McpError):
    """The method exists but its ``params`` are unusable."""

    code = INVALID_PARAMS
    default_message = "Invalid params"

    def __init__(self, data: Any = None) -> None:
        super().__init__(data=data)


class InternalError(McpError):
    """Unexpected failure while handling a request."""

    code = INTERNAL_ERROR
    default_message = "Internal error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(data=detail or None)


class ToolError(Exception):
    """Base error for tool failures reported in-band as ``isError`` results."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class ToolNotFoundError(ToolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")


class ToolExecutionError(ToolError):
    """A tool ran but could not produce a result."""
