"""JSON-RPC 2.0 envelope models.

Request ids are echoed back exactly as received, so they are typed ``Any``
rather than coerced into ``int | str``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from mcpedge.protocol.errors import McpError

JSONRPC_VERSION = "2.0"

# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request that reached the dispatcher."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: str
    params: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_exception(cls, exc: McpError) -> JsonRpcError:
        return cls(code=exc.code, message=exc.message, data=exc.data)

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            wire["data"] = self.data
        return wire


class JsonRpcResponse(BaseModel):
    """A successful JSON-RPC 2.0 response."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: dict[str, Any]

    def to_wire(self) -> dict[str, Any]:
        return {"jsonrpc": self.jsonrpc, "id": self.id, "result": self.result}


class JsonRpcErrorResponse(BaseModel):
    """A failed JSON-RPC 2.0 response.

    ``id`` is kept on the wire even when it is ``None``; only the error's
    ``data`` member is dropped when absent.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    error: JsonRpcError

    @classmethod
    def from_exception(cls, request_id: Any, exc: McpError) -> JsonRpcErrorResponse:
        return cls(id=request_id, error=JsonRpcError.from_exception(exc))

    def to_wire(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "error": self.error.to_wire(),
        }


AnyResponse = JsonRpcResponse | JsonRpcErrorResponse
