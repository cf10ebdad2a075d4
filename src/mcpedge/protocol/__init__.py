"""Protocol layer — JSON-RPC envelopes, classification, and error types."""

from mcpedge.protocol.classifier import MessageKind, classify, envelope_id
from mcpedge.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    McpError,
    MethodNotFoundError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from mcpedge.protocol.models import (
    JSONRPC_VERSION,
    JsonRpcError,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
)

__all__ = [
    "JSONRPC_VERSION",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcErrorResponse",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "McpError",
    "MessageKind",
    "MethodNotFoundError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "classify",
    "envelope_id",
]
