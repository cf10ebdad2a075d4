"""MethodDispatcher — routes a JSON-RPC request to its method handler.

The dispatch table is keyed by the closed :class:`Method` enum and is checked
for completeness when the dispatcher is built. Handlers return plain result
dicts; protocol failures are raised as :class:`McpError` and converted here,
and anything else a handler raises is reported as ``Internal error``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from mcpedge.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    McpError,
    MethodNotFoundError,
)
from mcpedge.protocol.models import (
    JSONRPC_VERSION,
    AnyResponse,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mcpedge.registry.models import Completion
from mcpedge.registry.registry import PromptNotFoundError
from mcpedge.server.logging_state import LogLevel, LogLevelState
from mcpedge.server.params import (
    CallToolParams,
    CompleteParams,
    GetPromptParams,
    InitializeParams,
    ReadResourceParams,
    SetLevelParams,
)
from mcpedge.utils.telemetry import ATTR_ERROR_CODE, ATTR_METHOD, ATTR_REQUEST_ID, get_tracer

if TYPE_CHECKING:
    from mcpedge.config.models import ServerConfig
    from mcpedge.registry.registry import CapabilityRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_P = TypeVar("_P", bound=BaseModel)

Handler = Callable[[dict[str, Any]], dict[str, Any]]


class Method(str, Enum):
    """Every method the server answers. Matching is exact and case-sensitive."""

    INITIALIZE = "initialize"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"
    RESOURCES_TEMPLATES_LIST = "resources/templates/list"
    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"
    COMPLETION_COMPLETE = "completion/complete"
    LOGGING_SET_LEVEL = "logging/setLevel"


def _is_valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int, float))


def _validate(model: type[_P], params: dict[str, Any]) -> _P:
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        details = [
            f"{'.'.join(str(part) for part in err['loc']) or 'params'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise InvalidParamsError(data=details) from exc


class MethodDispatcher:
    """Answers classified JSON-RPC requests against a :class:`CapabilityRegistry`.

    Usage::

        dispatcher = MethodDispatcher(registry, config)
        dispatcher.dispatch({"jsonrpc": "2.0", "id": 7, "method": "ping"})
        # {"jsonrpc": "2.0", "id": 7, "result": {}}

    The only state the dispatcher mutates is *log_state*, which is owned by
    the caller and shared by every request.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        config: ServerConfig,
        *,
        log_state: LogLevelState | None = None,
    ) -> None:
        self._registry = registry
        self._config = config
        self._log_state = log_state or LogLevelState()
        self._handlers: dict[Method, Handler] = {
            Method.INITIALIZE: self._initialize,
            Method.PING: self._ping,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
            Method.RESOURCES_LIST: self._resources_list,
            Method.RESOURCES_READ: self._resources_read,
            Method.RESOURCES_TEMPLATES_LIST: self._templates_list,
            Method.PROMPTS_LIST: self._prompts_list,
            Method.PROMPTS_GET: self._prompts_get,
            Method.COMPLETION_COMPLETE: self._complete,
            Method.LOGGING_SET_LEVEL: self._set_level,
        }
        missing = set(Method) - set(self._handlers)
        if missing:
            msg = f"No handler for: {', '.join(sorted(m.value for m in missing))}"
            raise RuntimeError(msg)

    @property
    def log_state(self) -> LogLevelState:
        return self._log_state

    def dispatch(self, envelope: dict[str, Any]) -> dict[str, Any]:
        """Answer one request envelope with a response envelope."""
        method = envelope.get("method")
        with _tracer.start_as_current_span("mcp.dispatch") as span:
            span.set_attribute(ATTR_METHOD, str(method))
            span.set_attribute(ATTR_REQUEST_ID, str(envelope.get("id")))
            response = self._respond(envelope)
            if isinstance(response, JsonRpcErrorResponse):
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
        return response.to_wire()

    def _respond(self, envelope: dict[str, Any]) -> AnyResponse:
        request_id = envelope.get("id")
        try:
            request = self._parse(envelope)
            handler = self._lookup(request.method)
            logger.debug("dispatch %s id=%r", request.method, request.id)
            result = handler(request.params or {})
        except McpError as exc:
            if not _is_valid_id(request_id):
                request_id = None
            logger.debug("request id=%r failed: %s (%s)", request_id, exc.message, exc.code)
            return JsonRpcErrorResponse.from_exception(request_id, exc)
        except Exception as exc:
            logger.exception("Unhandled error while dispatching %r", envelope.get("method"))
            return JsonRpcErrorResponse.from_exception(request_id, InternalError(str(exc)))
        return JsonRpcResponse(id=request_id, result=result)

    @staticmethod
    def _parse(envelope: dict[str, Any]) -> JsonRpcRequest:
        if envelope.get("jsonrpc") != JSONRPC_VERSION:
            raise InvalidRequestError()
        method = envelope.get("method")
        request_id = envelope.get("id")
        if not isinstance(method, str) or not _is_valid_id(request_id):
            raise InvalidRequestError()
        params = envelope.get("params")
        if params is not None and not isinstance(params, dict):
            raise InvalidParamsError(data="params must be an object")
        return JsonRpcRequest(id=request_id, method=method, params=params)

    def _lookup(self, name: str) -> Handler:
        try:
            method = Method(name)
        except ValueError:
            raise MethodNotFoundError(name) from None
        return self._handlers[method]

    # -- core -----------------------------------------------------------------

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        init = _validate(InitializeParams, params)
        logger.debug(
            "initialize from %s (protocol %s)",
            init.client_info.get("name", "unknown client"),
            init.protocol_version,
        )
        cfg = self._config
        return {
            "protocolVersion": cfg.initialize_protocol_version,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
                "prompts": {"listChanged": False},
                "logging": {},
                "completions": {},
                "experimental": {},
            },
            "serverInfo": {"name": cfg.name, "title": cfg.title, "version": cfg.version},
            "instructions": cfg.instructions,
        }

    def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    # -- tools ----------------------------------------------------------------

    def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self._registry.list_tools()]}

    def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        call = _validate(CallToolParams, params)
        return self._registry.call_tool(call.name, call.arguments or {}).to_wire()

    # -- resources ------------------------------------------------------------

    def _resources_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": [r.to_wire() for r in self._registry.list_resources()]}

    def _resources_read(self, params: dict[str, Any]) -> dict[str, Any]:
        read = _validate(ReadResourceParams, params)
        return self._registry.read_resource(read.uri).to_wire()

    def _templates_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resourceTemplates": [t.to_wire() for t in self._registry.list_templates()]}

    # -- prompts --------------------------------------------------------------

    def _prompts_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"prompts": [p.to_wire() for p in self._registry.list_prompts()]}

    def _prompts_get(self, params: dict[str, Any]) -> dict[str, Any]:
        get = _validate(GetPromptParams, params)
        try:
            return self._registry.get_prompt(get.name, get.arguments or {}).to_wire()
        except PromptNotFoundError as exc:
            raise InvalidParamsError(data=str(exc)) from exc

    # -- completion -----------------------------------------------------------

    def _complete(self, params: dict[str, Any]) -> dict[str, Any]:
        req = _validate(CompleteParams, params)
        ref = req.ref
        if ref.type == "ref/prompt" and ref.name is not None:
            completion = self._registry.complete(
                "ref/prompt", ref.name, req.argument.name, req.argument.value
            )
        elif ref.type == "ref/resource" and ref.uri is not None:
            completion = self._registry.complete(
                "ref/resource", ref.uri, req.argument.name, req.argument.value
            )
        else:
            completion = Completion.from_values([])
        return {"completion": completion.to_wire()}

    # -- logging --------------------------------------------------------------

    def _set_level(self, params: dict[str, Any]) -> dict[str, Any]:
        req = _validate(SetLevelParams, params)
        try:
            level = LogLevel(req.level)
        except ValueError:
            accepted = ", ".join(lvl.value for lvl in LogLevel)
            raise InvalidParamsError(data=f"Invalid log level. Must be one of: {accepted}") from None
        self._log_state.set(level)
        logger.info("log level set to %s", level.value)
        return {}
