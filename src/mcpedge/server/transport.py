"""TransportGate — HTTP-level checks in front of the dispatcher.

Framework-free: it consumes an :class:`HttpRequest` and produces an
:class:`HttpReply`, so the FastAPI app (and the CLI) only adapt to and from
these two dataclasses.

Order of checks for the MCP endpoint:

1. ``MCP-Protocol-Version`` header, when present, must match exactly.
2. Only POST carries JSON-RPC; GET, DELETE and every other verb get 405.
3. POST must accept ``application/json``.
4. The body is decoded as strict JSON (``NaN`` and ``Infinity`` are refused)
   and classified; responses and notifications are acknowledged with 202,
   requests go to the dispatcher.

Any exception escaping these steps becomes a 500 ``Internal error``
envelope with ``id: null``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

from mcpedge.protocol.classifier import MessageKind, classify, envelope_id
from mcpedge.protocol.errors import INTERNAL_ERROR, INVALID_REQUEST
from mcpedge.protocol.models import JsonRpcError, JsonRpcErrorResponse
from mcpedge.utils.telemetry import ATTR_HTTP_STATUS, ATTR_MESSAGE_KIND, get_tracer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mcpedge.config.models import ServerConfig
    from mcpedge.server.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"
PROTOCOL_VERSION_HEADER = "mcp-protocol-version"


@dataclass(frozen=True)
class HttpRequest:
    """The parts of an HTTP request the gate looks at."""

    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@dataclass(frozen=True)
class HttpReply:
    """Status, headers and raw body of an HTTP response."""

    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def json(cls, status: int, payload: Any, headers: dict[str, str] | None = None) -> HttpReply:
        body = json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
        return cls(status, body, {**(headers or {}), "Content-Type": JSON_CONTENT_TYPE})

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


class TransportRejection(Exception):
    """A request refused at the HTTP layer, before any JSON-RPC handling."""

    def __init__(self, status: int, reason: str, *, allow: str | None = None) -> None:
        self.status = status
        self.reason = reason
        self.allow = allow
        super().__init__(f"{status} {reason}")

    def to_reply(self, headers: dict[str, str]) -> HttpReply:
        extra = {"Allow": self.allow} if self.allow else {}
        return HttpReply(
            self.status,
            self.reason.encode("utf-8"),
            {**headers, **extra, "Content-Type": "text/plain; charset=utf-8"},
        )


def _reject_constant(name: str) -> Any:
    msg = f"Invalid JSON constant: {name}"
    raise ValueError(msg)


def _error_envelope(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error = JsonRpcError(code=code, message=message, data=data)
    return JsonRpcErrorResponse(id=request_id, error=error).to_wire()


class TransportGate:
    """Validates and routes one HTTP exchange on the MCP endpoint.

    Usage::

        gate = TransportGate(dispatcher, config)
        reply = gate.handle(HttpRequest("POST", {"Accept": "application/json"}, body))
    """

    def __init__(self, dispatcher: MethodDispatcher, config: ServerConfig) -> None:
        self._dispatcher = dispatcher
        self._config = config
        self._base_headers = {"Access-Control-Allow-Origin": config.allow_origin}

    def handle(self, request: HttpRequest) -> HttpReply:
        with _tracer.start_as_current_span("mcp.http") as span:
            try:
                reply = self._handle(request)
            except TransportRejection as rejection:
                logger.info("rejected %s: %s", request.method, rejection)
                reply = rejection.to_reply(self._base_headers)
            except Exception as exc:
                logger.exception("Unhandled error on %s", request.method)
                reply = HttpReply.json(
                    500,
                    _error_envelope(None, INTERNAL_ERROR, "Internal error", str(exc)),
                    self._base_headers,
                )
            span.set_attribute(ATTR_HTTP_STATUS, reply.status)
            return reply

    def _handle(self, request: HttpRequest) -> HttpReply:
        version = request.header(PROTOCOL_VERSION_HEADER)
        if version and version != self._config.protocol_version:
            raise TransportRejection(400, "Unsupported MCP protocol version")

        verb = request.method.upper()
        if verb == "POST":
            return self._post(request)
        if verb == "GET":
            accept = request.header("accept") or ""
            if EVENT_STREAM_CONTENT_TYPE in accept:
                logger.debug("GET stream requested; streaming is not offered")
            raise TransportRejection(405, "Method Not Allowed", allow="POST")
        if verb == "DELETE":
            logger.debug("DELETE received; there is no session to terminate")
        raise TransportRejection(405, "Method Not Allowed", allow="POST")

    def _post(self, request: HttpRequest) -> HttpReply:
        accept = request.header("accept") or ""
        if JSON_CONTENT_TYPE not in accept:
            return HttpReply.json(
                400,
                _error_envelope(None, INVALID_REQUEST, "Must accept application/json"),
                self._base_headers,
            )

        message = json.loads(request.body, parse_constant=_reject_constant)
        kind = classify(message)
        trace.get_current_span().set_attribute(ATTR_MESSAGE_KIND, kind.value)

        if kind in (MessageKind.RESPONSE, MessageKind.NOTIFICATION):
            logger.debug("acknowledged %s", kind.value)
            return HttpReply(202, b"", dict(self._base_headers))
        if kind is MessageKind.MALFORMED:
            request_id = envelope_id(message)
            if not isinstance(request_id, (str, int, float)) or isinstance(request_id, bool):
                request_id = None
            return HttpReply.json(
                200,
                _error_envelope(request_id, INVALID_REQUEST, "Invalid Request"),
                self._base_headers,
            )
        return HttpReply.json(200, self._dispatcher.dispatch(message), self._base_headers)
