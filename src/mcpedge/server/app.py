"""FastAPI application wiring the transport gate to HTTP routes."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from mcpedge import __version__
from mcpedge.config.models import ServerConfig
from mcpedge.registry.builtin import build_default_registry
from mcpedge.registry.registry import CapabilityRegistry
from mcpedge.server.dispatcher import MethodDispatcher
from mcpedge.server.logging_state import LogLevel, LogLevelState
from mcpedge.server.transport import HttpRequest, TransportGate

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = (
    "Content-Type, Authorization, Accept, MCP-Protocol-Version, Mcp-Session-Id, Last-Event-ID"
)
# Everything except OPTIONS, which the preflight route answers for every path.
_ENDPOINT_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def create_app(
    config: ServerConfig | None = None,
    *,
    registry: CapabilityRegistry | None = None,
    log_state: LogLevelState | None = None,
) -> FastAPI:
    """Build the HTTP app.

    The dispatcher, gate and registry are created once and shared by every
    request; they are exposed on ``app.state`` for inspection.
    """
    cfg = config or ServerConfig()
    reg = registry or build_default_registry(cfg)
    state = log_state or LogLevelState(LogLevel(cfg.log_level), logger=logging.getLogger("mcpedge"))
    dispatcher = MethodDispatcher(reg, cfg, log_state=state)
    gate = TransportGate(dispatcher, cfg)

    app = FastAPI(title=cfg.title, version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = cfg
    app.state.registry = reg
    app.state.dispatcher = dispatcher
    app.state.gate = gate

    @app.options("/{path:path}")
    async def preflight(path: str) -> Response:
        return Response(
            headers={
                "Access-Control-Allow-Origin": cfg.allow_origin,
                "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
                "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            }
        )

    @app.api_route(cfg.endpoint, methods=_ENDPOINT_METHODS)
    async def mcp_endpoint(request: Request) -> Response:
        body = await request.body()
        reply = gate.handle(HttpRequest(request.method, dict(request.headers), body))
        return Response(content=reply.body, status_code=reply.status, headers=reply.headers)

    @app.api_route("/", methods=_ENDPOINT_METHODS)
    async def server_info(request: Request) -> Response:
        if request.method != "GET":
            return PlainTextResponse("Not Found", status_code=404)
        return JSONResponse(
            {
                "name": cfg.name,
                "title": cfg.title,
                "version": cfg.version,
                "protocol": cfg.protocol_version,
                "transport": "streamable-http",
                "endpoint": cfg.endpoint,
            },
            headers={"Access-Control-Allow-Origin": cfg.allow_origin},
        )

    @app.api_route("/{path:path}", methods=_ENDPOINT_METHODS, include_in_schema=False)
    async def not_found(path: str) -> Response:
        return PlainTextResponse("Not Found", status_code=404)

    logger.debug("app ready: %s on %s", cfg.name, cfg.endpoint)
    return app
