"""Pydantic models for the server config YAML consumed by ``mcpedge serve``."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

SUPPORTED_PROTOCOL_VERSION = "2025-06-18"
INITIALIZE_PROTOCOL_VERSION = "2025-03-26"

LogLevelName = Literal["debug", "info", "warning", "error", "critical"]


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None
    export_to_console: bool = False


class ServerConfig(BaseModel):
    """Identity, protocol versions and HTTP binding of the server.

    ``protocol_version`` gates the ``MCP-Protocol-Version`` request header,
    while ``initialize_protocol_version`` is what ``initialize`` reports.
    The two are deliberately independent.
    """

    name: str = "mcpedge-server"
    title: str = "mcpedge MCP Server"
    version: str = "1.0.0"
    protocol_version: str = SUPPORTED_PROTOCOL_VERSION
    initialize_protocol_version: str = INITIALIZE_PROTOCOL_VERSION
    instructions: str = (
        "A stateless MCP server with tools, resources, prompts, and completion support."
    )
    endpoint: str = Field(default="/mcp", description="Path serving JSON-RPC traffic.")
    host: str = "127.0.0.1"
    port: int = Field(default=8787, ge=0, le=65535)
    allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value.")
    log_level: LogLevelName = "info"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("endpoint")
    @classmethod
    def _endpoint_is_absolute(cls, value: str) -> str:
        if not value.startswith("/") or value == "/":
            msg = "endpoint must be an absolute path other than '/'"
            raise ValueError(msg)
        return value
