"""Server configuration — models and YAML loading."""

from mcpedge.config.errors import ConfigError
from mcpedge.config.loader import ConfigLoader
from mcpedge.config.models import (
    INITIALIZE_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSION,
    ServerConfig,
    TelemetrySettings,
)

__all__ = [
    "INITIALIZE_PROTOCOL_VERSION",
    "SUPPORTED_PROTOCOL_VERSION",
    "ConfigError",
    "ConfigLoader",
    "ServerConfig",
    "TelemetrySettings",
]
