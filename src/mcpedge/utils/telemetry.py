"""OpenTelemetry tracing helpers for mcpedge.

The gate and the dispatcher only ever touch the OpenTelemetry *API*; with no
SDK installed, ``get_tracer()`` hands out no-op tracers and every span is
free. ``mcpedge serve`` calls :func:`configure_telemetry` when telemetry is
enabled, which needs the ``otel`` extra (``pip install mcpedge[otel]``).

Span layout::

    mcp.http                      one per HTTP exchange on the endpoint
      mcp.http.status
      mcp.message_kind
      mcp.dispatch                one per JSON-RPC request
        mcp.method
        mcp.request_id
        mcp.error_code            only when the response is an error
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from mcpedge.config.models import TelemetrySettings

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request_id"
ATTR_ERROR_CODE = "mcp.error_code"
ATTR_MESSAGE_KIND = "mcp.message_kind"
ATTR_HTTP_STATUS = "mcp.http.status"

_INSTRUMENTATION_NAME = "mcpedge"

_SDK_HINT = "Install it with: pip install mcpedge[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, falling back to the package-wide instrumentation name."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(settings: TelemetrySettings, *, service_name: str) -> Any:
    """Install a global ``TracerProvider`` built from *settings*.

    Spans go to stdout when ``export_to_console`` is set and to an OTLP/gRPC
    collector when ``otlp_endpoint`` is set; both may be active. Returns the
    provider so callers can flush or shut it down.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required to export mcpedge traces. {_SDK_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if settings.export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if settings.otlp_endpoint:
        exporter = _otlp_exporter(settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return provider


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export to {endpoint}. {_SDK_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
