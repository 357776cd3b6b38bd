"""Tracing for request dispatch and alert delivery.

Modules take a tracer from :func:`get_tracer` at import time. Until
:func:`configure_telemetry` installs an SDK provider (``serve --telemetry``),
the OpenTelemetry API hands out non-recording spans.

Stdout is the protocol stream, so console spans go to stderr.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request.id"
ATTR_NOTIFICATION = "mcp.notification"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_ERROR_CODE = "mcp.error.code"
ATTR_ALERT_STATUS = "incidentio.alert.status"
ATTR_HTTP_STATUS = "http.response.status_code"

_INSTRUMENTATION_NAME = "incidentio_mcp"
_INSTALL_HINT = "pip install incidentio-alert-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "incidentio-alert-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider for the server process.

    Console spans are exported synchronously to stderr. With *otlp_endpoint*
    set, spans are also batched to that OTLP/gRPC collector.

    Raises :class:`ImportError` naming the missing package when the ``otel``
    extra is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for tracing. Install it with: {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(export_to_console, otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(export_to_console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. Install it with: {_INSTALL_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
