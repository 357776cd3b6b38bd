"""``incidentio-mcp serve`` — run the MCP server on stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

import click

from incidentio_mcp.cli_commands._output import configure_logging, err_console

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--framing",
    type=click.Choice(["ndjson", "content-length"]),
    default="ndjson",
    help="Message framing on stdin/stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every message at DEBUG level.")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
@click.option("--otlp-endpoint", default=None, help="Export spans via OTLP to this endpoint.")
@click.option("--dry-run", is_flag=True, help="Log alerts instead of sending them.")
def serve(
    framing: str,
    verbose: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
    dry_run: bool,
) -> None:
    """Serve the send_alert tool over stdio until end of input.

    Requires INCIDENTIO_WEBHOOK_URL and INCIDENTIO_API_TOKEN in the environment.
    """
    from incidentio_mcp.config import ENV_LOG_LEVEL, ConfigurationError, ServerConfig
    from incidentio_mcp.protocol.errors import TransportError
    from incidentio_mcp.protocol.transport import Framing
    from incidentio_mcp.server import run_stdio

    level = "DEBUG" if verbose else os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
    configure_logging(level)

    try:
        config = ServerConfig.from_env()
    except ConfigurationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if telemetry or otlp_endpoint:
        from incidentio_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                export_to_console=otlp_endpoint is None,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    logger.info("incidentio-alert-mcp server starting...")
    try:
        asyncio.run(run_stdio(config, Framing(framing), dry_run=dry_run))
    except KeyboardInterrupt:
        logger.info("incidentio-alert-mcp server interrupted")
        _exit_now(130)
    except (OSError, TransportError) as exc:
        logger.error("Input stream failed: %s", exc)
        sys.exit(1)
    logger.info("incidentio-alert-mcp server stopped")


def _exit_now(status: int) -> None:
    """Flush output and leave without waiting on the stdin reader thread."""
    logging.shutdown()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(status)
