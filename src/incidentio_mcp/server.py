"""MCPServer — wires the catalog, session and dispatcher into a serve loop."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from incidentio_mcp.alerts.sink import DryRunAlertSink, IncidentIOAlertSink
from incidentio_mcp.alerts.tool import send_alert_tool
from incidentio_mcp.protocol.catalog import ToolCatalog
from incidentio_mcp.protocol.dispatcher import MethodDispatcher
from incidentio_mcp.protocol.session import Session
from incidentio_mcp.protocol.transport import Framing, MessageReader, ResponseWriter

if TYPE_CHECKING:
    from incidentio_mcp.alerts.sink import AlertSink
    from incidentio_mcp.config import ServerConfig
    from incidentio_mcp.protocol.models import JsonRpcRequest, JsonRpcResponse

logger = logging.getLogger(__name__)


def build_default_catalog(sink: AlertSink) -> ToolCatalog:
    """The tools this server exposes: just ``send_alert``."""
    return ToolCatalog([send_alert_tool(sink)])


class MCPServer:
    """One client session served over a reader/writer pair.

    Requests are handled strictly one at a time: each is dispatched and
    answered before the next message is read.

    Usage::

        server = MCPServer(build_default_catalog(sink))
        await server.serve(MessageReader(stdin), ResponseWriter(stdout))
    """

    def __init__(self, catalog: ToolCatalog, *, session: Session | None = None) -> None:
        self.catalog = catalog
        self.session = session or Session()
        self.dispatcher = MethodDispatcher(catalog)

    async def handle(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        return await self.dispatcher.dispatch(request, self.session)

    async def serve(self, reader: MessageReader, writer: ResponseWriter) -> None:
        """Run until *reader* reaches end of stream."""
        async for request in reader:
            response = await self.handle(request)
            if response is not None:
                writer.write(response)
        logger.info("Input stream closed")


async def run_stdio(
    config: ServerConfig,
    framing: Framing = Framing.NDJSON,
    *,
    dry_run: bool = False,
) -> None:
    """Serve on the process's stdin/stdout.

    Alerts go to incident.io, or only to the log when *dry_run* is set.
    """
    if dry_run:
        await _serve_stdio(DryRunAlertSink(), framing)
        return
    async with IncidentIOAlertSink(config) as sink:
        await _serve_stdio(sink, framing)


async def _serve_stdio(sink: AlertSink, framing: Framing) -> None:
    server = MCPServer(build_default_catalog(sink))
    reader = MessageReader(sys.stdin.buffer, framing)
    writer = ResponseWriter(sys.stdout.buffer, framing)
    logger.info("incidentio-alert-mcp serving on stdio (%s)", framing.value)
    await server.serve(reader, writer)
