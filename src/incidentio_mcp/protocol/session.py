"""Session — tracks the ``initialize`` handshake for the single connected client."""

from __future__ import annotations

import logging
from enum import Enum

from incidentio_mcp import __version__
from incidentio_mcp.protocol.models import (
    ClientInfo,
    InitializeParams,
    InitializeResult,
    ServerCapabilities,
    ServerInfo,
    ToolsCapability,
)

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "incidentio-alert-mcp"


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class Session:
    """Handshake state for one client connection.

    ``UNINITIALIZED`` moves to ``INITIALIZED`` on ``initialize`` and stays
    there.  Repeating ``initialize`` re-runs the transition.  Tool calls are
    not gated on the state; only the handshake bookkeeping lives here.
    """

    def __init__(
        self,
        *,
        server_name: str = SERVER_NAME,
        server_version: str = __version__,
    ) -> None:
        self._server_info = ServerInfo(name=server_name, version=server_version)
        self.state = SessionState.UNINITIALIZED
        self.client_info: ClientInfo | None = None
        self.client_protocol_version: str | None = None
        self.client_ready = False

    @property
    def initialized(self) -> bool:
        return self.state is SessionState.INITIALIZED

    def initialize(self, params: InitializeParams) -> InitializeResult:
        """Apply the handshake and return the capability negotiation result."""
        if self.initialized:
            logger.info("Repeated initialize; re-running handshake")

        self.client_info = params.client_info
        self.client_protocol_version = params.protocol_version
        self.state = SessionState.INITIALIZED

        if params.client_info is not None:
            logger.info(
                "Client %s %s initialized (protocol %s)",
                params.client_info.name or "?",
                params.client_info.version or "?",
                params.protocol_version or "unspecified",
            )

        return InitializeResult(
            protocol_version=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability(list_changed=True)),
            server_info=self._server_info,
        )

    def acknowledge(self) -> None:
        """Record the client's ``initialized`` notification."""
        if not self.initialized:
            logger.warning("Client sent 'initialized' before 'initialize'; accepting")
        self.client_ready = True
        logger.info("Client initialized")
