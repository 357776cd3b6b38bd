"""Shared fixtures: in-memory alert sinks and a wired-up server."""

from __future__ import annotations

from typing import Any

import pytest

from incidentio_mcp.alerts.errors import AlertSinkError
from incidentio_mcp.alerts.models import AlertPayload
from incidentio_mcp.protocol.dispatcher import MethodDispatcher
from incidentio_mcp.protocol.models import JsonRpcRequest
from incidentio_mcp.protocol.session import Session
from incidentio_mcp.server import MCPServer, build_default_catalog


class RecordingSink:
    """Accepts every alert and remembers it."""

    def __init__(self) -> None:
        self.sent: list[AlertPayload] = []

    async def send(self, payload: AlertPayload) -> None:
        self.sent.append(payload)


class FailingSink:
    """Rejects every alert with a fixed reason."""

    def __init__(self, reason: str = "upstream exploded") -> None:
        self.reason = reason
        self.calls = 0

    async def send(self, payload: AlertPayload) -> None:
        self.calls += 1
        raise AlertSinkError(self.reason)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def dispatcher(sink: RecordingSink) -> MethodDispatcher:
    return MethodDispatcher(build_default_catalog(sink))


@pytest.fixture
def server(sink: RecordingSink) -> MCPServer:
    return MCPServer(build_default_catalog(sink))


@pytest.fixture
def make_request():
    def _make(method: str, params: Any = None, **kwargs: Any) -> JsonRpcRequest:
        data: dict[str, Any] = {"jsonrpc": "2.0", "method": method, **kwargs}
        if params is not None:
            data["params"] = params
        return JsonRpcRequest.model_validate(data)

    return _make
