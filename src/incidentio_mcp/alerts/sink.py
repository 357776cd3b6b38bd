"""Alert sinks — deliver an :class:`AlertPayload` to the outside world.

:class:`AlertSink` is the contract the ``send_alert`` tool depends on.
:class:`IncidentIOAlertSink` posts to an incident.io HTTP alert source with a
bearer token.  Each call makes exactly one attempt; retry policy, if any,
belongs to callers outside this package.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from incidentio_mcp.alerts.errors import AlertSinkError
from incidentio_mcp.utils.telemetry import ATTR_ALERT_STATUS, ATTR_HTTP_STATUS, get_tracer

if TYPE_CHECKING:
    from incidentio_mcp.alerts.models import AlertPayload
    from incidentio_mcp.config import ServerConfig

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


@runtime_checkable
class AlertSink(Protocol):
    """Delivers alert payloads; raises :class:`AlertSinkError` on failure."""

    async def send(self, payload: AlertPayload) -> None: ...


class DryRunAlertSink:
    """Logs alerts instead of delivering them; never fails."""

    def __init__(self) -> None:
        self.sent: list[AlertPayload] = []

    async def send(self, payload: AlertPayload) -> None:
        self.sent.append(payload)
        logger.info("Dry run, alert not delivered: %s", payload.to_wire())


class IncidentIOAlertSink:
    """Posts alerts to an incident.io HTTP alert source.

    Satisfies the :class:`AlertSink` protocol.

    Usage::

        config = ServerConfig.from_env()
        async with IncidentIOAlertSink(config) as sink:
            await sink.send(AlertPayload(title="DB down", deduplication_key="db-1"))
    """

    def __init__(self, config: ServerConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> IncidentIOAlertSink:
        self._client = httpx.AsyncClient(timeout=self._config.timeout)
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "IncidentIOAlertSink must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def send(self, payload: AlertPayload) -> None:
        """POST *payload* to the webhook; any non-2xx status is a failure."""
        headers = {
            "Authorization": f"Bearer {self._config.api_token.get_secret_value()}",
            "Content-Type": "application/json",
        }
        with _tracer.start_as_current_span("incidentio.send_alert") as span:
            span.set_attribute(ATTR_ALERT_STATUS, payload.status)
            try:
                response = await self._http().post(
                    self._config.webhook_url,
                    json=payload.to_wire(),
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                raise AlertSinkError(f"failed to send request: {exc}") from exc

            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
            if not 200 <= response.status_code < 300:
                raise AlertSinkError(f"unexpected status code: {response.status_code}")

        logger.info(
            "Alert delivered: %s (key: %s, status: %s)",
            payload.title,
            payload.deduplication_key,
            payload.status,
        )
