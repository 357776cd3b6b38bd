"""The ``send_alert`` tool — schema plus the handler that drives an :class:`AlertSink`."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from incidentio_mcp.alerts.errors import AlertSinkError
from incidentio_mcp.alerts.models import ALERT_STATUSES, DEFAULT_STATUS, SendAlertArguments
from incidentio_mcp.protocol.catalog import Tool
from incidentio_mcp.protocol.errors import InternalError, InvalidParamsError, describe_validation_error
from incidentio_mcp.protocol.models import ToolCallResult, ToolDescriptor

if TYPE_CHECKING:
    from incidentio_mcp.alerts.sink import AlertSink

logger = logging.getLogger(__name__)

SEND_ALERT = "send_alert"

SEND_ALERT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "Alert title",
        },
        "description": {
            "type": "string",
            "description": "Alert description",
        },
        "deduplication_key": {
            "type": "string",
            "description": "Unique key to deduplicate alerts",
        },
        "status": {
            "type": "string",
            "description": "Alert status",
            "enum": list(ALERT_STATUSES),
            "default": DEFAULT_STATUS,
        },
        "metadata": {
            "type": "object",
            "description": "Additional metadata",
            "additionalProperties": True,
        },
    },
    "required": ["title", "deduplication_key"],
}


def send_alert_tool(sink: AlertSink) -> Tool:
    """Build the ``send_alert`` tool bound to *sink*."""

    async def handler(arguments: dict[str, Any]) -> ToolCallResult:
        try:
            args = SendAlertArguments.model_validate(arguments)
        except ValidationError as exc:
            raise InvalidParamsError(describe_validation_error(exc)) from exc

        payload = args.to_payload()
        try:
            await sink.send(payload)
        except AlertSinkError as exc:
            raise InternalError(f"Failed to send alert: {exc.reason}") from exc

        return ToolCallResult.from_text(
            f"Alert sent successfully: {payload.title} "
            f"(key: {payload.deduplication_key}, status: {payload.status})"
        )

    descriptor = ToolDescriptor(
        name=SEND_ALERT,
        description="Send an alert to incident.io",
        input_schema=copy.deepcopy(SEND_ALERT_SCHEMA),
    )
    return Tool(descriptor=descriptor, handler=handler)
