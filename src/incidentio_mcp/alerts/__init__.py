"""Alert delivery — payload models, sinks and the ``send_alert`` tool."""

from incidentio_mcp.alerts.errors import AlertSinkError
from incidentio_mcp.alerts.models import AlertPayload, SendAlertArguments
from incidentio_mcp.alerts.sink import AlertSink, DryRunAlertSink, IncidentIOAlertSink
from incidentio_mcp.alerts.tool import SEND_ALERT, send_alert_tool

__all__ = [
    "SEND_ALERT",
    "AlertPayload",
    "AlertSink",
    "AlertSinkError",
    "DryRunAlertSink",
    "IncidentIOAlertSink",
    "SendAlertArguments",
    "send_alert_tool",
]
