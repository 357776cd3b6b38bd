"""Alert models — the ``send_alert`` arguments and the payload posted upstream."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, JsonValue, field_validator

AlertStatus = Literal["firing", "resolved"]

DEFAULT_STATUS: AlertStatus = "firing"
ALERT_STATUSES: tuple[AlertStatus, ...] = ("firing", "resolved")


class AlertPayload(BaseModel):
    """An alert event as accepted by an incident.io HTTP alert source."""

    title: str = Field(min_length=1)
    description: str | None = None
    deduplication_key: str = Field(min_length=1)
    status: AlertStatus = DEFAULT_STATUS
    metadata: dict[str, JsonValue] | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON body for the webhook; unset optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class SendAlertArguments(BaseModel):
    """Arguments of the ``send_alert`` tool.

    ``status`` is left unset when the caller omits it (an empty string counts
    as omitted); :meth:`to_payload` resolves it to :data:`DEFAULT_STATUS`.
    """

    title: str = Field(min_length=1)
    description: str | None = None
    deduplication_key: str = Field(min_length=1)
    status: AlertStatus | None = None
    metadata: dict[str, JsonValue] | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def to_payload(self) -> AlertPayload:
        return AlertPayload(
            title=self.title,
            description=self.description,
            deduplication_key=self.deduplication_key,
            status=self.status or DEFAULT_STATUS,
            metadata=self.metadata,
        )
