"""Alert delivery error types."""


class AlertSinkError(Exception):
    """The alert sink could not deliver a payload."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
