"""Server configuration — the alert endpoint and its credential.

Built once at startup from the environment and passed explicitly to the
alert sink.  There are no fallback defaults for the endpoint or token.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from incidentio_mcp.protocol.errors import describe_validation_error

ENV_WEBHOOK_URL = "INCIDENTIO_WEBHOOK_URL"
ENV_API_TOKEN = "INCIDENTIO_API_TOKEN"
ENV_TIMEOUT = "INCIDENTIO_TIMEOUT"
ENV_LOG_LEVEL = "INCIDENTIO_MCP_LOG_LEVEL"

DEFAULT_TIMEOUT = 10.0


class ConfigurationError(Exception):
    """Required startup configuration is missing or invalid."""

    def __init__(self, detail: str, missing: list[str] | None = None) -> None:
        self.detail = detail
        self.missing = missing or []
        super().__init__(detail)


class ServerConfig(BaseModel):
    """Outbound alert endpoint settings."""

    model_config = {"frozen": True}

    webhook_url: str
    api_token: SecretStr
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("webhook_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            msg = "webhook URL must start with http:// or https://"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Read the configuration from *environ* (defaults to ``os.environ``).

        Raises
        ------
        ConfigurationError
            If a required variable is unset or empty, or a value is invalid.
        """
        env = os.environ if environ is None else environ
        webhook_url = env.get(ENV_WEBHOOK_URL, "").strip()
        api_token = env.get(ENV_API_TOKEN, "").strip()

        missing = [
            name
            for name, value in ((ENV_WEBHOOK_URL, webhook_url), (ENV_API_TOKEN, api_token))
            if not value
        ]
        if missing:
            msg = f"Missing required environment variable(s): {', '.join(missing)}"
            raise ConfigurationError(msg, missing=missing)

        values: dict[str, object] = {"webhook_url": webhook_url, "api_token": api_token}
        timeout = env.get(ENV_TIMEOUT, "").strip()
        if timeout:
            values["timeout"] = timeout

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            msg = f"Invalid configuration: {describe_validation_error(exc)}"
            raise ConfigurationError(msg) from exc
