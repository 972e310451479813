"""Runtime configuration for tutorchat.

Centralizes the gateway address and timeout policy. Values come from the
environment (a .env file is loaded by the CLI) and can be overridden by
explicit arguments.

Environment variables:
    TUTOR_GATEWAY_URL: Endpoint messages are POSTed to
        (default: http://localhost:3000/api/gemini)
    TUTOR_GATEWAY_TIMEOUT: Seconds to wait for a reply; 0 or 'none' waits forever
        (default: 30)
    TUTORCHAT_LOG_LEVEL: Log panel level (debug, info, warning, error); unset hides it
"""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_GATEWAY_URL = "http://localhost:3000/api/gemini"
DEFAULT_TIMEOUT_SECONDS = 30.0

LOG_LEVELS = ("debug", "info", "warning", "error")


class TutorChatConfig(BaseModel):
    """Validated tutorchat settings."""

    model_config = ConfigDict(frozen=True)

    gateway_url: str = Field(default=DEFAULT_GATEWAY_URL, description="Tutor gateway endpoint")
    timeout: float | None = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait for the gateway, None for no limit"
    )
    log_level: str | None = Field(default=None, description="Log panel level, None to hide")

    @field_validator("gateway_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Gateway URL must start with http:// or https://, got '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'. Choose one of: {', '.join(LOG_LEVELS)}")
        return value


def parse_timeout(raw: str | float | None) -> float | None:
    """Turn a timeout setting into seconds; 0, '' and 'none' mean no limit."""
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip().lower()
        if raw in ("", "none", "off"):
            return None
        raw = float(raw)
    return None if raw == 0 else float(raw)


def load_config(**overrides: Any) -> TutorChatConfig:
    """Build the configuration from the environment.

    Args:
        **overrides: Explicit values (e.g. from CLI options); None entries are ignored

    Returns:
        Validated TutorChatConfig

    Raises:
        pydantic.ValidationError: If a value is invalid
        ValueError: If TUTOR_GATEWAY_TIMEOUT is not a number
    """
    values: dict[str, Any] = {}

    url = os.getenv("TUTOR_GATEWAY_URL")
    if url:
        values["gateway_url"] = url

    timeout = os.getenv("TUTOR_GATEWAY_TIMEOUT")
    if timeout is not None:
        values["timeout"] = parse_timeout(timeout)

    log_level = os.getenv("TUTORCHAT_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level

    values.update({key: value for key, value in overrides.items() if value is not None})
    if "timeout" in overrides and overrides["timeout"] is not None:
        values["timeout"] = parse_timeout(overrides["timeout"])

    return TutorChatConfig(**values)
