"""Runtime settings for the outcome library.

All settings can be overridden via environment variables with the
OUTCOME_ prefix. Example: OUTCOME_LOG_LEVEL=DEBUG, OUTCOME_LOG_JSON=true
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class OutcomeSettings(BaseSettings):
    """Logging and tracing configuration."""

    model_config = {"env_prefix": "OUTCOME_"}

    log_level: str = Field(default="WARNING", description="Minimum log level")
    log_json: bool = Field(default=False, description="Render log events as JSON")
    trace_failures: bool = Field(
        default=False, description="Emit a debug event when a failure is captured"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> OutcomeSettings:
    """Return the process-wide settings, read once from the environment."""
    return OutcomeSettings()


def failure_tracing_enabled() -> bool:
    """Whether captured failures should be logged.

    Invalid OUTCOME_* values disable tracing instead of raising, so the
    capture path of every outcome operation cannot fail on configuration.
    """
    try:
        return get_settings().trace_failures
    except ValidationError:
        return False
