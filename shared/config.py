"""Settings shared by the builder's entry points.

The API and the CLI read one environment. This module holds the logging
block both of them hand to ``setup_logging`` and the field helper for
provider credentials.
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BaseSettings(PydanticBaseSettings):
    """Environment-backed settings with the logging block every entry point uses."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(default="playground-builder", description="Value of the `service` log field")
    log_format: Literal["json", "console"] = "console"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    def logging_options(self, service_name: str | None = None) -> dict[str, Any]:
        """Keyword arguments for ``shared.logging.setup_logging``."""
        return {
            "service_name": service_name or self.service_name,
            "log_format": self.log_format,
            "log_level": self.log_level,
        }


def secret_field(env_name: str):
    """Optional provider credential read from ``env_name``; empty when unset.

    Kept out of ``repr`` so a logged settings object never carries the key.
    """
    return Field(default="", alias=env_name, repr=False, description=f"Credential from {env_name}")
