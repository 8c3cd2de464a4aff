"""
Environment settings for partman.

Values come from ``PARTMAN_*`` environment variables (or a ``.env`` file in
the working directory). Command-line flags take precedence over these.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PartmanSettings(BaseSettings):
    """Process settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="PARTMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config: Optional[Path] = Field(
        default=None,
        description="User configuration file parsed instead of the built-in default",
    )
    log_level: Literal["debug", "info", "warn", "warning", "error"] = Field(
        default="info",
        description="Logging level for the partman logger",
    )
    fallback_to_default: bool = Field(
        default=False,
        description="Load the built-in configuration when the user file fails to parse",
    )
    production_url: Optional[str] = Field(
        default=None,
        description="Base URL of the production parts server",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


def get_settings() -> PartmanSettings:
    """Read settings from the current environment."""
    return PartmanSettings()
