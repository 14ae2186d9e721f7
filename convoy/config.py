"""Convoy configuration management."""

import logging
import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConvoySettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Templates
    template_dir: Optional[str] = Field(
        default=None,
        description="Directory with roles/ and messages/ templates (bundled set if unset)",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Log level for the CLI")
    log_file: Optional[str] = Field(default=None, description="Also write logs to this file")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    model_config = {"env_prefix": "CONVOY_", "env_file": ".env", "extra": "ignore"}


def load_settings() -> ConvoySettings:
    """Load settings from environment."""
    settings = ConvoySettings()

    logger = logging.getLogger("convoy.config")
    if settings.template_dir and not os.path.isdir(os.path.expanduser(settings.template_dir)):
        logger.warning(
            f"CONVOY_TEMPLATE_DIR={settings.template_dir} does not exist. "
            "Template rendering will fail until it is created."
        )

    return settings
