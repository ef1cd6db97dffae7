"""
Renderer Settings
=================

Process-wide settings for the card renderer, read from ``CARD_RENDER_*``
environment variables or a ``.env`` file.

Settings select the host configuration file, can force interactivity on or off
for every render, choose the Python-Markdown extensions used for text blocks
and control logging.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "testing", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
HOST_CONFIG_SUFFIXES = (".json", ".yaml", ".yml")


class Settings(BaseSettings):
    """Card renderer settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="CARD_RENDER_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    app_name: str = Field(default="Card Render", description="Name used in log records")
    app_version: str = Field(default="1.0.0", description="Version used in log records")
    environment: str = Field(default="development", description=f"One of {', '.join(ENVIRONMENTS)}")
    debug: bool = Field(default=False, description="Log render passes at debug level")
    log_level: str = Field(default="INFO", description="Root logging level")

    host_config_path: Optional[Path] = Field(
        default=None, description="JSON or YAML host configuration; built-in defaults when unset"
    )
    supports_interactivity: Optional[bool] = Field(
        default=None, description="Force the host configuration interactivity flag"
    )
    markdown_extensions: List[str] = Field(
        default=["sane_lists"], description="Python-Markdown extensions applied to text blocks"
    )
    page_title: str = Field(default="Adaptive Card", description="Title of rendered HTML pages")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate the deployment environment."""
        v = v.lower()
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {', '.join(ENVIRONMENTS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return v

    @field_validator("host_config_path")
    @classmethod
    def validate_host_config_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Host configs are read as JSON or YAML, chosen by suffix."""
        if v is not None and v.suffix.lower() not in HOST_CONFIG_SUFFIXES:
            raise ValueError(f"Host config must be one of: {', '.join(HOST_CONFIG_SUFFIXES)}")
        return v

    @field_validator("markdown_extensions", mode="before")
    @classmethod
    def parse_markdown_extensions(cls, v: Union[str, List[str]]) -> List[str]:
        """Accept a JSON list (``["tables"]``) or a comma separated string."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @property
    def effective_log_level(self) -> str:
        """Logging level after the debug switch is applied."""
        return "DEBUG" if self.debug else self.log_level


# Global settings instance - will be initialized when needed
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Re-read settings from the environment."""
    global settings
    settings = Settings()
    return settings
