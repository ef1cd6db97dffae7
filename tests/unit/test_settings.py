"""
Unit Tests for Settings and Logging
===================================

Unit tests for environment driven settings and the logging setup.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from card_render.config.logging import (
    QUIET_LOGGERS,
    add_app_context,
    build_processors,
    get_logger,
    get_logging_config,
)
from card_render.config.settings import Settings, get_settings, reload_settings


class TestSettings:
    """Test settings parsing and validation."""

    def test_defaults(self):
        settings = Settings()

        assert settings.host_config_path is None
        assert settings.supports_interactivity is None
        assert settings.markdown_extensions == ["sane_lists"]
        assert settings.page_title == "Adaptive Card"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("CARD_RENDER_PAGE_TITLE", "Preview")
        monkeypatch.setenv("CARD_RENDER_HOST_CONFIG_PATH", "/etc/cards/host.yaml")

        settings = Settings()

        assert settings.page_title == "Preview"
        assert settings.host_config_path == Path("/etc/cards/host.yaml")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("tables", ["tables"]),
            ("tables, sane_lists", ["tables", "sane_lists"]),
            ('["tables", "nl2br"]', ["tables", "nl2br"]),
            ("", []),
        ],
    )
    def test_markdown_extensions_from_text(self, value, expected):
        assert Settings(markdown_extensions=value).markdown_extensions == expected

    def test_environment_validated(self):
        assert Settings(environment="Production").environment == "production"
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_log_level_validated(self):
        assert Settings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_host_config_suffix_validated(self):
        assert Settings(host_config_path="host.yml").host_config_path == Path("host.yml")
        with pytest.raises(ValidationError):
            Settings(host_config_path="host.toml")

    def test_debug_forces_debug_level(self):
        assert Settings(log_level="WARNING").effective_log_level == "WARNING"
        assert Settings(log_level="WARNING", debug=True).effective_log_level == "DEBUG"

    def test_reload_settings(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("CARD_RENDER_PAGE_TITLE", "Reloaded")

        second = reload_settings()

        assert second is not first
        assert get_settings() is second
        assert second.page_title == "Reloaded"


class TestLoggingConfig:
    """Test logging configuration per environment."""

    def test_console_format_outside_production(self):
        config = get_logging_config(Settings(environment="testing", log_level="INFO"))

        assert config["handlers"]["console"]["formatter"] == "console"
        assert config["loggers"][""]["level"] == "INFO"

    def test_json_format_in_production(self):
        config = get_logging_config(Settings(environment="production"))

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["()"] == "pythonjsonlogger.jsonlogger.JsonFormatter"

    def test_library_loggers_quieted(self):
        config = get_logging_config(Settings())

        for name in QUIET_LOGGERS:
            assert config["loggers"][name]["level"] == "WARNING"

    def test_production_processors_render_json(self):
        processors = build_processors(Settings(environment="production"))

        assert add_app_context in processors
        assert type(processors[-1]).__name__ == "JSONRenderer"

    def test_add_app_context(self):
        event = add_app_context(None, "info", {"event": "Rendering card"})

        assert event["app"] == "Card Render"
        assert event["version"] == "1.0.0"

    def test_get_logger(self):
        logger = get_logger("card_render.tests")

        logger.info("Logger works", card="test")
