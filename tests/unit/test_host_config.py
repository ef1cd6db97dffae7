"""
Unit Tests for Host Configuration
=================================

Unit tests for host config defaults, color conversion and loading.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from card_render.config.host_config import (
    ActionsConfig,
    HostConfig,
    HostConfigError,
    get_host_config,
    load_host_config,
    to_css_color,
)
from card_render.config.settings import Settings
from card_render.models.schemas import (
    ActionsOrientation,
    HorizontalAlignment,
    Spacing,
    TextColor,
    TextSize,
)


class TestHostConfigDefaults:
    """Test default host configuration values."""

    def test_defaults(self, host_config):
        assert host_config.supports_interactivity is True
        assert host_config.font_family == "Segoe UI"
        assert host_config.spacing.padding == 20
        assert host_config.separator.line_thickness == 1
        assert host_config.actions.max_actions == 5
        assert host_config.actions.button_spacing == 10
        assert host_config.actions.actions_orientation == ActionsOrientation.HORIZONTAL
        assert host_config.actions.action_alignment == HorizontalAlignment.STRETCH
        assert host_config.actions.show_card.inline_top_margin == 16
        assert host_config.fact_set.title.max_width == 150

    @pytest.mark.parametrize(
        "spacing,pixels",
        [
            (Spacing.NONE, 0),
            (Spacing.SMALL, 3),
            (Spacing.DEFAULT, 8),
            (Spacing.MEDIUM, 20),
            (Spacing.LARGE, 30),
            (Spacing.EXTRA_LARGE, 40),
            (Spacing.PADDING, 20),
        ],
    )
    def test_get_spacing(self, host_config, spacing, pixels):
        assert host_config.get_spacing(spacing) == pixels

    @pytest.mark.parametrize(
        "size,pixels",
        [
            (TextSize.SMALL, 12),
            (TextSize.DEFAULT, 14),
            (TextSize.MEDIUM, 17),
            (TextSize.LARGE, 21),
            (TextSize.EXTRA_LARGE, 26),
        ],
    )
    def test_get_font_size(self, host_config, size, pixels):
        assert host_config.font_sizes.get_size(size) == pixels

    def test_get_color(self, host_config):
        palette = host_config.container_styles.default.foreground_colors

        assert palette.get_color(TextColor.ACCENT).default == "#FF0000FF"
        assert palette.get_color(TextColor.DEFAULT).subtle == "#B2000000"

    def test_frozen(self, host_config):
        with pytest.raises(ValidationError):
            host_config.supports_interactivity = False

    def test_negative_limits_rejected(self):
        with pytest.raises(ValidationError):
            ActionsConfig(max_actions=-1)

    def test_camel_case_keys(self):
        config = HostConfig.model_validate(
            {"supportsInteractivity": False, "actions": {"maxActions": 2, "actionsOrientation": "Vertical"}}
        )

        assert config.supports_interactivity is False
        assert config.actions.max_actions == 2
        assert config.actions.actions_orientation == ActionsOrientation.VERTICAL


class TestCssColor:
    """Test host config color conversion."""

    def test_argb_to_rgba(self):
        assert to_css_color("#FF000000") == "rgba(0, 0, 0, 1.00)"
        assert to_css_color("#B20000FF") == "rgba(0, 0, 255, 0.70)"
        assert to_css_color("#00FFFFFF") == "rgba(255, 255, 255, 0.00)"

    @pytest.mark.parametrize("value", ["#FF0000", "red", "rgb(1, 2, 3)", "#ZZ000000", ""])
    def test_other_forms_unchanged(self, value):
        assert to_css_color(value) == value


class TestLoadHostConfig:
    """Test loading host configs from files."""

    def test_load_json(self, tmp_path):
        path = tmp_path / "host.json"
        path.write_text(json.dumps({"fontFamily": "Arial", "spacing": {"default": 12}}))

        config = load_host_config(path)

        assert config.font_family == "Arial"
        assert config.get_spacing(Spacing.DEFAULT) == 12
        assert config.get_spacing(Spacing.SMALL) == 3

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "host.yaml"
        path.write_text(yaml.dump({"actions": {"buttonSpacing": 4, "actionAlignment": "center"}}))

        config = load_host_config(path)

        assert config.actions.button_spacing == 4
        assert config.actions.action_alignment == HorizontalAlignment.CENTER

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "host.yml"
        path.write_text("")

        assert load_host_config(path) == HostConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(HostConfigError, match="Cannot read"):
            load_host_config(tmp_path / "missing.json")

    def test_invalid_syntax(self, tmp_path):
        path = tmp_path / "host.json"
        path.write_text("{not json")

        with pytest.raises(HostConfigError, match="syntax"):
            load_host_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "host.json"
        path.write_text(json.dumps({"actions": {"maxActions": "many"}}))

        with pytest.raises(HostConfigError):
            load_host_config(path)


class TestGetHostConfig:
    """Test host config selection from settings."""

    def test_defaults_without_path(self):
        assert get_host_config(Settings()) == HostConfig()

    def test_loads_configured_path(self, tmp_path):
        path = tmp_path / "host.json"
        path.write_text(json.dumps({"fontFamily": "Arial"}))

        config = get_host_config(Settings(host_config_path=path))

        assert config.font_family == "Arial"

    def test_interactivity_override(self):
        config = get_host_config(Settings(supports_interactivity=False))

        assert config.supports_interactivity is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CARD_RENDER_SUPPORTS_INTERACTIVITY", "false")

        assert get_host_config(Settings()).supports_interactivity is False
