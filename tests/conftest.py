"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides host configurations, renderers, render contexts and card data.
"""

import os

os.environ.setdefault("CARD_RENDER_ENVIRONMENT", "testing")

from typing import Any, Callable, Dict, Generator, Optional

import pytest

from card_render.config.host_config import ActionsConfig, HostConfig
from card_render.config.settings import reload_settings
from card_render.core.rendering.card_renderer import CardRenderer
from card_render.core.rendering.context import RenderContext
from card_render.core.rendering.markdown import MarkdownConverter
from card_render.core.rendering.renderers import (
    build_action_transformers,
    build_element_renderers,
)
from card_render.models.schemas import AdaptiveCard

from tests.utils.data_generators import CardDataGenerator, counter_id_factory


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep environment overrides from leaking between tests."""
    for name in list(os.environ):
        if name.startswith("CARD_RENDER_") and name != "CARD_RENDER_ENVIRONMENT":
            monkeypatch.delenv(name)
    reload_settings()
    yield
    reload_settings()

@pytest.fixture
def host_config() -> HostConfig:
    """Default host configuration."""
    return HostConfig()

@pytest.fixture
def static_host_config() -> HostConfig:
    """Host configuration without interactivity."""
    return HostConfig(supports_interactivity=False)

@pytest.fixture
def make_host_config() -> Callable[..., HostConfig]:
    """Build a host configuration with action strip overrides."""

    def _make(**actions: Any) -> HostConfig:
        return HostConfig(actions=ActionsConfig(**actions))

    return _make

@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic link id source."""
    return counter_id_factory()

@pytest.fixture
def make_context(id_factory: Callable[[], str]) -> Callable[..., RenderContext]:
    """Build a render context over the default registries."""

    def _make(config: Optional[HostConfig] = None) -> RenderContext:
        return RenderContext(
            config or HostConfig(),
            build_element_renderers().snapshot(),
            build_action_transformers().snapshot(),
            id_factory=id_factory,
            markdown_converter=MarkdownConverter(),
        )

    return _make

@pytest.fixture
def context(make_context: Callable[..., RenderContext]) -> RenderContext:
    """Render context with the default host configuration."""
    return make_context()

@pytest.fixture
def renderer(host_config: HostConfig) -> CardRenderer:
    """Card renderer with the default host configuration."""
    return CardRenderer(host_config)

@pytest.fixture
def static_renderer(static_host_config: HostConfig) -> CardRenderer:
    """Card renderer for a host without interactivity."""
    return CardRenderer(static_host_config)

@pytest.fixture
def complex_card_data() -> Dict[str, Any]:
    """Card document using every supported kind."""
    return CardDataGenerator.generate_complex_card()

@pytest.fixture
def complex_card(complex_card_data: Dict[str, Any]) -> AdaptiveCard:
    return AdaptiveCard.model_validate(complex_card_data)
