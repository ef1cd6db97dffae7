"""
Card Renderer
=============

Top-level rendering of card documents into tag trees.

Each call to ``CardRenderer.render`` builds a fresh render context over the
renderer's host configuration and registries, renders the card root and returns
the tree together with the warnings collected on the way. Any exception raised
during the pass aborts it and surfaces as a single ``CardRenderError`` carrying
the card's fallback text; no partial tree is returned.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from card_render.config.host_config import HostConfig, get_host_config
from card_render.config.logging import get_logger
from card_render.config.settings import Settings, get_settings
from card_render.core.rendering.context import (
    ActionTransformer,
    ElementRenderer,
    IdFactory,
    RenderContext,
)
from card_render.core.rendering.markdown import MarkdownConverter
from card_render.core.rendering.renderers import (
    build_action_transformers,
    build_element_renderers,
)
from card_render.core.rendering.tags import TagNode
from card_render.models.schemas import AdaptiveCard

logger = get_logger(__name__)

SUPPORTED_SCHEMA_VERSION = "1.0"


class CardRenderError(Exception):
    """Exception raised when a card cannot be rendered."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        fallback_text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.fallback_text = fallback_text


class RenderedCard(BaseModel):
    """Result of rendering a card."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tag: TagNode = Field(..., description="Root of the rendered tag tree")
    card: AdaptiveCard = Field(..., description="Card the tree was rendered from")
    warnings: List[str] = Field(default_factory=list, description="Non-fatal rendering warnings")


def parse_version(version: str) -> Tuple[int, int]:
    """
    Parse a dotted schema version such as ``1.2`` into ``(major, minor)``.

    Parts after the minor number are validated but ignored, so ``1.0.0``
    compares equal to ``1.0``.
    """
    parts = [int(part) for part in version.strip().split(".")]
    if len(parts) < 2:
        parts.append(0)
    return parts[0], parts[1]


class CardRenderer:
    """Renders cards against one host configuration."""

    def __init__(
        self,
        host_config: Optional[HostConfig] = None,
        markdown_converter: Optional[MarkdownConverter] = None,
    ) -> None:
        self.host_config = host_config or HostConfig()
        self.markdown_converter = markdown_converter or MarkdownConverter()
        self.element_renderers = build_element_renderers()
        self.action_transformers = build_action_transformers()
        self.logger: Any = logger.bind(renderer="html")  # structlog.BoundLoggerBase

    def set_renderer(self, kind: str, renderer: ElementRenderer) -> None:
        """Register or replace the renderer for a node kind."""
        self.element_renderers.set(kind, renderer)

    def remove_renderer(self, kind: str) -> None:
        """Stop rendering a node kind; such nodes are then omitted with a warning."""
        self.element_renderers.remove(kind)

    def register_action_transformer(self, kind: str, transformer: ActionTransformer) -> None:
        """Register or replace the data transformer for an action kind."""
        self.action_transformers.register(kind, transformer)

    def render(self, card: AdaptiveCard, id_factory: Optional[IdFactory] = None) -> RenderedCard:
        """
        Render a card into a tag tree.

        Args:
            card: Card document to render
            id_factory: Optional source of link ids, random ids by default

        Returns:
            RenderedCard with the tag tree and collected warnings

        Raises:
            CardRenderError: If the card is missing or rendering fails
        """
        if card is None:
            raise CardRenderError("No card to render")

        context = RenderContext(
            self.host_config,
            self.element_renderers.snapshot(),
            self.action_transformers.snapshot(),
            id_factory=id_factory,
            markdown_converter=self.markdown_converter,
        )

        try:
            self.logger.info("Rendering card", version=card.version, elements=len(card.body))
            self._check_schema_version(card, context)

            tag = context.render(card)
            if tag is None:
                raise ValueError(f"No renderer produced output for '{card.type}'")

            self.logger.info("Card rendering completed", warnings=len(context.warnings))
            return RenderedCard(tag=tag, card=card, warnings=context.warnings)

        except Exception as e:
            self.logger.error("Card rendering failed", error=str(e))
            raise CardRenderError(
                "Failed to render card", cause=e, fallback_text=card.fallback_text
            ) from e

    def _check_schema_version(self, card: AdaptiveCard, context: RenderContext) -> None:
        """Warn when the card targets a schema newer than this renderer supports."""
        if not card.version:
            context.warn(f"Card has no schema version; rendering as {SUPPORTED_SCHEMA_VERSION}")
            return

        try:
            version = parse_version(card.version)
        except ValueError:
            context.warn(f"Unparseable schema version '{card.version}'")
            return

        if version > parse_version(SUPPORTED_SCHEMA_VERSION):
            context.warn(
                f"Schema version {card.version} is newer than supported "
                f"{SUPPORTED_SCHEMA_VERSION}; unsupported elements will be omitted"
            )


def render_card(card: AdaptiveCard, host_config: Optional[HostConfig] = None) -> RenderedCard:
    """
    Render a card with a one-off renderer.

    Args:
        card: Card document
        host_config: Host configuration, defaults when omitted

    Returns:
        RenderedCard with the tag tree and warnings
    """
    return CardRenderer(host_config).render(card)


def create_card_renderer(settings: Optional[Settings] = None) -> CardRenderer:
    """
    Create a renderer configured from application settings.

    Args:
        settings: Settings to use; the global settings when omitted

    Returns:
        CardRenderer using the configured host config and markdown extensions
    """
    settings = settings or get_settings()
    return CardRenderer(
        get_host_config(settings),
        MarkdownConverter(settings.markdown_extensions),
    )
