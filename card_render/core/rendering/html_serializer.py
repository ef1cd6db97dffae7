"""
HTML Serializer
===============

Serialize rendered tag trees to HTML markup with Jinja2 templates.
Text and attribute values are escaped by the template environment.
"""

from typing import Any, List, Optional, Tuple
from pathlib import Path
import jinja2
from markupsafe import Markup

from card_render.config.host_config import HostConfig
from card_render.config.logging import get_logger
from card_render.config.settings import get_settings
from card_render.core.rendering.card_renderer import RenderedCard, create_card_renderer
from card_render.core.rendering.tags import TagNode
from card_render.models.schemas import AdaptiveCard

logger = get_logger(__name__)

VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "meta"})


class HTMLSerializationError(Exception):
    """Exception raised when markup serialization fails."""

    pass


class HTMLSerializer:
    """Jinja2-based tag tree serializer."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(serializer="jinja2")  # structlog.BoundLoggerBase
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
        )

        # Template helpers
        self._register_template_functions()

    def _register_template_functions(self) -> None:
        """Register custom Jinja2 functions and filters."""

        def style_to_css(styles: dict) -> str:
            """Convert a style map to an inline CSS declaration list."""
            return "; ".join(f"{name}: {value}" for name, value in styles.items())

        def tag_attributes(node: TagNode) -> List[Tuple[str, str]]:
            """Attributes of a tag in output order: class, style, then the rest."""
            attributes: List[Tuple[str, str]] = []
            if node.classes:
                attributes.append(("class", " ".join(node.classes)))
            if node.styles:
                attributes.append(("style", style_to_css(node.styles)))
            attributes.extend(node.attributes.items())
            return attributes

        self.env.globals["tag_attributes"] = tag_attributes
        self.env.globals["void_elements"] = VOID_ELEMENTS

    def serialize(self, tag: TagNode) -> str:
        """
        Serialize a tag tree to HTML markup.

        Args:
            tag: Root of the tree

        Returns:
            HTML fragment

        Raises:
            HTMLSerializationError: If template rendering fails
        """
        try:
            return self.env.get_template("tag.html").render(root=tag)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("HTML serialization failed", error=error_msg)
            raise HTMLSerializationError(error_msg) from e

    def render_page(self, rendered: RenderedCard, title: Optional[str] = None) -> str:
        """
        Serialize a rendered card as a complete HTML document.

        Args:
            rendered: Rendered card
            title: Page title, the configured default when omitted

        Returns:
            HTML document
        """
        body = Markup(self.serialize(rendered.tag))
        try:
            html = self.env.get_template("page.html").render(
                title=title or get_settings().page_title, body=body
            )
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("HTML serialization failed", error=error_msg)
            raise HTMLSerializationError(error_msg) from e

        self.logger.info("HTML page generated", html_length=len(html), warnings=len(rendered.warnings))
        return html


def render_card_html(
    card: AdaptiveCard, host_config: Optional[HostConfig] = None, title: Optional[str] = None
) -> str:
    """
    Render a card and serialize it as a complete HTML document.

    Args:
        card: Card document
        host_config: Host configuration, the configured one when omitted
        title: Page title

    Returns:
        HTML document

    Raises:
        CardRenderError: If rendering fails
    """
    renderer = create_card_renderer()
    if host_config is not None:
        renderer.host_config = host_config
    return HTMLSerializer().render_page(renderer.render(card), title)
