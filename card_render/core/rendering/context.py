"""
Render Context
==============

Per-pass rendering state and the registries it dispatches through.

A ``RenderContext`` is created for every render pass. It reads the host
configuration, dispatches document nodes to renderers by their exact ``type``
tag, collects non-fatal warnings and hands out link ids that are unique within
the pass. The renderer and action transformer registries are owned by the
caller and snapshotted when the context is built, so registering a renderer
never affects a pass that is already running.
"""

import threading
import uuid
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Set

from card_render.config.host_config import HostConfig, to_css_color
from card_render.config.logging import get_logger
from card_render.core.rendering.markdown import MarkdownConverter
from card_render.core.rendering.tags import TagNode
from card_render.models.schemas import CardNode, Spacing, TextColor

logger = get_logger(__name__)

ElementRenderer = Callable[[Any, "RenderContext"], Optional[TagNode]]
ActionTransformer = Callable[[Any, TagNode, "RenderContext"], None]
IdFactory = Callable[[], str]

MAX_ID_ATTEMPTS = 100


def generate_random_id() -> str:
    """Generate an id for joining two tags, e.g. an input and its label."""
    return "ac-" + uuid.uuid4().hex[:8]


class _Registry:
    """Lock-guarded mapping from node ``type`` tag to a callable."""

    def __init__(self) -> None:
        self._entries: Dict[str, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _set(self, kind: str, func: Callable[..., Any]) -> None:
        with self._lock:
            self._entries[kind] = func

    def remove(self, kind: str) -> None:
        """Remove the entry registered for a node kind, if any."""
        with self._lock:
            self._entries.pop(kind, None)

    def get(self, kind: str) -> Optional[Callable[..., Any]]:
        """Return the entry registered for a node kind."""
        return self._entries.get(kind)

    def snapshot(self) -> Mapping[str, Callable[..., Any]]:
        """Return a read-only copy of the current entries."""
        with self._lock:
            return MappingProxyType(dict(self._entries))


class ElementRenderers(_Registry):
    """Registry of element renderers keyed by node ``type`` tag."""

    def set(self, kind: str, renderer: ElementRenderer) -> None:
        """Register the renderer for a node kind, replacing any previous one."""
        self._set(kind, renderer)


class ActionTransformers(_Registry):
    """Registry of action transformers keyed by action ``type`` tag."""

    def register(self, kind: str, transformer: ActionTransformer) -> None:
        """Register the transformer stamping kind-specific data onto action tags."""
        self._set(kind, transformer)


class RenderContext:
    """State of a single render pass."""

    def __init__(
        self,
        config: HostConfig,
        renderers: Mapping[str, ElementRenderer],
        action_transformers: Optional[Mapping[str, ActionTransformer]] = None,
        id_factory: Optional[IdFactory] = None,
        markdown_converter: Optional[MarkdownConverter] = None,
    ) -> None:
        self.config = config
        self.renderers = renderers
        self.action_transformers: Mapping[str, ActionTransformer] = action_transformers or {}
        self.markdown = markdown_converter or MarkdownConverter()
        self.warnings: List[str] = []
        self._id_factory = id_factory or generate_random_id
        self._issued_ids: Set[str] = set()

    def render(self, node: Optional[CardNode]) -> Optional[TagNode]:
        """
        Render a document node through the renderer registered for its type.

        Args:
            node: Document node to render

        Returns:
            Rendered tag, or None when the node is unsupported or invisible
        """
        if node is None:
            return None

        renderer = self.renderers.get(node.type)
        if renderer is None:
            self.warn(f"Unsupported element type '{node.type}'")
            return None

        return renderer(node, self)

    def warn(self, message: str) -> None:
        """Record a non-fatal rendering problem."""
        logger.warning("Render warning", message=message)
        self.warnings.append(message)

    def transform_action(self, action: CardNode, tag: TagNode) -> TagNode:
        """Apply the transformer registered for the action's type to its tag."""
        transformer = self.action_transformers.get(action.type)
        if transformer is not None:
            transformer(action, tag, self)
        return tag

    def generate_id(self) -> str:
        """Return an id not yet issued during this pass."""
        for _ in range(MAX_ID_ATTEMPTS):
            new_id = self._id_factory()
            if new_id not in self._issued_ids:
                self._issued_ids.add(new_id)
                return new_id
        raise RuntimeError(f"Id factory produced no unused id in {MAX_ID_ATTEMPTS} attempts")

    def get_spacing(self, spacing: Spacing) -> int:
        """Pixel value of a spacing keyword."""
        return self.config.get_spacing(spacing)

    def get_rgb_color(self, color: str) -> str:
        """CSS value of a host config color."""
        return to_css_color(color)

    def get_color(self, color: TextColor, is_subtle: bool) -> str:
        """CSS value of a semantic text color."""
        palette = self.config.container_styles.default.foreground_colors.get_color(color)
        return self.get_rgb_color(palette.subtle if is_subtle else palette.default)
