"""
Markdown Fragments
==================

Convert card text (a markdown subset) into tag node fragments.

Python-Markdown produces XHTML with raw HTML disabled, so any markup in the
source text is escaped rather than passed through. BeautifulSoup then walks the
result and mirrors it as tag nodes: elements keep their names and text runs
become ``span`` nodes. Link and image URLs are kept only for web, mail and
relative targets.
"""

import re
from typing import Any, List, Optional, Sequence, Union

import markdown
from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, Tag

from card_render.config.logging import get_logger
from card_render.core.rendering.tags import TagNode

logger = get_logger(__name__)

DEFAULT_EXTENSIONS = ("sane_lists",)

URL_ATTRIBUTES = ("href", "src")
SAFE_URL_SCHEMES = ("http", "https", "mailto")

# Whitespace and control characters browsers ignore inside a URL scheme
_URL_NOISE = re.compile(r"[\x00-\x20\x7f]+")
_URL_SCHEME = re.compile(r"^([a-z][a-z0-9+.\-]*):")

BLOCK_TAGS = frozenset(
    ["p", "ul", "ol", "li", "blockquote", "pre", "hr", "div", "dl", "dt", "dd",
     "table", "thead", "tbody", "tr", "th", "td", "h1", "h2", "h3", "h4", "h5", "h6"]
)


def is_safe_url(value: str) -> bool:
    """Whether a link or image URL is relative or uses an allowed scheme."""
    normalized = _URL_NOISE.sub("", value).lower()
    match = _URL_SCHEME.match(normalized)
    if match is None:
        return True
    return match.group(1) in SAFE_URL_SCHEMES


def _is_inline_gap(node: NavigableString) -> bool:
    for sibling in (node.previous_sibling, node.next_sibling):
        if sibling is None:
            return False
        if isinstance(sibling, Tag) and sibling.name in BLOCK_TAGS:
            return False
    return True


class MarkdownConversionError(Exception):
    """Exception raised when markdown output cannot be mapped to tag nodes."""

    pass


class MarkdownConverter:
    """Markdown to tag node fragment converter."""

    def __init__(self, extensions: Optional[Sequence[str]] = None) -> None:
        self.extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)

    def _create_markdown(self) -> markdown.Markdown:
        md = markdown.Markdown(output_format="xhtml", extensions=self.extensions)
        # Raw HTML in card text must never reach the output
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        return md

    def to_xhtml(self, text: str) -> str:
        """Render markdown text to an XHTML string."""
        return self._create_markdown().convert(text)

    def convert(self, text: str) -> List[TagNode]:
        """
        Convert markdown text to an ordered list of tag nodes.

        Args:
            text: Plain or markdown text

        Returns:
            Top-level fragments, usually paragraphs and lists

        Raises:
            MarkdownConversionError: If the markdown output carries inline styles
        """
        if not text:
            return []

        soup = BeautifulSoup(self.to_xhtml(text), "html.parser")
        fragments: List[TagNode] = []
        for node in soup.contents:
            fragment = self._convert_node(node, top_level=True)
            if fragment is not None:
                fragments.append(fragment)

        logger.debug("Converted markdown", fragments=len(fragments), text_length=len(text))
        return fragments

    def _convert_node(
        self, node: Union[Tag, NavigableString, Any], top_level: bool = False
    ) -> Optional[TagNode]:
        if isinstance(node, Comment):
            return None

        if isinstance(node, NavigableString):
            text = str(node)
            if not text.strip() and (top_level or "\n" in text):
                if top_level or not _is_inline_gap(node):
                    return None
                return TagNode("span", text=" ")
            return TagNode("span", text=text)

        if not isinstance(node, Tag):
            return None

        tag = TagNode(node.name)
        for child in node.contents:
            converted = self._convert_node(child)
            if converted is not None:
                tag.append_child(converted)

        for name, value in node.attrs.items():
            name = name.lower()
            if name == "style":
                raise MarkdownConversionError("Markdown output must not carry inline styles")
            if name == "class":
                class_names = value if isinstance(value, list) else str(value).split(" ")
                for class_name in class_names:
                    if class_name.strip():
                        tag.add_class(class_name.strip())
            elif name in URL_ATTRIBUTES and not is_safe_url(str(value)):
                logger.warning("Dropped unsafe URL", tag=node.name, attribute=name)
            else:
                tag.set_attr(name, " ".join(value) if isinstance(value, list) else value)

        return tag


def convert_markdown(text: str, extensions: Optional[Sequence[str]] = None) -> List[TagNode]:
    """
    Convert markdown text to tag node fragments.

    Args:
        text: Plain or markdown text
        extensions: Python-Markdown extensions, defaults to ``sane_lists``

    Returns:
        Ordered list of top-level fragments
    """
    return MarkdownConverter(extensions).convert(text)
