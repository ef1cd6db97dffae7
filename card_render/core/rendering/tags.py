"""
Tag Nodes
=========

Generic output element produced by the renderers: a tag name with class names,
inline styles, attributes, optional literal text and ordered children.

Setters mutate the node in place and return it, so renderers can chain them.
Inline style names are restricted to the CSS properties the renderers emit.
"""

from typing import Any, Dict, Iterator, List, Literal, Optional, get_args

StyleName = Literal[
    "align-items",
    "background-color",
    "background-image",
    "background-position",
    "background-repeat",
    "background-size",
    "border-left-color",
    "border-left-style",
    "border-left-width",
    "border-radius",
    "border-top-color",
    "border-top-style",
    "border-top-width",
    "box-sizing",
    "color",
    "display",
    "flex",
    "flex-direction",
    "font-family",
    "font-size",
    "font-weight",
    "height",
    "justify-content",
    "line-height",
    "margin",
    "margin-bottom",
    "margin-left",
    "margin-right",
    "margin-top",
    "max-height",
    "max-width",
    "overflow",
    "padding",
    "padding-left",
    "padding-top",
    "text-align",
    "text-overflow",
    "vertical-align",
    "white-space",
    "width",
    "word-wrap",
]

STYLE_NAMES = frozenset(get_args(StyleName))


class TagNode:
    """Mutable builder for one element of the rendered tree."""

    def __init__(self, tag: str, text: Optional[str] = None) -> None:
        self.tag = tag
        self.text = text
        self.classes: List[str] = []
        self.styles: Dict[str, str] = {}
        self.attributes: Dict[str, str] = {}
        self.children: List["TagNode"] = []

    def __repr__(self) -> str:
        return f"TagNode({self.tag!r}, classes={self.classes!r}, children={len(self.children)})"

    def add_class(self, name: str) -> "TagNode":
        """Append a class name, ignoring duplicates."""
        if name and name not in self.classes:
            self.classes.append(name)
        return self

    def set_style(self, name: StyleName, value: Any) -> "TagNode":
        """Set an inline style property; the last value written wins."""
        if name not in STYLE_NAMES:
            raise ValueError(f"Unsupported style property: {name}")
        self.styles[name] = str(value)
        return self

    def set_attr(self, name: str, value: Any) -> "TagNode":
        """Set an attribute."""
        self.attributes[name] = str(value)
        return self

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value."""
        return self.attributes.get(name, default)

    def set_text(self, text: Optional[str]) -> "TagNode":
        """Set the literal text of the node."""
        self.text = text
        return self

    def append_child(self, child: "TagNode") -> "TagNode":
        """Append a child node and return this node."""
        self.children.append(child)
        return self

    def iter_descendants(self) -> Iterator["TagNode"]:
        """Yield every descendant, depth first, in document order."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find_all(
        self, tag: Optional[str] = None, class_name: Optional[str] = None
    ) -> List["TagNode"]:
        """Return descendants matching a tag name and/or class name."""
        return [
            node
            for node in self.iter_descendants()
            if (tag is None or node.tag == tag)
            and (class_name is None or class_name in node.classes)
        ]

    def text_content(self) -> str:
        """Concatenate the literal text of this node and its descendants."""
        parts = [self.text or ""]
        parts.extend(child.text_content() for child in self.children)
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested structure of the node, for comparison and debugging."""
        return {
            "tag": self.tag,
            "classes": list(self.classes),
            "styles": dict(self.styles),
            "attributes": dict(self.attributes),
            "text": self.text,
            "children": [child.to_dict() for child in self.children],
        }
