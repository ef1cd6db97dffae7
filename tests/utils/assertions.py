"""
Test Assertions
===============

Custom assertion helpers for rendered tag trees and parse results.
"""

from typing import List, Optional

from card_render.core.rendering.tags import TagNode
from card_render.models.schemas import AdaptiveCard, ParseResult

__all__ = [
    "assert_successful_parse_result",
    "assert_failed_parse_result",
    "assert_child_tags",
    "assert_unique_ids",
    "assert_has_classes",
    "visible_children",
]


def assert_successful_parse_result(result: ParseResult) -> None:
    """Assert that parsing succeeded."""
    assert isinstance(result, ParseResult)
    assert result.success is True
    assert isinstance(result.card, AdaptiveCard)
    assert result.errors == []
    assert result.processing_time is not None and result.processing_time >= 0


def assert_failed_parse_result(result: ParseResult, expected_error: Optional[str] = None) -> None:
    """Assert that parsing failed, optionally with an error containing some text."""
    assert isinstance(result, ParseResult)
    assert result.success is False
    assert result.card is None
    assert len(result.errors) > 0
    if expected_error:
        assert any(expected_error in error for error in result.errors), result.errors


def assert_has_classes(tag: TagNode, *class_names: str) -> None:
    """Assert that a tag carries every given class."""
    missing = [name for name in class_names if name not in tag.classes]
    assert not missing, f"{tag!r} is missing classes {missing}"


def assert_child_tags(tag: TagNode, expected: List[str]) -> None:
    """Assert the tag names of a tag's direct children."""
    assert [child.tag for child in tag.children] == expected


def assert_unique_ids(tag: TagNode) -> None:
    """Assert that no two tags in the tree share an id."""
    ids = [node.get_attr("id") for node in tag.iter_descendants() if node.get_attr("id")]
    assert len(ids) == len(set(ids)), f"Duplicate ids: {ids}"


def visible_children(tag: TagNode) -> List[TagNode]:
    """Direct children that are not separators or spacers."""
    return [child for child in tag.children if "ac-separator" not in child.classes]
