"""
Test Data Generators
====================

Generate card documents for testing scenarios.
"""

import itertools
import json
from typing import Any, Callable, Dict, List, Optional

import yaml

__all__ = ["CardDataGenerator", "counter_id_factory"]


def counter_id_factory(prefix: str = "ac-test") -> Callable[[], str]:
    """Deterministic id source yielding ``ac-test-1``, ``ac-test-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class CardDataGenerator:
    """Generate card test data."""

    @staticmethod
    def generate_text_card(text: str = "Hello", **card_fields: Any) -> Dict[str, Any]:
        """Card with a single text block."""
        card = {
            "type": "AdaptiveCard",
            "version": "1.0",
            "body": [{"type": "TextBlock", "text": text}],
        }
        card.update(card_fields)
        return card

    @staticmethod
    def generate_open_url_card(url: str = "https://example.com/docs") -> Dict[str, Any]:
        """Text block plus one OpenUrl action."""
        return CardDataGenerator.generate_text_card(
            actions=[{"type": "Action.OpenUrl", "title": "Open", "url": url}]
        )

    @staticmethod
    def generate_submit_actions(count: int) -> List[Dict[str, Any]]:
        """Submit actions titled ``Action 1`` to ``Action <count>``."""
        return [
            {"type": "Action.Submit", "title": f"Action {i}", "data": {"index": i}}
            for i in range(1, count + 1)
        ]

    @staticmethod
    def generate_column_set(widths: List[Optional[Any]]) -> Dict[str, Any]:
        """Column set with one text column per width; None leaves the width unset."""
        columns = []
        for i, width in enumerate(widths):
            column: Dict[str, Any] = {
                "type": "Column",
                "items": [{"type": "TextBlock", "text": f"Column {i}"}],
            }
            if width is not None:
                column["width"] = width
            columns.append(column)
        return {"type": "ColumnSet", "columns": columns}

    @staticmethod
    def generate_choice_set(
        style: str = "compact", multi: bool = False, value: Optional[str] = None
    ) -> Dict[str, Any]:
        """Choice set with three colour choices."""
        choice_set: Dict[str, Any] = {
            "type": "Input.ChoiceSet",
            "id": "colour",
            "style": style,
            "isMultiSelect": multi,
            "choices": [
                {"title": "Red", "value": "red"},
                {"title": "Green", "value": "green"},
                {"title": "Blue", "value": "blue"},
            ],
        }
        if value is not None:
            choice_set["value"] = value
        return choice_set

    @staticmethod
    def generate_complex_card() -> Dict[str, Any]:
        """Card using every supported element and action kind."""
        return {
            "type": "AdaptiveCard",
            "version": "1.0",
            "fallbackText": "Flight update",
            "body": [
                {"type": "TextBlock", "text": "**Flight** update", "size": "large", "weight": "bolder"},
                {
                    "type": "ColumnSet",
                    "columns": [
                        {
                            "type": "Column",
                            "width": "auto",
                            "items": [{"type": "Image", "url": "https://example.com/plane.png", "size": "small"}],
                        },
                        {
                            "type": "Column",
                            "width": "stretch",
                            "separator": True,
                            "items": [
                                {"type": "TextBlock", "text": "Departs {{DATE(2017-02-14T06:08:39Z, SHORT)}}"}
                            ],
                        },
                    ],
                },
                {
                    "type": "FactSet",
                    "facts": [{"title": "Gate", "value": "B12"}, {"title": "Seat", "value": "14C"}],
                },
                {
                    "type": "ImageSet",
                    "images": [
                        {"type": "Image", "url": "https://example.com/a.png"},
                        {"type": "Image", "url": "https://example.com/b.png"},
                    ],
                },
                {
                    "type": "Container",
                    "separator": True,
                    "items": [
                        {"type": "Input.Text", "id": "comment", "placeholder": "Comment"},
                        {"type": "Input.Number", "id": "bags", "min": 0, "max": 3},
                        {"type": "Input.Date", "id": "date"},
                        {"type": "Input.Time", "id": "time"},
                        {"type": "Input.Toggle", "id": "notify", "title": "Notify me"},
                        CardDataGenerator.generate_choice_set(style="expanded"),
                    ],
                },
            ],
            "actions": [
                {"type": "Action.Submit", "title": "Save", "data": {"action": "save"}},
                {"type": "Action.OpenUrl", "title": "Details", "url": "https://example.com/flight"},
                {
                    "type": "Action.ShowCard",
                    "title": "More",
                    "card": {"type": "AdaptiveCard", "body": [{"type": "TextBlock", "text": "Extra"}]},
                },
            ],
        }

    @staticmethod
    def to_json(card: Dict[str, Any]) -> str:
        return json.dumps(card, indent=2)

    @staticmethod
    def to_yaml(card: Dict[str, Any]) -> str:
        return yaml.dump(card, default_flow_style=False)
