"""
Layout Helpers
==============

Layout rules shared by the per-type renderers:

- container composition with separators between visible children
- separator and spacer placement
- proportional column sizing inside a column set
- action strip layout, including the hidden cards of show-card actions
"""

import math
from typing import List, Optional, Sequence, Tuple

from card_render.config.logging import get_logger
from card_render.core.rendering.context import RenderContext
from card_render.core.rendering.tags import TagNode
from card_render.models.schemas import (
    ActionsOrientation,
    CardNode,
    Column,
    HorizontalAlignment,
    ShowCardAction,
    Spacing,
)

logger = get_logger(__name__)

SHOW_CARD_ID_ATTR = "data-ac-showCardId"

HORIZONTAL_JUSTIFY = {
    HorizontalAlignment.CENTER: "center",
    HorizontalAlignment.RIGHT: "flex-end",
}

VERTICAL_ALIGN = {
    HorizontalAlignment.CENTER: "center",
    HorizontalAlignment.RIGHT: "flex-end",
    HorizontalAlignment.STRETCH: "stretch",
}


def add_container_elements(
    ui_container: TagNode,
    elements: Optional[Sequence[CardNode]],
    actions: Optional[Sequence[CardNode]],
    context: RenderContext,
) -> None:
    """
    Render child elements and an optional action strip into a container tag.

    A separator goes before every rendered child except the first, using the
    child's own spacing and separator flags. Omitted children leave no trace.
    Show-card bodies are appended after the action strip.
    """
    for element in elements or []:
        ui_element = context.render(element)
        if ui_element is None:
            continue
        if ui_container.children:
            add_separator(ui_container, element.spacing, element.separator, context)
        ui_container.append_child(ui_element)

    if context.config.supports_interactivity and actions is not None:
        ui_button_strip, show_cards = build_action_strip(actions, context)

        if ui_button_strip.children:
            add_separator(ui_container, context.config.actions.spacing, False, context)
            ui_container.append_child(ui_button_strip)

        for show_card in show_cards:
            ui_container.append_child(show_card)


def add_separator(
    ui_container: TagNode, spacing: Spacing, separator: bool, context: RenderContext
) -> None:
    """
    Append a separator rule or spacer to a container.

    Nothing is drawn for ``separator=False`` with ``spacing=none``. A separator
    line splits its spacing evenly above and below the rule; spacing alone is
    drawn as an invisible spacer of the full height.
    """
    if not separator and spacing == Spacing.NONE:
        return

    pixels = context.get_spacing(spacing)

    if separator:
        line = context.config.separator
        ui_separator = (
            TagNode("hr")
            .add_class("ac-separator")
            .set_style("padding-top", f"{pixels // 2}px")
            .set_style("margin-top", f"{pixels // 2}px")
            .set_style("border-top-color", context.get_rgb_color(line.line_color))
            .set_style("border-top-width", f"{line.line_thickness}px")
            .set_style("border-top-style", "solid")
        )
    else:
        ui_separator = TagNode("hr").add_class("ac-separator").set_style("height", f"{pixels}px")

    ui_container.append_child(ui_separator)


def add_column_separator(ui_column_set: TagNode, column: Column, context: RenderContext) -> None:
    """
    Append a vertical separator before a column.

    Uses half the column's spacing on each side of a left border that is only
    visible when the column asks for a separator line.
    """
    if not column.separator and column.spacing == Spacing.NONE:
        return

    line = context.config.separator
    pixels = context.get_spacing(column.spacing) // 2
    thickness = line.line_thickness if column.separator else 0

    ui_column_set.append_child(
        TagNode("div")
        .add_class("ac-columnseparator")
        .set_style("flex", "0 0 auto")
        .set_style("padding-left", f"{pixels}px")
        .set_style("margin-left", f"{pixels}px")
        .set_style("border-left-color", context.get_rgb_color(line.line_color))
        .set_style("border-left-width", f"{thickness}px")
        .set_style("border-left-style", "solid")
    )


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a finite number from text, returning None when it is not one."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def column_weight(column: Column) -> float:
    """Relative weight of a column: numeric width, else numeric legacy size, else 0."""
    width = parse_number(column.width)
    if width is not None:
        return width
    size = parse_number(column.size if column.size is not None else "0")
    return size if size is not None else 0.0


def column_weight_total(columns: Sequence[Column]) -> float:
    """Denominator for proportional widths; never less than 1."""
    return max(1.0, sum(column_weight(column) for column in columns))


def column_flex(column: Column, denominator: float) -> str:
    """
    CSS flex shorthand for a column.

    Empty or ``stretch`` grows to fill, ``auto`` shrinks to content, a number
    takes its share of ``denominator`` as flex basis, anything else stays fixed.
    """
    width = (column.width or "").lower()
    if not width:
        width = (column.size or "").lower()

    if not width or width == "stretch":
        return "1 1 auto"
    if width == "auto":
        return "0 1 auto"

    value = parse_number(width)
    if value is not None:
        percent = round(100 * (value / denominator))
        return f"1 1 {percent}%"

    return "0 0 auto"


def build_action_strip(
    actions: Sequence[CardNode], context: RenderContext
) -> Tuple[TagNode, List[TagNode]]:
    """
    Lay out actions as a flex strip.

    Args:
        actions: Actions in display order
        context: Current render context

    Returns:
        The strip tag and the hidden show-card bodies to place after it
    """
    actions_config = context.config.actions
    horizontal = actions_config.actions_orientation == ActionsOrientation.HORIZONTAL

    ui_button_strip = TagNode("div").add_class("ac-actionset").set_style("display", "flex")

    if horizontal:
        ui_button_strip.set_style("flex-direction", "row").set_style(
            "justify-content",
            HORIZONTAL_JUSTIFY.get(actions_config.action_alignment, "flex-start"),
        )
    else:
        ui_button_strip.set_style("flex-direction", "column").set_style(
            "align-items", VERTICAL_ALIGN.get(actions_config.action_alignment, "flex-start")
        )

    max_actions = min(actions_config.max_actions, len(actions))
    if len(actions) > max_actions:
        logger.debug("Dropping actions over limit", total=len(actions), limit=max_actions)

    show_cards: List[TagNode] = []
    for action in actions[:max_actions]:
        ui_action = context.render(action)
        if ui_action is None:
            continue

        if isinstance(action, ShowCardAction):
            ui_card = context.render(action.card)
            if ui_card is not None:
                ui_card.set_attr("id", ui_action.get_attr(SHOW_CARD_ID_ATTR, ""))
                ui_card.add_class("ac-showCard")
                ui_card.set_style("padding", "0")
                ui_card.set_style("display", "none")
                ui_card.set_style("margin-top", f"{actions_config.show_card.inline_top_margin}px")
                show_cards.append(ui_card)

        # spacer between buttons according to config
        if ui_button_strip.children and actions_config.button_spacing > 0:
            ui_spacer = TagNode("div")
            if horizontal:
                ui_spacer.set_style("flex", "0 0 auto")
                ui_spacer.set_style("width", f"{actions_config.button_spacing}px")
            else:
                ui_spacer.set_style("height", f"{actions_config.button_spacing}px")
            ui_button_strip.append_child(ui_spacer)

        ui_button_strip.append_child(ui_action)

    return ui_button_strip, show_cards
