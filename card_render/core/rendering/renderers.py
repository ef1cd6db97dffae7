"""
Element Renderers
=================

One renderer per document node kind, each of shape ``(node, context) -> tag``,
plus the action transformers that stamp kind-specific data onto action tags.

Renderers return None for nodes that must not appear in the output (actions
when the host does not support interactivity).
"""

import json
import math
from typing import List, Optional

from card_render.core.rendering.context import (
    ActionTransformers,
    ElementRenderers,
    RenderContext,
)
from card_render.core.rendering.layout import (
    SHOW_CARD_ID_ATTR,
    add_column_separator,
    add_container_elements,
    column_flex,
    column_weight_total,
)
from card_render.core.rendering.tags import TagNode
from card_render.core.rendering.text_functions import apply_text_functions
from card_render.models.schemas import (
    AdaptiveCard,
    CardNode,
    ChoiceInputStyle,
    ChoiceSetInput,
    Column,
    ColumnSet,
    Container,
    DateInput,
    FactSet,
    HorizontalAlignment,
    Image,
    ImageSet,
    ImageSize,
    ImageStyle,
    NumberInput,
    OpenUrlAction,
    ShowCardAction,
    SubmitAction,
    TextBlock,
    TextInput,
    TextColor,
    TextWeight,
    TimeInput,
    ToggleInput,
)

FONT_WEIGHTS = {
    TextWeight.LIGHTER: 200,
    TextWeight.BOLDER: 600,
}

LINE_HEIGHT_RATIO = 1.33


def css_class_for(node: CardNode) -> str:
    """Default class of a node: ``ac-`` plus its lower-cased type without dots."""
    return "ac-" + node.type.replace(".", "").lower()


def get_action_css_class(action: CardNode) -> str:
    """Class of an action tag, e.g. ``ac-action-openUrl`` for ``Action.OpenUrl``."""
    suffix = action.type[action.type.rfind(".") + 1 :]
    return "ac-action-" + suffix[:1].lower() + suffix[1:]


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


# Actions
def add_action_attributes(action: CardNode, tag: TagNode, context: RenderContext) -> TagNode:
    """Mark a tag as an interactive action and apply the action's transformer."""
    tag.add_class(get_action_css_class(action))
    tag.set_attr("role", "button")
    tag.set_attr("aria-label", getattr(action, "title", None) or "")
    return context.transform_action(action, tag)


def add_select_action(
    tag: TagNode, select_action: Optional[CardNode], context: RenderContext
) -> None:
    """Make a whole element clickable when it carries a select action."""
    if context.config.supports_interactivity and select_action is not None:
        tag.add_class("ac-selectable")
        add_action_attributes(select_action, tag, context)


def render_action(action: CardNode, context: RenderContext) -> Optional[TagNode]:
    """Render an action as a push button; None when interactivity is off."""
    if not context.config.supports_interactivity:
        return None

    stretch = context.config.actions.action_alignment == HorizontalAlignment.STRETCH
    ui_button = (
        TagNode("a", text=getattr(action, "title", None))
        .set_style("overflow", "hidden")
        .set_style("white-space", "nowrap")
        .set_style("text-overflow", "ellipsis")
        .set_style("flex", "0 1 100%" if stretch else "0 1 auto")
        .add_class("ac-pushButton")
    )
    return add_action_attributes(action, ui_button, context)


def transform_open_url(action: OpenUrlAction, tag: TagNode, context: RenderContext) -> None:
    tag.set_attr("data-ac-url", str(action.url))


def transform_submit(action: SubmitAction, tag: TagNode, context: RenderContext) -> None:
    tag.set_attr("data-ac-submitData", json.dumps(action.data, separators=(",", ":")))


def transform_show_card(action: ShowCardAction, tag: TagNode, context: RenderContext) -> None:
    tag.set_attr(SHOW_CARD_ID_ATTR, context.generate_id())


# Containers
def render_adaptive_card(card: AdaptiveCard, context: RenderContext) -> TagNode:
    """Render the card root, its body and its action strip."""
    config = context.config
    ui_card = (
        TagNode("div")
        .add_class(f"ac-{card.type.lower()}")
        .set_style("width", "100%")
        .set_style(
            "background-color",
            context.get_rgb_color(config.container_styles.default.background_color),
        )
        .set_style("padding", f"{config.spacing.padding}px")
        .set_style("box-sizing", "border-box")
    )

    if config.font_family:
        ui_card.set_style("font-family", config.font_family)

    if card.background_image:
        ui_card.set_style("background-image", f"url('{card.background_image}')")
        ui_card.set_style("background-repeat", "no-repeat")
        ui_card.set_style("background-size", "cover")

    add_container_elements(ui_card, card.body, card.actions, context)
    return ui_card


def render_container(container: Container, context: RenderContext) -> TagNode:
    ui_container = TagNode("div").add_class(css_class_for(container))
    add_container_elements(ui_container, container.items, None, context)
    add_select_action(ui_container, container.select_action, context)
    return ui_container


def render_column(column: Column, context: RenderContext) -> TagNode:
    ui_column = TagNode("div").add_class(css_class_for(column))
    add_container_elements(ui_column, column.items, None, context)
    add_select_action(ui_column, column.select_action, context)
    return ui_column


def render_column_set(column_set: ColumnSet, context: RenderContext) -> TagNode:
    """
    Render columns side by side.

    Numeric widths share the row proportionally against the sum of all numeric
    weights (at least 1); keywords map to grow, shrink or fixed flex sizing.
    """
    ui_column_set = (
        TagNode("div")
        .add_class(css_class_for(column_set))
        .set_style("overflow", "hidden")
        .set_style("display", "flex")
    )
    add_select_action(ui_column_set, column_set.select_action, context)

    denominator = column_weight_total(column_set.columns)

    for column in column_set.columns:
        ui_column = context.render(column)
        if ui_column is None:
            continue

        if ui_column_set.children:
            add_column_separator(ui_column_set, column, context)

        ui_column.set_style("flex", column_flex(column, denominator))
        ui_column_set.append_child(ui_column)

    return ui_column_set


def render_fact_set(fact_set: FactSet, context: RenderContext) -> TagNode:
    fact_config = context.config.fact_set
    ui_fact_set = TagNode("ul").add_class(css_class_for(fact_set)).set_style("overflow", "hidden")

    for fact in fact_set.facts:
        title_config = fact_config.title
        fact_title = TextBlock(
            text=fact.title,
            size=title_config.size,
            color=title_config.color,
            weight=title_config.weight,
            is_subtle=title_config.is_subtle,
            wrap=title_config.wrap,
        )
        value_config = fact_config.value
        fact_value = TextBlock(
            text=fact.value,
            size=value_config.size,
            color=value_config.color,
            weight=value_config.weight,
            is_subtle=value_config.is_subtle,
            wrap=value_config.wrap,
        )

        ui_title_cell = (
            TagNode("h3")
            .add_class("ac-factset-titlecell")
            .set_style("height", "inherit")
            .set_style("max-width", f"{title_config.max_width}px")
        )
        ui_title = context.render(fact_title)
        if ui_title is not None:
            ui_title.add_class("ac-facttitle").set_style("margin-right", f"{fact_config.spacing}px")
            ui_title_cell.append_child(ui_title)

        ui_value_cell = TagNode("span").add_class("ac-factset-valuecell").set_style("height", "inherit")
        ui_value = context.render(fact_value)
        if ui_value is not None:
            ui_value_cell.append_child(ui_value.add_class("ac-factvalue"))

        ui_row = TagNode("li").set_style("height", "1px")
        ui_row.append_child(ui_title_cell).append_child(ui_value_cell)
        ui_fact_set.append_child(ui_row)

    return ui_fact_set


# Content
def render_text_block(text_block: TextBlock, context: RenderContext) -> TagNode:
    """
    Render text through the markdown converter and style the fragments.

    Every paragraph in the converted output, however deeply nested, loses its
    vertical margins and spans the full width; when wrapping is off it also
    clips with an ellipsis.
    """
    config = context.config
    font_size = config.font_sizes.get_size(text_block.size)
    weight = FONT_WEIGHTS.get(text_block.weight, 400)
    line_height = font_size * LINE_HEIGHT_RATIO

    ui_text_block = (
        TagNode("div")
        .add_class(css_class_for(text_block))
        .set_style("box-sizing", "border-box")
        .set_style("text-align", text_block.horizontal_alignment.value.lower())
        .set_style("color", context.get_color(text_block.color, text_block.is_subtle))
        .set_style("line-height", f"{line_height:.2f}px")
        .set_style("font-size", f"{font_size}px")
        .set_style("font-weight", str(weight))
    )

    if text_block.max_lines > 0:
        ui_text_block.set_style("max-height", f"{line_height * text_block.max_lines:.2f}px")
        ui_text_block.set_style("overflow", "hidden")

    single_line = not text_block.wrap
    if single_line:
        ui_text_block.set_style("white-space", "nowrap")
    else:
        ui_text_block.set_style("word-wrap", "break-word")

    for fragment in context.markdown.convert(apply_text_functions(text_block.text)):
        ui_text_block.append_child(fragment)

    for node in ui_text_block.iter_descendants():
        if node.tag.lower() != "p":
            continue
        node.set_style("margin-top", "0px")
        node.set_style("margin-bottom", "0px")
        node.set_style("width", "100%")
        if single_line:
            node.set_style("text-overflow", "ellipsis")
            node.set_style("overflow", "hidden")

    return ui_text_block


IMAGE_MAX_WIDTHS = {
    ImageSize.SMALL: "small",
    ImageSize.MEDIUM: "medium",
    ImageSize.LARGE: "large",
}


def render_image(image: Image, context: RenderContext) -> TagNode:
    ui_div = (
        TagNode("div")
        .add_class(css_class_for(image))
        .set_style("display", "block")
        .set_style("box-sizing", "border-box")
    )

    if image.size == ImageSize.AUTO:
        ui_div.set_style("max-width", "100%")
    elif image.size == ImageSize.STRETCH:
        ui_div.set_style("width", "100%")
    else:
        max_width = getattr(context.config.image_sizes, IMAGE_MAX_WIDTHS[image.size])
        ui_div.set_style("max-width", f"{max_width}px")

    ui_image = (
        TagNode("img")
        .set_style("width", "100%")
        .set_attr("alt", image.alt_text or "card image")
        .set_attr("src", image.url)
    )

    if image.style == ImageStyle.PERSON:
        ui_image.set_style("background-position", "50% 50%")
        ui_image.set_style("border-radius", "50%")
        ui_image.set_style("background-repeat", "no-repeat")

    if image.horizontal_alignment == HorizontalAlignment.CENTER:
        ui_div.set_style("overflow", "hidden").set_style("margin-right", "auto").set_style(
            "margin-left", "auto"
        )
    elif image.horizontal_alignment == HorizontalAlignment.RIGHT:
        ui_div.set_style("overflow", "hidden").set_style("margin-left", "auto")
    else:
        ui_div.set_style("overflow", "hidden")

    ui_div.append_child(ui_image)
    add_select_action(ui_div, image.select_action, context)
    return ui_div


def render_image_set(image_set: ImageSet, context: RenderContext) -> TagNode:
    ui_image_set = TagNode("ul").add_class(css_class_for(image_set))

    for image in image_set.images:
        if image_set.image_size != ImageSize.AUTO:
            image = image.model_copy(update={"size": image_set.image_size})

        ui_image = context.render(image)
        if ui_image is None:
            continue
        ui_image.set_style("display", "inline-block").set_style("margin-right", "10px")
        ui_image_set.append_child(ui_image)

    return ui_image_set


# Inputs
def apply_default_text_attributes(tag: TagNode, context: RenderContext) -> TagNode:
    return (
        tag.set_style("color", context.get_color(TextColor.DEFAULT, False))
        .set_style("font-size", f"{context.config.font_sizes.default}px")
        .set_style("display", "inline-block")
        .set_style("margin-left", "6px")
        .set_style("vertical-align", "middle")
    )


def create_label(for_id: str, text: str, context: RenderContext) -> TagNode:
    label = TagNode("label", text=text).set_attr("for", for_id)
    return apply_default_text_attributes(label, context)


def parse_default_values(value: Optional[str]) -> List[str]:
    """Split a comma separated input value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def render_choice_set(choice_set: ChoiceSetInput, context: RenderContext) -> TagNode:
    """
    Render a choice set.

    1. single select, compact style: a dropdown
    2. single select, expanded style: a list of radio buttons
    3. multi select: a list of checkboxes
    """
    if choice_set.is_multi_select:
        return _render_choice_list(choice_set, context, "checkbox")

    if choice_set.style == ChoiceInputStyle.COMPACT:
        ui_select = (
            TagNode("select")
            .set_attr("name", choice_set.id or "")
            .add_class("ac-input")
            .add_class("ac-multichoiceInput")
            .set_style("width", "100%")
        )
        for choice in choice_set.choices:
            option = TagNode("option", text=choice.title).set_attr("value", choice.value)
            if choice.value == choice_set.value:
                option.set_attr("selected", "")
            ui_select.append_child(option)
        return ui_select

    return _render_choice_list(choice_set, context, "radio")


def _render_choice_list(
    choice_set: ChoiceSetInput, context: RenderContext, input_type: str
) -> TagNode:
    default_values = parse_default_values(choice_set.value)

    ui_element = TagNode("div").add_class("ac-input").set_style("width", "100%")

    for choice in choice_set.choices:
        label_id = context.generate_id()

        ui_input = (
            TagNode("input")
            .set_attr("id", label_id)
            .set_attr("type", input_type)
            .set_attr("name", choice_set.id or "")
            .set_attr("value", choice.value)
            .set_style("margin", "0px")
            .set_style("display", "inline-block")
            .set_style("vertical-align", "middle")
        )
        if choice.value in default_values:
            ui_input.set_attr("checked", "")

        compound_input = TagNode("div")
        compound_input.append_child(ui_input).append_child(create_label(label_id, choice.title, context))
        ui_element.append_child(compound_input)

    return ui_element


def render_text_input(text_input: TextInput, context: RenderContext) -> TagNode:
    if text_input.is_multiline:
        ui_text_input = TagNode("textarea")
        if text_input.value:
            ui_text_input.set_text(text_input.value)
    else:
        ui_text_input = TagNode("input").set_attr("type", "text")
        if text_input.value:
            ui_text_input.set_attr("value", text_input.value)

    ui_text_input.set_attr("name", text_input.id or "")
    ui_text_input.add_class("ac-textinput").add_class("ac-input").set_style("width", "100%")

    if text_input.placeholder:
        ui_text_input.set_attr("placeholder", text_input.placeholder)

    if text_input.max_length > 0:
        ui_text_input.set_attr("maxLength", text_input.max_length)

    return ui_text_input


def render_number_input(number_input: NumberInput, context: RenderContext) -> TagNode:
    ui_number_input = (
        TagNode("input")
        .set_attr("name", number_input.id or "")
        .add_class("ac-input")
        .add_class("ac-numberInput")
        .set_attr("type", "number")
        .set_style("width", "100%")
    )

    for name in ("min", "max", "value"):
        value = getattr(number_input, name)
        if value is not None and not math.isnan(value):
            ui_number_input.set_attr(name, format_number(value))

    if number_input.placeholder:
        ui_number_input.set_attr("placeholder", number_input.placeholder)

    return ui_number_input


def _render_picker_input(
    picker: CardNode, input_type: str, css_class: str, context: RenderContext
) -> TagNode:
    ui_input = (
        TagNode("input")
        .set_attr("type", input_type)
        .set_attr("name", picker.id or "")
        .add_class("ac-input")
        .add_class(css_class)
        .set_style("width", "100%")
    )

    for name in ("value", "min", "max", "placeholder"):
        value = getattr(picker, name)
        if value:
            ui_input.set_attr(name, value)

    return ui_input


def render_date_input(date_input: DateInput, context: RenderContext) -> TagNode:
    return _render_picker_input(date_input, "date", "ac-dateInput", context)


def render_time_input(time_input: TimeInput, context: RenderContext) -> TagNode:
    return _render_picker_input(time_input, "time", "ac-timeInput", context)


def render_toggle_input(toggle: ToggleInput, context: RenderContext) -> TagNode:
    """
    Render a checkbox whose semantic values travel as data attributes.

    Unspecified on/off values default to ``True``/``False``.
    """
    label_id = context.generate_id()
    value_on = toggle.value_on if toggle.value_on is not None else "True"
    value_off = toggle.value_off if toggle.value_off is not None else "False"

    ui_element = TagNode("div").add_class("ac-input").set_style("width", "100%")

    ui_checkbox = (
        TagNode("input")
        .set_attr("id", label_id)
        .set_attr("type", "checkbox")
        .set_attr("name", toggle.id or "")
        .set_attr("data-ac-valueOn", value_on)
        .set_attr("data-ac-valueOff", value_off)
        .set_style("display", "inline-block")
        .set_style("vertical-align", "middle")
        .set_style("margin", "0px")
    )

    if toggle.value == value_on:
        ui_checkbox.set_attr("checked", "")

    ui_element.append_child(ui_checkbox).append_child(create_label(label_id, toggle.title, context))
    return ui_element


def build_element_renderers() -> ElementRenderers:
    """Registry with a renderer for every supported node kind."""
    renderers = ElementRenderers()

    renderers.set("AdaptiveCard", render_adaptive_card)

    renderers.set("TextBlock", render_text_block)
    renderers.set("Image", render_image)

    renderers.set("Container", render_container)
    renderers.set("Column", render_column)
    renderers.set("ColumnSet", render_column_set)
    renderers.set("FactSet", render_fact_set)
    renderers.set("ImageSet", render_image_set)

    renderers.set("Input.ChoiceSet", render_choice_set)
    renderers.set("Input.Text", render_text_input)
    renderers.set("Input.Number", render_number_input)
    renderers.set("Input.Date", render_date_input)
    renderers.set("Input.Time", render_time_input)
    renderers.set("Input.Toggle", render_toggle_input)

    renderers.set("Action.Submit", render_action)
    renderers.set("Action.OpenUrl", render_action)
    renderers.set("Action.ShowCard", render_action)

    return renderers


def build_action_transformers() -> ActionTransformers:
    """Registry with the data transformer of every supported action kind."""
    transformers = ActionTransformers()
    transformers.register("Action.OpenUrl", transform_open_url)
    transformers.register("Action.Submit", transform_submit)
    transformers.register("Action.ShowCard", transform_show_card)
    return transformers
