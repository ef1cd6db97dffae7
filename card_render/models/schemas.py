"""
Pydantic Models and Schemas
===========================

Card document models: layout containers, content elements, inputs and actions.
Node kinds form a closed tagged union on the ``type`` field; unrecognised kinds
load as placeholder nodes so rendering can warn about them instead of failing.
"""

from typing import Annotated, Optional, List, Any, Union, Literal
from enum import Enum

from pydantic import AnyUrl, BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel


# Enums
class CaseInsensitiveEnum(str, Enum):
    """String enum that accepts any casing of its values."""

    @classmethod
    def _missing_(cls, value: object) -> Optional["CaseInsensitiveEnum"]:
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


class Spacing(CaseInsensitiveEnum):
    """Space between an element and its previous sibling."""
    NONE = "none"
    SMALL = "small"
    DEFAULT = "default"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extraLarge"
    PADDING = "padding"


class HorizontalAlignment(CaseInsensitiveEnum):
    """Horizontal alignment of content and action strips."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    STRETCH = "stretch"


class TextSize(CaseInsensitiveEnum):
    """Font size keyword."""
    DEFAULT = "default"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extraLarge"


class TextWeight(CaseInsensitiveEnum):
    """Font weight keyword."""
    DEFAULT = "default"
    LIGHTER = "lighter"
    BOLDER = "bolder"


class TextColor(CaseInsensitiveEnum):
    """Semantic text color."""
    DEFAULT = "default"
    DARK = "dark"
    LIGHT = "light"
    ACCENT = "accent"
    GOOD = "good"
    WARNING = "warning"
    ATTENTION = "attention"


class ImageSize(CaseInsensitiveEnum):
    """Image size keyword."""
    AUTO = "auto"
    STRETCH = "stretch"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ImageStyle(CaseInsensitiveEnum):
    """Image presentation style."""
    DEFAULT = "default"
    PERSON = "person"


class ChoiceInputStyle(CaseInsensitiveEnum):
    """Choice set presentation style."""
    COMPACT = "compact"
    EXPANDED = "expanded"


class ActionsOrientation(CaseInsensitiveEnum):
    """Direction of the action strip."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# Base Models
class CardModel(BaseModel):
    """Base model accepting camelCase card JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CardNode(CardModel):
    """Fields shared by every document node."""
    type: str
    id: Optional[str] = Field(None, description="Node identifier, used as field name by inputs")
    spacing: Spacing = Field(Spacing.DEFAULT, description="Space before this node")
    separator: bool = Field(False, description="Draw a separator line before this node")


# Actions
class SubmitAction(CardNode):
    """Action gathering input fields and submitting them with its data payload."""
    type: Literal["Action.Submit"] = "Action.Submit"
    title: Optional[str] = None
    data: Optional[Any] = Field(None, description="Payload merged with input values")


class OpenUrlAction(CardNode):
    """Action opening a URL."""
    type: Literal["Action.OpenUrl"] = "Action.OpenUrl"
    title: Optional[str] = None
    url: AnyUrl = Field(..., description="Absolute target URL")


class ShowCardAction(CardNode):
    """Action revealing a nested card."""
    type: Literal["Action.ShowCard"] = "Action.ShowCard"
    title: Optional[str] = None
    card: Optional["AdaptiveCard"] = Field(None, description="Card shown when triggered")


class UnknownAction(CardNode):
    """Action of a kind this renderer has no model for."""
    model_config = ConfigDict(extra="allow")
    title: Optional[str] = None


# Content elements
class TextBlock(CardNode):
    """Block of (markdown) text."""
    type: Literal["TextBlock"] = "TextBlock"
    text: str = ""
    size: TextSize = TextSize.DEFAULT
    weight: TextWeight = TextWeight.DEFAULT
    color: TextColor = TextColor.DEFAULT
    is_subtle: bool = False
    wrap: bool = False
    max_lines: int = Field(0, ge=0, description="Maximum visible lines, 0 for unlimited")
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT


class Image(CardNode):
    """Image element."""
    type: Literal["Image"] = "Image"
    url: str = Field(..., description="Image source URL")
    alt_text: Optional[str] = None
    size: ImageSize = ImageSize.AUTO
    style: ImageStyle = ImageStyle.DEFAULT
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    select_action: Optional["CardAction"] = None


class ImageSet(CardNode):
    """Gallery of images sharing one size."""
    type: Literal["ImageSet"] = "ImageSet"
    images: List[Image] = Field(default_factory=list)
    image_size: ImageSize = ImageSize.MEDIUM


class Fact(CardModel):
    """Title/value pair of a fact set."""
    title: str = ""
    value: str = ""


class FactSet(CardNode):
    """List of facts rendered as title/value rows."""
    type: Literal["FactSet"] = "FactSet"
    facts: List[Fact] = Field(default_factory=list)


# Containers
class Container(CardNode):
    """Vertical group of elements."""
    type: Literal["Container"] = "Container"
    items: List["CardElement"] = Field(default_factory=list)
    select_action: Optional["CardAction"] = None


class Column(CardNode):
    """Column of a column set."""
    type: Literal["Column"] = "Column"
    items: List["CardElement"] = Field(default_factory=list)
    width: Optional[str] = Field(
        None, description="'auto', 'stretch' or a relative weight; numbers are kept as text"
    )
    size: Optional[str] = Field(None, description="Legacy alias of width")
    select_action: Optional["CardAction"] = None

    @field_validator("width", "size", mode="before")
    @classmethod
    def coerce_number_to_text(cls, v: Any) -> Any:
        """Keep numeric widths in their textual form."""
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        return v


class ColumnSet(CardNode):
    """Horizontal row of columns."""
    type: Literal["ColumnSet"] = "ColumnSet"
    columns: List[Column] = Field(default_factory=list)
    select_action: Optional["CardAction"] = None


# Inputs
class Choice(CardModel):
    """Option of a choice set."""
    title: str = ""
    value: str = ""


class ChoiceSetInput(CardNode):
    """Single or multiple choice input."""
    type: Literal["Input.ChoiceSet"] = "Input.ChoiceSet"
    choices: List[Choice] = Field(default_factory=list)
    is_multi_select: bool = False
    style: ChoiceInputStyle = ChoiceInputStyle.COMPACT
    value: Optional[str] = Field(None, description="Comma separated default values")


class TextInput(CardNode):
    """Free text input."""
    type: Literal["Input.Text"] = "Input.Text"
    placeholder: Optional[str] = None
    value: Optional[str] = None
    is_multiline: bool = False
    max_length: int = Field(0, ge=0, description="Maximum length, 0 for unlimited")


class NumberInput(CardNode):
    """Numeric input."""
    type: Literal["Input.Number"] = "Input.Number"
    placeholder: Optional[str] = None
    value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None


class DateInput(CardNode):
    """Date picker input."""
    type: Literal["Input.Date"] = "Input.Date"
    placeholder: Optional[str] = None
    value: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None


class TimeInput(CardNode):
    """Time picker input."""
    type: Literal["Input.Time"] = "Input.Time"
    placeholder: Optional[str] = None
    value: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None


class ToggleInput(CardNode):
    """On/off input with semantic values."""
    type: Literal["Input.Toggle"] = "Input.Toggle"
    title: str = ""
    value: Optional[str] = None
    value_on: Optional[str] = None
    value_off: Optional[str] = None


class UnknownElement(CardNode):
    """Element of a kind this renderer has no model for."""
    model_config = ConfigDict(extra="allow")


# Card
class AdaptiveCard(CardNode):
    """Root of a card document."""
    type: Literal["AdaptiveCard"] = "AdaptiveCard"
    version: Optional[str] = Field("1.0", description="Schema version the card targets")
    body: List["CardElement"] = Field(default_factory=list)
    actions: List["CardAction"] = Field(default_factory=list)
    fallback_text: Optional[str] = None
    background_image: Optional[str] = None


ELEMENT_TYPES = {
    model.model_fields["type"].default: model
    for model in (
        AdaptiveCard,
        Container,
        Column,
        ColumnSet,
        FactSet,
        Image,
        ImageSet,
        TextBlock,
        ChoiceSetInput,
        TextInput,
        NumberInput,
        DateInput,
        TimeInput,
        ToggleInput,
    )
}

ACTION_TYPES = {
    model.model_fields["type"].default: model
    for model in (SubmitAction, OpenUrlAction, ShowCardAction)
}


def _node_kind(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("type")
    return getattr(value, "type", None)


def _element_tag(value: Any) -> str:
    kind = _node_kind(value)
    return kind if kind in ELEMENT_TYPES else "Unknown"


def _action_tag(value: Any) -> str:
    kind = _node_kind(value)
    return kind if kind in ACTION_TYPES else "Unknown"


CardElement = Annotated[
    Union[
        Annotated[AdaptiveCard, Tag("AdaptiveCard")],
        Annotated[Container, Tag("Container")],
        Annotated[Column, Tag("Column")],
        Annotated[ColumnSet, Tag("ColumnSet")],
        Annotated[FactSet, Tag("FactSet")],
        Annotated[Image, Tag("Image")],
        Annotated[ImageSet, Tag("ImageSet")],
        Annotated[TextBlock, Tag("TextBlock")],
        Annotated[ChoiceSetInput, Tag("Input.ChoiceSet")],
        Annotated[TextInput, Tag("Input.Text")],
        Annotated[NumberInput, Tag("Input.Number")],
        Annotated[DateInput, Tag("Input.Date")],
        Annotated[TimeInput, Tag("Input.Time")],
        Annotated[ToggleInput, Tag("Input.Toggle")],
        Annotated[UnknownElement, Tag("Unknown")],
    ],
    Discriminator(_element_tag),
]

CardAction = Annotated[
    Union[
        Annotated[SubmitAction, Tag("Action.Submit")],
        Annotated[OpenUrlAction, Tag("Action.OpenUrl")],
        Annotated[ShowCardAction, Tag("Action.ShowCard")],
        Annotated[UnknownAction, Tag("Unknown")],
    ],
    Discriminator(_action_tag),
]



# Update forward references
for _model in (ShowCardAction, Image, Container, Column, ColumnSet, AdaptiveCard):
    _model.model_rebuild()


# Parsing Results
class ParseResult(BaseModel):
    """Result of card parsing operation."""
    success: bool = Field(..., description="Whether parsing succeeded")
    card: Optional[AdaptiveCard] = Field(None, description="Parsed card")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    warnings: List[str] = Field(default_factory=list, description="Parsing warnings")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")
