"""
Host Configuration
==================

Theme and layout policy supplied by the hosting application: colors, font
sizes, spacing, separators, image sizes, fact set and action strip knobs.

Models use camelCase aliases so standard host config JSON/YAML files load
directly. All sections are frozen; a render pass only ever reads them.
"""

import json
from pathlib import Path
from typing import Optional, TYPE_CHECKING

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from card_render.models.schemas import (
    ActionsOrientation,
    HorizontalAlignment,
    Spacing,
    TextColor,
    TextSize,
    TextWeight,
)

if TYPE_CHECKING:
    from .settings import Settings


class HostConfigError(Exception):
    """Exception raised when a host configuration cannot be loaded."""

    pass


class HostConfigModel(BaseModel):
    """Frozen base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )


class FontSizesConfig(HostConfigModel):
    """Pixel font size per size keyword."""
    small: int = 12
    default: int = 14
    medium: int = 17
    large: int = 21
    extra_large: int = 26

    def get_size(self, size: TextSize) -> int:
        """Return the pixel size for a size keyword."""
        return {
            TextSize.SMALL: self.small,
            TextSize.MEDIUM: self.medium,
            TextSize.LARGE: self.large,
            TextSize.EXTRA_LARGE: self.extra_large,
        }.get(size, self.default)


class SpacingsConfig(HostConfigModel):
    """Pixel spacing per spacing keyword."""
    small: int = 3
    default: int = 8
    medium: int = 20
    large: int = 30
    extra_large: int = 40
    padding: int = 20


class SeparatorConfig(HostConfigModel):
    """Separator line appearance."""
    line_thickness: int = 1
    line_color: str = "#B2000000"


class ImageSizesConfig(HostConfigModel):
    """Maximum pixel width per image size keyword."""
    small: int = 40
    medium: int = 80
    large: int = 160


class ColorConfig(HostConfigModel):
    """Normal and subtle variant of a semantic color."""
    default: str
    subtle: str


class ForegroundColorsConfig(HostConfigModel):
    """Palette of semantic text colors."""
    default: ColorConfig = ColorConfig(default="#FF000000", subtle="#B2000000")
    dark: ColorConfig = ColorConfig(default="#FF101010", subtle="#B2101010")
    light: ColorConfig = ColorConfig(default="#FFFFFFFF", subtle="#B2FFFFFF")
    accent: ColorConfig = ColorConfig(default="#FF0000FF", subtle="#B20000FF")
    good: ColorConfig = ColorConfig(default="#FF008000", subtle="#B2008000")
    warning: ColorConfig = ColorConfig(default="#FFFFD700", subtle="#B2FFD700")
    attention: ColorConfig = ColorConfig(default="#FF8B0000", subtle="#B28B0000")

    def get_color(self, color: TextColor) -> ColorConfig:
        """Return the palette entry for a semantic color."""
        return getattr(self, color.value, self.default)


class ContainerStyleConfig(HostConfigModel):
    """Background and text colors of a container style."""
    background_color: str = "#FFFFFFFF"
    foreground_colors: ForegroundColorsConfig = ForegroundColorsConfig()


class ContainerStylesConfig(HostConfigModel):
    """Container styles known to the host."""
    default: ContainerStyleConfig = ContainerStyleConfig()


class FactSetTextConfig(HostConfigModel):
    """Text styling of fact titles or values."""
    size: TextSize = TextSize.DEFAULT
    weight: TextWeight = TextWeight.DEFAULT
    color: TextColor = TextColor.DEFAULT
    is_subtle: bool = False
    wrap: bool = True
    max_width: int = 0


class FactSetConfig(HostConfigModel):
    """Fact set styling."""
    title: FactSetTextConfig = FactSetTextConfig(weight=TextWeight.BOLDER, max_width=150)
    value: FactSetTextConfig = FactSetTextConfig()
    spacing: int = 10


class ShowCardConfig(HostConfigModel):
    """Inline show-card presentation."""
    inline_top_margin: int = 16


class ActionsConfig(HostConfigModel):
    """Action strip layout."""
    max_actions: int = Field(5, ge=0)
    spacing: Spacing = Spacing.DEFAULT
    button_spacing: int = Field(10, ge=0)
    actions_orientation: ActionsOrientation = ActionsOrientation.HORIZONTAL
    action_alignment: HorizontalAlignment = HorizontalAlignment.STRETCH
    show_card: ShowCardConfig = ShowCardConfig()


class HostConfig(HostConfigModel):
    """Complete host configuration read during a render pass."""
    font_family: Optional[str] = "Segoe UI"
    supports_interactivity: bool = True
    font_sizes: FontSizesConfig = FontSizesConfig()
    spacing: SpacingsConfig = SpacingsConfig()
    separator: SeparatorConfig = SeparatorConfig()
    image_sizes: ImageSizesConfig = ImageSizesConfig()
    container_styles: ContainerStylesConfig = ContainerStylesConfig()
    fact_set: FactSetConfig = FactSetConfig()
    actions: ActionsConfig = ActionsConfig()

    def get_spacing(self, spacing: Spacing) -> int:
        """Return the pixel spacing for a spacing keyword."""
        return {
            Spacing.NONE: 0,
            Spacing.SMALL: self.spacing.small,
            Spacing.MEDIUM: self.spacing.medium,
            Spacing.LARGE: self.spacing.large,
            Spacing.EXTRA_LARGE: self.spacing.extra_large,
            Spacing.PADDING: self.spacing.padding,
        }.get(spacing, self.spacing.default)


def to_css_color(value: str) -> str:
    """
    Convert an ``#AARRGGBB`` color into a CSS ``rgba()`` value.

    Any other form (``#RRGGBB``, named colors, ``rgb()``) is returned unchanged.
    """
    if value and value.startswith("#") and len(value) == 9:
        try:
            alpha, red, green, blue = (int(value[i : i + 2], 16) for i in (1, 3, 5, 7))
        except ValueError:
            return value
        return f"rgba({red}, {green}, {blue}, {alpha / 255:.2f})"
    return value


def load_host_config(path: Path) -> HostConfig:
    """
    Load a host configuration from a JSON or YAML file.

    Args:
        path: File path; ``.yaml``/``.yml`` suffixes are read as YAML, anything else as JSON

    Returns:
        Validated host configuration

    Raises:
        HostConfigError: If the file cannot be read, parsed or validated
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
        if Path(path).suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(content) or {}
        else:
            data = json.loads(content)
        return HostConfig.model_validate(data)
    except OSError as e:
        raise HostConfigError(f"Cannot read host config {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise HostConfigError(f"Invalid host config syntax in {path}: {e}") from e
    except ValidationError as e:
        raise HostConfigError(f"Invalid host config {path}: {e}") from e


def get_host_config(settings: Optional["Settings"] = None) -> HostConfig:
    """
    Build the host configuration selected by the application settings.

    Args:
        settings: Settings to use; the global settings when omitted

    Returns:
        Host configuration from ``host_config_path`` or the defaults, with the
        ``supports_interactivity`` override applied
    """
    if settings is None:
        from .settings import get_settings

        settings = get_settings()

    if settings.host_config_path is not None:
        config = load_host_config(settings.host_config_path)
    else:
        config = HostConfig()

    if settings.supports_interactivity is not None:
        config = config.model_copy(update={"supports_interactivity": settings.supports_interactivity})

    return config
