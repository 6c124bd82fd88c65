"""
PNGSort — Sort Configuration

Pydantic models for the sort settings, plus the validator that checks a
config against the image it will run on. The JSON document form uses the
same field names and PascalCase enum values:

    {"descending": false, "sort_range": "RowMajor",
     "sort_mode": "TiedByOrder", "sort_channel": ["G", "R"]}
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, ValidationError

from core.errors import ConfigError, ConfigParseError, ValidationErrorKind


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ColorType(str, Enum):
    """Color classification of a decoded image."""
    GRAYSCALE = "Grayscale"
    GRAYSCALE_ALPHA = "GrayscaleAlpha"
    RGB = "Rgb"
    RGBA = "Rgba"
    INDEXED = "Indexed"  # recognized so it can be rejected

    @property
    def bytes_per_pixel(self) -> int:
        if self not in _BYTES_PER_PIXEL:
            raise ValueError(f"{self.value} images have no fixed pixel size")
        return _BYTES_PER_PIXEL[self]

    @property
    def has_alpha(self) -> bool:
        return self in (ColorType.GRAYSCALE_ALPHA, ColorType.RGBA)

    @property
    def is_grayscale(self) -> bool:
        return self in (ColorType.GRAYSCALE, ColorType.GRAYSCALE_ALPHA)


_BYTES_PER_PIXEL = {
    ColorType.GRAYSCALE: 1,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.RGB: 3,
    ColorType.RGBA: 4,
}


class ColorChannel(str, Enum):
    """Selectable color channel of an RGB/RGBA pixel."""
    R = "R"
    G = "G"
    B = "B"

    @property
    def offset(self) -> int:
        """Byte offset of this channel inside a pixel."""
        return _CHANNEL_OFFSETS[self.value]


_CHANNEL_OFFSETS = {"R": 0, "G": 1, "B": 2}


class SortRange(str, Enum):
    """Which pixels are sorted together, and how results are laid back out."""
    ROW = "Row"                    # each row on its own
    COLUMN = "Column"              # each column on its own
    ROW_MAJOR = "RowMajor"         # whole image, refilled scanline by scanline
    COLUMN_MAJOR = "ColumnMajor"   # whole image, refilled column by column


class SortMode(str, Enum):
    """How RGB/RGBA pixels are compared."""
    TIED_BY_SUM = "TiedBySum"      # whole pixels, key = sum of channels
    TIED_BY_ORDER = "TiedByOrder"  # whole pixels, channels compared in order
    UNTIED = "Untied"              # each channel sorted on its own


# ---------------------------------------------------------------------------
# Config model
# ---------------------------------------------------------------------------

class SortConfig(BaseModel):
    """Settings for one sort pass.

    Construction only checks types. Whether the settings make sense for a
    given image is decided by validate_config().
    """
    descending: bool = Field(
        default=False,
        description="Sort from high keys to low keys.",
    )
    sort_range: SortRange = Field(
        description="Row, Column, RowMajor or ColumnMajor.",
    )
    sort_mode: SortMode | None = Field(
        default=None,
        description="RGB only. None means TiedBySum.",
    )
    sort_channel: list[ColorChannel] = Field(
        default_factory=list,
        description="RGB only. Order matters for TiedByOrder and Untied.",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def is_untied(self) -> bool:
        return self.sort_mode == SortMode.UNTIED


def parse_config(text: str | bytes) -> SortConfig:
    """Build a SortConfig from a JSON document.

    Raises:
        ConfigParseError: On malformed JSON, unknown fields or bad values.
    """
    try:
        return SortConfig.model_validate_json(text)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigParseError(f"Invalid config: {problems}") from e


def validate_config(config: SortConfig, color_type: ColorType) -> SortConfig:
    """Check that config can run on an image of color_type.

    Checks run in a fixed order and the first failure is reported.

    Returns:
        A normalized copy: on RGB/RGBA an absent sort_mode becomes TiedBySum.

    Raises:
        ConfigError: With .kind set to the violated rule.
    """
    if len(set(config.sort_channel)) != len(config.sort_channel):
        raise ConfigError(
            ValidationErrorKind.DUPLICATE_CHANNEL,
            "Duplicate channels are not allowed in sort_channel",
        )

    if color_type in (ColorType.RGB, ColorType.RGBA):
        if config.is_untied and not config.sort_channel:
            raise ConfigError(
                ValidationErrorKind.CHANNEL_REQUIRED_FOR_UNTIED,
                "Sort channel should be specified when using Untied sort mode",
            )
        if config.sort_mode is None:
            return config.model_copy(update={"sort_mode": SortMode.TIED_BY_SUM})
        return config

    if color_type.is_grayscale:
        if config.sort_mode is not None:
            raise ConfigError(
                ValidationErrorKind.MODE_NOT_APPLICABLE,
                "Sort mode option is not applicable for Grayscale images",
            )
        if config.sort_channel:
            raise ConfigError(
                ValidationErrorKind.CHANNEL_NOT_APPLICABLE,
                "Channel option is not applicable for Grayscale images",
            )
        return config

    raise ConfigError(
        ValidationErrorKind.UNSUPPORTED_COLOR_TYPE,
        f"{color_type.value} color type is not supported",
    )
