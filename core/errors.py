"""
PNGSort — Error Types
Every failure the engine or its collaborators can report derives from
PngSortError, so hosts can catch one class and show its message.
"""

from enum import Enum


class PngSortError(Exception):
    """Base class for all PNGSort failures."""
    pass


class ValidationErrorKind(str, Enum):
    """Which configuration rule was violated."""
    DUPLICATE_CHANNEL = "DuplicateChannel"
    MODE_NOT_APPLICABLE = "ModeNotApplicable"
    CHANNEL_NOT_APPLICABLE = "ChannelNotApplicable"
    CHANNEL_REQUIRED_FOR_UNTIED = "ChannelRequiredForUntied"
    UNSUPPORTED_COLOR_TYPE = "UnsupportedColorType"


class ConfigError(PngSortError):
    """A sort configuration is illegal for the image it is applied to."""

    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class ConfigParseError(PngSortError):
    """A serialized config document could not be read."""
    pass


class DecodeError(PngSortError):
    """Input bytes are not a PNG the engine can work with."""
    pass


class EncodeError(PngSortError):
    """The sorted buffer could not be written back out as PNG."""
    pass
