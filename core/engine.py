"""
PNGSort — Engine
Validate -> pick key strategy (tied only) -> sort -> return a new buffer.

    transform()    raw pixel buffer in, raw pixel buffer out
    process_png()  PNG bytes in, PNG bytes out
    run_json()     host entry point: JSON config string + PNG bytes
"""

import logging

from core.config import ColorType, SortConfig, parse_config, validate_config
from core.errors import PngSortError
from core.image_io import DecodedImage, decode_png, encode_png
from core.safety import validate_dimensions
from effects import get_sorter
from effects.sort_keys import select_key_strategy

logger = logging.getLogger(__name__)


def transform(config: SortConfig, pixels: bytes, width: int, height: int,
              color_type: ColorType) -> bytes:
    """Sort one image's pixels.

    Args:
        config: Sort settings. Checked against color_type before any work.
        pixels: Row-major bytes, no row padding.
        width, height: Image size in pixels.
        color_type: Color classification of pixels.

    Returns:
        A new buffer the same length as pixels.

    Raises:
        ConfigError: config is not legal for color_type.
        SafetyError: The image is too large to sort in memory.
        ValueError: pixels has the wrong length for the given size.
    """
    config = validate_config(config, color_type)
    validate_dimensions(width, height)
    bpp = color_type.bytes_per_pixel
    expected = width * height * bpp
    if len(pixels) != expected:
        raise ValueError(
            f"Pixel buffer is {len(pixels)} bytes, expected {expected} "
            f"for {width}x{height} {color_type.value}"
        )

    logger.debug(
        "Sorting %dx%d %s: range=%s mode=%s channels=%s descending=%s",
        width, height, color_type.value, config.sort_range.value,
        config.sort_mode.value if config.sort_mode else None,
        [ch.value for ch in config.sort_channel], config.descending,
    )

    if config.is_untied:
        sort_untied = get_sorter("untied")
        return sort_untied(pixels, width, height, bpp, config.sort_channel,
                           config.descending, config.sort_range)

    strategy = select_key_strategy(color_type, config.sort_mode)
    sort_tied = get_sorter("tied")
    return sort_tied(pixels, width, height, bpp, strategy, config.sort_channel,
                     config.descending, config.sort_range)


def sort_image(config: SortConfig, image: DecodedImage) -> DecodedImage:
    """Sort a decoded image. Size, color type and bit depth carry over.

    Raises:
        ConfigError, SafetyError
    """
    sorted_pixels = transform(config, image.pixels, image.width, image.height,
                              image.color_type)
    return DecodedImage(
        pixels=sorted_pixels,
        width=image.width,
        height=image.height,
        color_type=image.color_type,
        bit_depth=image.bit_depth,
    )


def process_png(config: SortConfig, src: bytes) -> bytes:
    """Decode a PNG, sort it, and encode it again.

    Raises:
        DecodeError, ConfigError, SafetyError, EncodeError
    """
    image = decode_png(src)
    logger.debug("Input: %d bytes, %dx%d %s", len(src), image.width, image.height,
                 image.color_type.value)
    return encode_png(sort_image(config, image))


def run_json(config_json: str, src: bytes) -> bytes:
    """Host entry point: JSON config + PNG bytes in, PNG bytes out.

    Every failure is raised as a PngSortError carrying a readable message.
    """
    config = parse_config(config_json)
    logger.debug("Config: %r", config)
    try:
        return process_png(config, src)
    except PngSortError:
        raise
    except ValueError as e:
        raise PngSortError(str(e)) from e
