"""
PNGSort — Image I/O
PNG bytes <-> flat row-major pixel buffers, using Pillow.

Only 8-bit-per-channel images are decoded. Palette images decode to their
index bytes with color type Indexed, so the config validator is the one that
turns them away.
"""

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from core.config import ColorType
from core.errors import DecodeError, EncodeError

# IHDR color type for palette images; any depth decodes as Indexed
PNG_COLOR_TYPE_PALETTE = 3

# Pillow mode -> color type
MODE_COLOR_TYPES = {
    "L": ColorType.GRAYSCALE,
    "LA": ColorType.GRAYSCALE_ALPHA,
    "RGB": ColorType.RGB,
    "RGBA": ColorType.RGBA,
    "P": ColorType.INDEXED,
    "PA": ColorType.INDEXED,
}

COLOR_TYPE_MODES = {
    ColorType.GRAYSCALE: "L",
    ColorType.GRAYSCALE_ALPHA: "LA",
    ColorType.RGB: "RGB",
    ColorType.RGBA: "RGBA",
}


@dataclass
class DecodedImage:
    """A decoded PNG.

    pixels: Row-major bytes, width * height * bytes_per_pixel long.
    bit_depth: Carried through to the encoder untouched. Always 8 here.
    """
    pixels: bytes
    width: int
    height: int
    color_type: ColorType
    bit_depth: int = 8


def _ihdr_header(data: bytes):
    """(bit depth, PNG color type) from the IHDR chunk, or None if absent."""
    if len(data) < 26 or data[12:16] != b"IHDR":
        return None
    return data[24], data[25]


def decode_png(data: bytes) -> DecodedImage:
    """Decode PNG bytes.

    Raises:
        DecodeError: Not a PNG, corrupt, or not 8 bits per channel.
    """
    try:
        img = Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Could not decode image: {e}") from e

    if img.format != "PNG":
        raise DecodeError(f"Expected a PNG image, got {img.format or 'unknown format'}")

    # img.mode hides the stored depth: Pillow widens low-depth grayscale
    # and narrows 16-bit color to 8 bits.
    header = _ihdr_header(data)
    if header is None:
        raise DecodeError("PNG is missing its IHDR header")
    bit_depth, png_color_type = header
    if bit_depth != 8 and png_color_type != PNG_COLOR_TYPE_PALETTE:
        raise DecodeError(
            f"Unsupported PNG bit depth {bit_depth}. Only 8 bits per channel is supported."
        )

    try:
        img.load()
    except (OSError, EOFError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Could not decode image: {e}") from e

    color_type = MODE_COLOR_TYPES.get(img.mode)
    if color_type is None:
        raise DecodeError(
            f"Unsupported PNG pixel mode '{img.mode}'. "
            f"Only 8-bit grayscale, grayscale+alpha, RGB, RGBA and palette images are read."
        )

    width, height = img.size
    return DecodedImage(
        pixels=img.tobytes(),
        width=width,
        height=height,
        color_type=color_type,
    )


def encode_png(image: DecodedImage) -> bytes:
    """Encode a pixel buffer back to PNG bytes.

    Raises:
        EncodeError: Unsupported color type, wrong buffer size or Pillow failure.
    """
    mode = COLOR_TYPE_MODES.get(image.color_type)
    if mode is None:
        raise EncodeError(f"Cannot encode {image.color_type.value} images")
    if image.bit_depth != 8:
        raise EncodeError(f"Cannot encode bit depth {image.bit_depth}, only 8 is supported")

    try:
        img = Image.frombytes(mode, (image.width, image.height), bytes(image.pixels))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
    except (ValueError, OSError) as e:
        raise EncodeError(f"Could not encode image: {e}") from e
    return buf.getvalue()
