"""
PNGSort — Sort Keys
Turns a pixel's bytes into an integer so that ascending key order is the
desired ascending pixel order. Used by the tied sorter only.
"""

from enum import Enum

import numpy as np

from core.config import ColorType, SortMode


class KeyStrategy(str, Enum):
    GRAYSCALE_INTENSITY = "grayscale_intensity"
    RGB_SUM = "rgb_sum"
    RGB_ORDER = "rgb_order"


def _grayscale_intensity(pixels, channels):
    """Intensity byte. Alpha, if present, is ignored."""
    return pixels[..., 0].astype(np.int64)


def _rgb_sum(pixels, channels):
    """Sum of the selected channel bytes."""
    key = np.zeros(pixels.shape[:-1], dtype=np.int64)
    for ch in channels:
        key += pixels[..., ch.offset]
    return key


def _rgb_order(pixels, channels):
    """Selected channels packed big-endian: first channel is the primary key."""
    key = np.zeros(pixels.shape[:-1], dtype=np.int64)
    for ch in channels:
        key = (key << 8) | pixels[..., ch.offset]
    return key


SORT_KEYS = {
    KeyStrategy.GRAYSCALE_INTENSITY: _grayscale_intensity,
    KeyStrategy.RGB_SUM: _rgb_sum,
    KeyStrategy.RGB_ORDER: _rgb_order,
}


def select_key_strategy(color_type: ColorType, sort_mode: SortMode | None) -> KeyStrategy:
    """Pick the key strategy for a validated config.

    Raises:
        ValueError: For Untied mode or an unsupported color type, neither of
            which has a pixel key.
    """
    if color_type.is_grayscale:
        return KeyStrategy.GRAYSCALE_INTENSITY
    if color_type in (ColorType.RGB, ColorType.RGBA):
        if sort_mode in (None, SortMode.TIED_BY_SUM):
            return KeyStrategy.RGB_SUM
        if sort_mode == SortMode.TIED_BY_ORDER:
            return KeyStrategy.RGB_ORDER
        raise ValueError(f"Sort mode {sort_mode.value} has no pixel key")
    raise ValueError(f"No sort key for color type {color_type.value}")


def compute_keys(pixels: np.ndarray, strategy: KeyStrategy, channels=(),
                 descending: bool = False) -> np.ndarray:
    """Keys for every pixel in an (..., bytes_per_pixel) uint8 array.

    Descending negates the keys instead of reversing the sorted result,
    so pixels with equal keys keep their original relative order.

    Returns:
        int64 array shaped like pixels without its last axis.
    """
    keys = SORT_KEYS[strategy](pixels, channels)
    return -keys if descending else keys


def pixel_key(pixel, strategy: KeyStrategy, channels=(), descending: bool = False) -> int:
    """Key for a single pixel given as bytes or a sequence of ints."""
    arr = np.frombuffer(bytes(pixel), dtype=np.uint8)
    return int(compute_keys(arr, strategy, channels, descending))
