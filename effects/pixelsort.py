"""
PNGSort — Pixel Sort
Two ways of reordering an image:

    tied    whole pixels move, all channel bytes together
    untied  each selected channel's bytes are sorted on their own,
            so a pixel's R, G and B can end up in different places
"""

import numpy as np

from effects.layout import to_groups, from_groups
from effects.sort_keys import compute_keys


def _as_grid(buffer, width: int, height: int, bytes_per_pixel: int) -> np.ndarray:
    """View a flat row-major buffer as an (H, W, bpp) uint8 array."""
    expected = width * height * bytes_per_pixel
    if len(buffer) != expected:
        raise ValueError(
            f"Buffer is {len(buffer)} bytes, expected {expected} "
            f"for {width}x{height} at {bytes_per_pixel} bytes/pixel"
        )
    return np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(height, width, bytes_per_pixel)


def sort_tied(buffer, width: int, height: int, bytes_per_pixel: int, key_strategy,
              channels, descending: bool, sort_range) -> bytes:
    """Stable-sort whole pixels inside each group of sort_range.

    Args:
        buffer: Row-major pixel bytes, no padding.
        key_strategy: KeyStrategy used to rank pixels.
        channels: ColorChannels read by the key (ignored for grayscale).
        descending: Rank by negated key; equal keys keep their input order.
        sort_range: SortRange deciding groups and write-back.

    Returns:
        New buffer of the same length.
    """
    grid = _as_grid(buffer, width, height, bytes_per_pixel)
    keys = compute_keys(grid, key_strategy, channels, descending)

    group_keys = to_groups(keys, sort_range)
    group_pixels = to_groups(grid, sort_range)
    order = np.argsort(group_keys, axis=1, kind="stable")
    ranked = np.take_along_axis(group_pixels, order[..., np.newaxis], axis=1)

    return from_groups(ranked, sort_range, height, width).tobytes()


def sort_untied(buffer, width: int, height: int, bytes_per_pixel: int, channels,
                descending: bool, sort_range) -> bytes:
    """Sort each channel's bytes independently inside each group.

    Channels are processed in listed order on a private copy. Each pass
    touches only its own byte offset, so alpha and unselected channels keep
    their input values.

    Returns:
        New buffer of the same length.
    """
    result = _as_grid(buffer, width, height, bytes_per_pixel).copy()

    for ch in channels:
        values = to_groups(result[:, :, ch.offset], sort_range)
        if descending:
            # inverted comparison rather than reversing the sorted run
            ranked = -np.sort(-values.astype(np.int16), axis=1, kind="stable")
        else:
            ranked = np.sort(values, axis=1, kind="stable")
        result[:, :, ch.offset] = from_groups(ranked.astype(np.uint8), sort_range, height, width)

    return result.tobytes()
