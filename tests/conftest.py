"""
Conftest: shared fixtures for all PNGSort test modules.

1. Synthetic pixel grids (numpy) for the sorters
2. Encoded PNG bytes (Pillow) for the engine, codec and CLI
"""

import io
import os
import sys

import numpy as np
import pytest
from PIL import Image

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_test_grid(width=8, height=6, channels=3, seed=7):
    """Random (H, W, C) uint8 grid. Fixed seed so failures reproduce."""
    rng = np.random.RandomState(seed)
    return rng.randint(0, 256, (height, width, channels), dtype=np.uint8)


def _png_bytes(grid):
    """Encode a (H, W, C) or (H, W) grid as PNG bytes with Pillow."""
    if grid.ndim == 3 and grid.shape[2] == 1:
        grid = grid[:, :, 0]
    buf = io.BytesIO()
    Image.fromarray(grid).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def rgb_grid():
    """8x6 random RGB grid."""
    return _make_test_grid(8, 6, 3)


@pytest.fixture
def rgba_grid():
    """8x6 random RGBA grid."""
    return _make_test_grid(8, 6, 4, seed=11)


@pytest.fixture
def gray_grid():
    """8x6 random grayscale grid, one channel."""
    return _make_test_grid(8, 6, 1, seed=3)


@pytest.fixture
def tied_grid():
    """5x4 RGB grid with only a few distinct R values, so keys tie a lot.

    G and B encode the original row-major position, which makes the input
    order of tied pixels readable from the output.
    """
    h, w = 4, 5
    grid = np.zeros((h, w, 3), dtype=np.uint8)
    grid[:, :, 0] = np.array([30, 10, 30, 20, 10] * h).reshape(h, w)
    grid[:, :, 1] = np.arange(h * w).reshape(h, w)
    grid[:, :, 2] = 0
    return grid


@pytest.fixture
def rgb_png(rgb_grid):
    return _png_bytes(rgb_grid)


@pytest.fixture
def rgba_png(rgba_grid):
    return _png_bytes(rgba_grid)


@pytest.fixture
def gray_png(gray_grid):
    return _png_bytes(gray_grid)


@pytest.fixture
def palette_png():
    """4x4 palette (indexed) PNG."""
    img = Image.new("P", (4, 4))
    img.putpalette([0, 0, 0, 255, 0, 0, 0, 255, 0, 0, 0, 255] + [0] * (256 * 3 - 12))
    img.putdata([0, 1, 2, 3] * 4)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
