"""
PNGSort — Layout Traversal Tests
Groups, read order and write-back for each sort range.

Run with: pytest tests/test_layout.py -v
"""

import numpy as np
import pytest

from core.config import SortRange
from effects.layout import from_groups, read_order, to_groups, write_order


@pytest.fixture
def offsets():
    """3 rows x 4 columns holding their own row-major offset."""
    return np.arange(12).reshape(3, 4)


class TestGroups:

    def test_row(self, offsets):
        groups = to_groups(offsets, SortRange.ROW)
        assert groups.shape == (3, 4)
        np.testing.assert_array_equal(groups[1], [4, 5, 6, 7])

    def test_column(self, offsets):
        groups = to_groups(offsets, SortRange.COLUMN)
        assert groups.shape == (4, 3)
        np.testing.assert_array_equal(groups[2], [2, 6, 10])

    @pytest.mark.parametrize("sort_range", [SortRange.ROW_MAJOR, SortRange.COLUMN_MAJOR])
    def test_whole_image_reads_row_major(self, offsets, sort_range):
        groups = to_groups(offsets, sort_range)
        assert groups.shape == (1, 12)
        np.testing.assert_array_equal(groups[0], np.arange(12))

    def test_keeps_trailing_axes(self):
        grid = np.zeros((3, 4, 2), dtype=np.uint8)
        assert to_groups(grid, SortRange.COLUMN).shape == (4, 3, 2)
        assert to_groups(grid, SortRange.ROW_MAJOR).shape == (1, 12, 2)

    @pytest.mark.parametrize("sort_range", [SortRange.ROW, SortRange.COLUMN, SortRange.ROW_MAJOR])
    def test_unchanged_groups_round_trip(self, offsets, sort_range):
        back = from_groups(to_groups(offsets, sort_range), sort_range, 3, 4)
        np.testing.assert_array_equal(back, offsets)

    def test_column_major_write_fills_columns(self):
        ranks = np.arange(12).reshape(1, 12)
        grid = from_groups(ranks, SortRange.COLUMN_MAJOR, 3, 4)
        np.testing.assert_array_equal(grid, [
            [0, 3, 6, 9],
            [1, 4, 7, 10],
            [2, 5, 8, 11],
        ])


class TestOrders:

    def test_row_major_write_matches_read(self):
        np.testing.assert_array_equal(
            write_order(SortRange.ROW_MAJOR, 4, 3), read_order(SortRange.ROW_MAJOR, 4, 3))

    def test_column_major_write_order(self):
        # rank i goes to column i // 3, row i % 3
        order = write_order(SortRange.COLUMN_MAJOR, 4, 3)
        np.testing.assert_array_equal(order[0], [0, 4, 8, 1, 5, 9, 2, 6, 10, 3, 7, 11])

    def test_column_orders(self):
        np.testing.assert_array_equal(read_order(SortRange.COLUMN, 2, 3), [[0, 2, 4], [1, 3, 5]])
        np.testing.assert_array_equal(write_order(SortRange.COLUMN, 2, 3), [[0, 2, 4], [1, 3, 5]])

    @pytest.mark.parametrize("sort_range", list(SortRange))
    def test_orders_cover_every_pixel_once(self, sort_range):
        for order in (read_order(sort_range, 5, 7), write_order(sort_range, 5, 7)):
            np.testing.assert_array_equal(np.sort(order.ravel()), np.arange(35))
