"""
PNGSort — Layout Traversal
Splits an (H, W, ...) grid into the groups that get sorted together, and
puts sorted groups back into the grid.

    Row          H groups of W, one per row
    Column       W groups of H, one per column
    RowMajor     1 group of H*W in row-major order, written back row-major
    ColumnMajor  1 group of H*W in row-major order; rank i is written to
                 column i // H, row i % H

Groups come out as a (n_groups, group_len, ...) array so a whole layout can be
sorted with a single argsort along axis 1.
"""

import numpy as np

from core.config import SortRange


def to_groups(grid: np.ndarray, sort_range: SortRange) -> np.ndarray:
    """Gather grid values into sortable groups, in read order."""
    h, w = grid.shape[:2]
    rest = grid.shape[2:]
    if sort_range == SortRange.ROW:
        return grid
    if sort_range == SortRange.COLUMN:
        return grid.swapaxes(0, 1)
    if sort_range in (SortRange.ROW_MAJOR, SortRange.COLUMN_MAJOR):
        return grid.reshape((1, h * w) + rest)
    raise ValueError(f"Unknown sort range: {sort_range}")


def from_groups(groups: np.ndarray, sort_range: SortRange,
                height: int, width: int) -> np.ndarray:
    """Lay sorted groups back out as an (H, W, ...) grid."""
    rest = groups.shape[2:]
    if sort_range == SortRange.ROW:
        return groups
    if sort_range == SortRange.COLUMN:
        return groups.swapaxes(0, 1)
    if sort_range == SortRange.ROW_MAJOR:
        return groups.reshape((height, width) + rest)
    if sort_range == SortRange.COLUMN_MAJOR:
        # width runs of height consecutive ranks, each run fills one column
        return groups.reshape((width, height) + rest).swapaxes(0, 1)
    raise ValueError(f"Unknown sort range: {sort_range}")


def read_order(sort_range: SortRange, width: int, height: int) -> np.ndarray:
    """Row-major pixel offsets each group reads, shaped (n_groups, group_len)."""
    offsets = np.arange(width * height).reshape(height, width)
    return np.ascontiguousarray(to_groups(offsets, sort_range))


def write_order(sort_range: SortRange, width: int, height: int) -> np.ndarray:
    """Row-major pixel offsets that receive each rank, shaped like read_order.

    Rank r of group g lands at write_order(...)[g, r].
    """
    offsets = np.arange(width * height).reshape(height, width)
    if sort_range == SortRange.COLUMN_MAJOR:
        return np.ascontiguousarray(offsets.T.reshape(1, width * height))
    return read_order(sort_range, width, height)
