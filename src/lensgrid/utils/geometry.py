"""Pixel <-> grid cell conversions.

All helpers take the ``Grid`` explicitly; nothing here reads ambient state.
"""
from __future__ import annotations

import math
from typing import Tuple

from lensgrid.components.grid import Grid
from lensgrid.components.drag_session import HORIZONTAL

Cell = Tuple[int, int]


def round_half_up(value: float) -> int:
    # round() would send 2.5 to 2; cell classification needs 2.5 -> 3.
    return int(math.floor(value + 0.5))


def cell_origin(grid: Grid, row: int, col: int) -> Tuple[float, float]:
    return grid.origin_x + col * grid.cell_size, grid.origin_y + row * grid.cell_size


def cell_index_of(grid: Grid, x: float, y: float) -> Cell:
    """Nearest (row, col) for a cell origin at (x, y); valid mid-animation too."""
    col = round_half_up((x - grid.origin_x) / grid.cell_size)
    row = round_half_up((y - grid.origin_y) / grid.cell_size)
    return row, col


def in_bounds(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < grid.rows and 0 <= col < grid.cols


def line_length(grid: Grid, axis: str) -> float:
    if axis == HORIZONTAL:
        return grid.cols * grid.cell_size
    return grid.rows * grid.cell_size


def wrap_offset(value: float, length: float) -> float:
    """Reduce ``value`` into [0, length)."""
    wrapped = value % length
    # Float modulo of tiny negatives can round up to exactly ``length``.
    if wrapped >= length:
        wrapped -= length
    return wrapped


def centered_origin(
    viewport_width: float,
    viewport_height: float,
    rows: int,
    cols: int,
    cell_size: float,
    spacing: float = 0,
) -> Tuple[float, float]:
    total_width = cols * cell_size + (cols - 1) * spacing
    total_height = rows * cell_size + (rows - 1) * spacing
    return (viewport_width - total_width) / 2, (viewport_height - total_height) / 2
