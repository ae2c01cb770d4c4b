"""
geometry.py - Winning-line geometry for Connect Four boards

Every straight run of ``n`` cells (two diagonal directions, horizontal and
vertical) is enumerated as a tuple of flat board indices. The table only
depends on the board dimensions, so the numpy form is cached and shared by
terminal detection and the evaluator.
"""

from functools import lru_cache
from typing import List, Tuple

import numpy as np

Line = Tuple[int, ...]


def _check_dimensions(rows: int, cols: int, n: int) -> None:
    if n < 1:
        raise ValueError(f"Line length must be positive, got {n}")
    if rows < 1 or cols < 1:
        raise ValueError(f"Board must have at least one row and column, got {rows}x{cols}")
    if rows < n and cols < n:
        raise ValueError(f"A {rows}x{cols} board cannot hold a line of {n}")


def all_lines(rows: int, cols: int, n: int) -> List[Line]:
    """
    Enumerate all lines of ``n`` cells on a ``rows`` x ``cols`` board.

    The order is fixed: ascending diagonals, descending diagonals,
    horizontal runs, vertical runs. Overlapping lines are all kept.

    Args:
        rows: Number of rows (row 0 is the bottom)
        cols: Number of columns
        n: Line length

    Returns:
        A new list of index tuples on every call
    """
    _check_dimensions(rows, cols, n)
    lines: List[Line] = []

    # Ascending diagonals: up one row and right one column per step
    for r in range(rows - n + 1):
        for c in range(cols - n + 1):
            lines.append(tuple((r + i) * cols + c + i for i in range(n)))

    # Descending diagonals, anchored in the upper rows
    for r in range(n - 1, rows):
        for c in range(cols - n + 1):
            lines.append(tuple((r - i) * cols + c + i for i in range(n)))

    # Horizontal
    for c in range(cols - n + 1):
        for r in range(rows):
            lines.append(tuple(r * cols + c + i for i in range(n)))

    # Vertical
    for c in range(cols):
        for r in range(rows - n + 1):
            lines.append(tuple((r + i) * cols + c for i in range(n)))

    return lines


@lru_cache(maxsize=None)
def line_table(rows: int, cols: int, n: int) -> np.ndarray:
    """Read-only ``(num_lines, n)`` index array for the given dimensions."""
    table = np.array(all_lines(rows, cols, n), dtype=np.intp).reshape(-1, n)
    table.setflags(write=False)
    return table


def lines_through(rows: int, cols: int, n: int, index: int) -> List[Line]:
    """All lines that contain the cell at flat ``index``."""
    if not 0 <= index < rows * cols:
        raise ValueError(f"Cell index {index} is off a {rows}x{cols} board")
    return [line for line in all_lines(rows, cols, n) if index in line]
