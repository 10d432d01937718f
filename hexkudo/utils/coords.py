"""
Offset-layout and string conversions for axial coordinates.

EVEN-R offset rows (even rows shifted right by half a hexagon) are used for
rectangular layouts, ASCII-art parsing and rendering.
"""
from typing import Tuple

Cell = Tuple[int, int]


def evenr_to_axial(row: int, col: int) -> Cell:
    """Convert EVEN-R (row, col) to axial (q, r)."""
    q = col - (row + (row & 1)) // 2
    return q, row


def axial_to_evenr(q: int, r: int) -> Tuple[int, int]:
    """Convert axial (q, r) to EVEN-R (row, col)."""
    col = q + (r + (r & 1)) // 2
    return r, col

