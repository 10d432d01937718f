# hexkudo/utils/axial.py
"""
Axial-coordinate neighbour and symmetry helpers for hexagonal grids.

Axial convention (pointy-top hexagons):
- A cell is (q, r); the implicit third cube coordinate is s = -q - r
- q grows to the east, r grows to the south-east
- The six neighbours are the six unit cube moves

Symmetries are the 12 elements of the dihedral group of the hexagon
(6 rotations, 6 reflections) acting on cube coordinates around the origin.

Reference: Red Blob Games hexagonal grid guide
https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations
from typing import Callable, Iterable, List, Tuple


Cell = Tuple[int, int]

# Neighbour deltas, clockwise from east
AXIAL_DELTAS: Tuple[Tuple[int, int], ...] = (
    ( 1,  0),  # east
    ( 0,  1),  # south-east
    (-1,  1),  # south-west
    (-1,  0),  # west
    ( 0, -1),  # north-west
    ( 1, -1),  # north-east
)


def axial_neighbors(q: int, r: int) -> List[Cell]:
    """
    Return the six lattice neighbours of (q, r), in clockwise order from east.

    No bounds are applied; callers filter against their own cell set.
    """
    return [(q + dq, r + dr) for dq, dr in AXIAL_DELTAS]


def hex_distance(a: Cell, b: Cell) -> int:
    """Lattice distance between two cells (ignores holes in a grid)."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


# =============================================================================
# SYMMETRY GROUP
# =============================================================================

def _rotate(cell: Cell, steps: int) -> Cell:
    """Rotate a cell by steps * 60 degrees clockwise around the origin."""
    q, r = cell
    s = -q - r
    for _ in range(steps % 6):
        q, r, s = -r, -s, -q
    return (q, r)


def _reflect(cell: Cell) -> Cell:
    """Mirror a cell across the q axis (swap r and s)."""
    q, r = cell
    return (q, -q - r)


def symmetry_transform(index: int) -> Callable[[Cell], Cell]:
    """
    Return symmetry number `index` (0..11) of the hexagon as a cell function.

    0..5 are rotations by index * 60 degrees; 6..11 are the reflection
    followed by rotation (index - 6) * 60 degrees. Index 0 is the identity.
    """
    if not 0 <= index < 12:
        raise ValueError(f"symmetry index {index} out of range [0, 12)")
    steps = index % 6
    if index < 6:
        return lambda cell: _rotate(cell, steps)
    return lambda cell: _rotate(_reflect(cell), steps)


def normalize_translation(cells: Iterable[Cell], reference: Cell) -> Tuple[Cell, ...]:
    """
    Translate cells so that their lexicographically smallest member lands on
    `reference`. Lexicographic order is preserved by translation, so two
    congruent cell sets normalise to the same tuple.
    """
    ordered = sorted(cells)
    if not ordered:
        return ()
    dq = reference[0] - ordered[0][0]
    dr = reference[1] - ordered[0][1]
    return tuple((q + dq, r + dr) for q, r in ordered)
