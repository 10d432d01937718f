"""
HexGrid - Immutable hexagonal grid model for Hexkudo puzzles.

This module provides the core grid representation using axial coordinates.
A grid is a fixed set of cells plus the adjacency induced by the hex lattice.

Supported layouts:
- Named shapes built from (shape, size): hexagon, classic, parallelogram,
  triangle, rectangle
- Custom layouts from staggered ASCII art or an explicit cell list

Construction fails with InvalidShape for empty, single-cell or disconnected
layouts, so every HexGrid in existence is a valid playing field.
"""
from collections import deque
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from hexkudo.core.errors import InvalidShape
from hexkudo.core.types import Cell, CellKind, ValidationError
from hexkudo.utils.axial import axial_neighbors, normalize_translation, symmetry_transform
from hexkudo.utils.coords import evenr_to_axial

CUSTOM_SHAPE = "custom"


def _hexagon_cells(size: int) -> List[Cell]:
    return [
        (q, r)
        for q in range(-size, size + 1)
        for r in range(-size, size + 1)
        if abs(q + r) <= size
    ]


def _classic_cells(size: int) -> List[Cell]:
    return [c for c in _hexagon_cells(size) if c != (0, 0)]


def _parallelogram_cells(size: int) -> List[Cell]:
    return [(q, r) for q in range(size) for r in range(size)]


def _triangle_cells(size: int) -> List[Cell]:
    return [(q, r) for q in range(size) for r in range(size - q)]


def _rectangle_cells(size: int) -> List[Cell]:
    return [evenr_to_axial(row, col) for row in range(size) for col in range(size)]


# shape name -> (cell factory, blocked cells factory)
SHAPE_BUILDERS: Dict[str, Tuple[Callable[[int], List[Cell]], Callable[[int], List[Cell]]]] = {
    "hexagon": (_hexagon_cells, lambda size: []),
    "classic": (_classic_cells, lambda size: [(0, 0)]),
    "parallelogram": (_parallelogram_cells, lambda size: []),
    "triangle": (_triangle_cells, lambda size: []),
    "rectangle": (_rectangle_cells, lambda size: []),
}


class HexGrid:
    """
    Immutable grid of hex cells for Hexkudo puzzles.

    Responsibilities:
        - Hold the cell set and the adjacency derived from the hex lattice
        - Answer membership, neighbour and graph-distance queries
        - Report the symmetries of the layout
        - Serialize to and from plain dicts

    Attributes:
        shape: Shape name ("custom" for ASCII-art or explicit layouts)
        size: Size parameter for named shapes, None for custom layouts
        blocked: Cells drawn as a logo but not part of the graph (classic centre)
    """

    def __init__(self, cells: Iterable[Cell], shape: str = CUSTOM_SHAPE,
                 size: Optional[int] = None, blocked: Iterable[Cell] = ()):
        """
        Initialize a grid from its cells.

        Args:
            cells: Axial (q, r) coordinates of the playable cells
            shape: Shape name recorded for serialization
            size: Size parameter recorded for serialization
            blocked: Non-playable marker cells (never part of the graph)

        Raises:
            InvalidShape: Fewer than 2 cells or a disconnected layout
        """
        cell_set = frozenset((int(q), int(r)) for q, r in cells)
        if len(cell_set) < 2:
            raise InvalidShape(f"A grid needs at least 2 cells, got {len(cell_set)}")

        self._cells: FrozenSet[Cell] = cell_set
        self._sorted: Tuple[Cell, ...] = tuple(sorted(cell_set))
        self._adjacency: Dict[Cell, FrozenSet[Cell]] = {
            c: frozenset(n for n in axial_neighbors(*c) if n in cell_set)
            for c in self._sorted
        }
        self.shape: str = shape
        self.size: Optional[int] = size
        self.blocked: FrozenSet[Cell] = frozenset(b for b in blocked if b not in cell_set)

        # Lazily computed caches (pure functions of the cell set)
        self._distances: Optional[Dict[Cell, Dict[Cell, int]]] = None
        self._symmetries: Optional[List[Dict[Cell, Cell]]] = None

        is_connected, conn_msg = self.validate_connectivity()
        if not is_connected:
            raise InvalidShape(f"Disconnected layout: {conn_msg}")

    # =============================================================================
    # CONSTRUCTION
    # =============================================================================

    @classmethod
    def build(cls, shape: str, size: int) -> 'HexGrid':
        """
        Build a named shape.

        Args:
            shape: One of SHAPE_BUILDERS ("hexagon", "classic", ...)
            size: Radius for hexagon/classic, side length otherwise

        Returns:
            The grid

        Raises:
            InvalidShape: Unknown shape, size < 1, or a layout that is too small
        """
        key = str(shape).strip().lower()
        if key not in SHAPE_BUILDERS:
            raise InvalidShape(
                f"Unknown shape {shape!r}; expected one of {', '.join(sorted(SHAPE_BUILDERS))}"
            )
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidShape(f"Grid size must be an integer, got {size!r}")
        if size < 1:
            raise InvalidShape(f"Grid size must be >= 1, got {size}")

        cell_factory, blocked_factory = SHAPE_BUILDERS[key]
        return cls(cell_factory(size), shape=key, size=size, blocked=blocked_factory(size))

    @classmethod
    def from_cells(cls, cells: Iterable[Cell], blocked: Iterable[Cell] = ()) -> 'HexGrid':
        """Create a custom grid from explicit axial coordinates."""
        return cls(cells, shape=CUSTOM_SHAPE, size=None, blocked=blocked)

    @classmethod
    def from_ascii(cls, art: str) -> 'HexGrid':
        """
        Create a custom grid from staggered ASCII art such as:

               O O
              O O O
             O O O O
            O O X O O
             O O O O
              O O O
               O O

        `o`/`O` is a cell, `x`/`X` a blocked logo cell, anything else background.
        Horizontal neighbours are two characters apart, diagonal neighbours one
        character left or right on the next line.

        Raises:
            InvalidShape: Inconsistent stagger, too few cells, or disconnected
        """
        marks: Dict[Tuple[int, int], CellKind] = {}
        for y, line in enumerate(art.splitlines()):
            for x, ch in enumerate(line):
                if ch in "oO":
                    marks[(x, y)] = CellKind.CELL
                elif ch in "xX":
                    marks[(x, y)] = CellKind.BLOCKED

        if not marks:
            raise InvalidShape("ASCII layout contains no cells")

        parities = {(x - y) % 2 for (x, y) in marks}
        if len(parities) != 1:
            raise InvalidShape("ASCII layout mixes staggered and aligned columns")
        parity = parities.pop()

        cells: List[Cell] = []
        blocked: List[Cell] = []
        for (x, y), kind in marks.items():
            axial = ((x - y - parity) // 2, y)
            if kind == CellKind.CELL:
                cells.append(axial)
            else:
                blocked.append(axial)
        return cls(cells, shape=CUSTOM_SHAPE, size=None, blocked=blocked)

    # =============================================================================
    # QUERIES
    # =============================================================================

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """All cells in ascending (q, r) order."""
        return self._sorted

    def contains(self, cell: Cell) -> bool:
        """True if the cell belongs to the grid."""
        return cell in self._cells

    def __contains__(self, cell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._sorted)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._sorted)

    def __eq__(self, other) -> bool:
        if not isinstance(other, HexGrid):
            return NotImplemented
        return self._cells == other._cells and self.blocked == other.blocked

    def __hash__(self) -> int:
        return hash((self._cells, self.blocked))

    def __repr__(self) -> str:
        if self.shape == CUSTOM_SHAPE:
            return f"HexGrid(custom, {len(self)} cells)"
        return f"HexGrid({self.shape}, size={self.size}, {len(self)} cells)"

    def neighbors(self, cell: Cell) -> FrozenSet[Cell]:
        """
        Get the neighbours of a cell that are present in the grid.

        Returns:
            Frozen set of up to 6 cells; empty for cells outside the grid
        """
        return self._adjacency.get(cell, frozenset())

    def degree_one_cells(self) -> List[Cell]:
        """Cells with a single neighbour; any Hamiltonian path must end on them."""
        return [c for c in self._sorted if len(self._adjacency[c]) == 1]

    def distance(self, a: Cell, b: Cell) -> int:
        """
        Shortest number of adjacency steps between two cells of the grid.

        The full distance table is computed on first use (one BFS per cell).
        """
        if self._distances is None:
            self._distances = {c: self._bfs_distances(c) for c in self._sorted}
        return self._distances[a][b]

    def _bfs_distances(self, source: Cell) -> Dict[Cell, int]:
        dist = {source: 0}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for nbr in self._adjacency[current]:
                if nbr not in dist:
                    dist[nbr] = dist[current] + 1
                    queue.append(nbr)
        return dist

    # =============================================================================
    # SYMMETRY
    # =============================================================================

    def symmetries(self) -> List[Dict[Cell, Cell]]:
        """
        Rotations and reflections of the hex lattice that map this grid onto itself.

        Each symmetry is returned as a cell -> cell mapping. The identity is always
        the first entry. Transforms act around the origin and are then translated
        back onto the grid, so off-centre layouts are handled too.
        """
        if self._symmetries is not None:
            return self._symmetries

        anchor = self._sorted[0]
        found: List[Dict[Cell, Cell]] = []
        seen = set()
        for index in range(12):
            transform = symmetry_transform(index)
            moved = [transform(c) for c in self._sorted]
            if normalize_translation(moved, anchor) != self._sorted:
                continue
            low = min(moved)
            dq, dr = anchor[0] - low[0], anchor[1] - low[1]
            mapping = {
                c: (m[0] + dq, m[1] + dr) for c, m in zip(self._sorted, moved)
            }
            key = tuple(mapping[c] for c in self._sorted)
            if key in seen:
                continue
            seen.add(key)
            found.append(mapping)

        self._symmetries = found
        return found

    def transform_path(self, path: Sequence[Cell], symmetry: Dict[Cell, Cell]) -> Tuple[Cell, ...]:
        """Apply a symmetry mapping (from `symmetries()`) to a sequence of cells."""
        return tuple(symmetry[c] for c in path)

    # =============================================================================
    # VALIDATION
    # =============================================================================

    def validate_connectivity(self) -> Tuple[bool, str]:
        """
        Validate that all cells form a connected graph.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self._sorted:
            return False, "No cells found"

        # BFS to check connectivity
        start = self._sorted[0]
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nbr in self._adjacency[current]:
                if nbr not in visited:
                    visited.add(nbr)
                    queue.append(nbr)

        if len(visited) == len(self._sorted):
            return True, ""
        disconnected_count = len(self._sorted) - len(visited)
        return False, f"{disconnected_count} cells are disconnected"

    def validate(self) -> List[ValidationError]:
        """
        Return a list[ValidationError]. Empty list == VALID.
        Rules (hard errors):
        - Adjacency symmetry, no self-loops, endpoints exist
        - Graph connectivity must hold (single component)
        Warnings:
        - More than two cells of degree one (no Hamiltonian path can exist)
        """
        errors: List[ValidationError] = []

        for u, nbrs in self._adjacency.items():
            for v in nbrs:
                if v == u:
                    errors.append(ValidationError("error", "Self-loop in adjacency", location=u))
                    continue
                if v not in self._cells:
                    errors.append(ValidationError("error", "Adjacency references non-existent neighbor", location=v))
                    continue
                if u not in self._adjacency.get(v, frozenset()):
                    errors.append(ValidationError(
                        "error",
                        f"Asymmetric adjacency: {u} → {v} but not {v} → {u}",
                        location=u
                    ))

        is_connected, conn_msg = self.validate_connectivity()
        if not is_connected:
            errors.append(ValidationError("error", conn_msg))

        dead_ends = self.degree_one_cells()
        if len(dead_ends) > 2:
            errors.append(ValidationError(
                "warning",
                f"{len(dead_ends)} cells have a single neighbor; no path can visit them all",
                location=dead_ends[0]
            ))

        return errors

    def get_statistics(self) -> Dict:
        """
        Get grid statistics.

        Returns:
            Dict with cell, edge and degree counts
        """
        degrees = [len(self._adjacency[c]) for c in self._sorted]
        return {
            "shape": self.shape,
            "size": self.size,
            "cells": len(self._sorted),
            "edges": sum(degrees) // 2,
            "blocked_cells": len(self.blocked),
            "boundary_cells": sum(1 for d in degrees if d < 6),
            "degree_one_cells": sum(1 for d in degrees if d == 1),
            "symmetries": len(self.symmetries()),
        }

    # =============================================================================
    # SERIALIZATION
    # =============================================================================

    def to_dict(self) -> Dict:
        """
        Export the grid.

        Named shapes export shape and size only; custom layouts also export their
        cells and blocked cells.
        """
        data: Dict = {"shape": self.shape, "size": self.size}
        if self.shape == CUSTOM_SHAPE:
            data["cells"] = [[q, r] for q, r in self._sorted]
            data["blocked"] = [[q, r] for q, r in sorted(self.blocked)]
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'HexGrid':
        """
        Create a HexGrid from exported data.

        Raises:
            InvalidShape: Malformed or inconsistent grid data
        """
        if not isinstance(data, dict):
            raise InvalidShape(f"Grid data must be an object, got {type(data).__name__}")
        shape = data.get("shape", CUSTOM_SHAPE)
        if shape != CUSTOM_SHAPE:
            return cls.build(shape, data.get("size"))

        raw_cells = data.get("cells")
        if not raw_cells:
            raise InvalidShape("Custom grid data has no cells")
        try:
            cells = [(int(c[0]), int(c[1])) for c in raw_cells]
            blocked = [(int(c[0]), int(c[1])) for c in data.get("blocked", []) or []]
        except (TypeError, ValueError, IndexError) as exc:
            raise InvalidShape(f"Malformed cell coordinates: {exc}") from exc
        return cls.from_cells(cells, blocked=blocked)
