"""
Path - an ordered Hamiltonian numbering of a grid.

Number k (1-based) is written in cell `path[k - 1]`.
"""
from typing import Dict, Iterable, Iterator, List, Tuple

from hexkudo.core.types import Cell, ValidationError


class Path:
    """
    Immutable sequence of cells; position i holds number i + 1.

    A Path does not know its grid; use `validate(grid)` to check that it is a
    Hamiltonian path of a given grid.
    """

    __slots__ = ("_cells", "_numbers")

    def __init__(self, cells: Iterable[Cell]):
        self._cells: Tuple[Cell, ...] = tuple((int(q), int(r)) for q, r in cells)
        self._numbers: Dict[Cell, int] = {c: i + 1 for i, c in enumerate(self._cells)}

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, index):
        return self._cells[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, Path):
            return self._cells == other._cells
        if isinstance(other, tuple):
            return self._cells == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Path({list(self._cells)})"

    def cell_at(self, number: int) -> Cell:
        """Cell holding `number` (1..N)."""
        if not 1 <= number <= len(self._cells):
            raise ValueError(f"Number {number} out of range (1-{len(self._cells)})")
        return self._cells[number - 1]

    def number_of(self, cell: Cell) -> int:
        """Number written in `cell`."""
        return self._numbers[cell]

    def as_assignment(self) -> Dict[Cell, int]:
        """Full cell -> number mapping."""
        return dict(self._numbers)

    def links(self) -> List[Tuple[Cell, Cell]]:
        """Consecutive cell pairs (k, k + 1) along the path."""
        return [(self._cells[i], self._cells[i + 1]) for i in range(len(self._cells) - 1)]

    def validate(self, grid) -> List[ValidationError]:
        """
        Check the Hamiltonian-path property against a grid.

        Returns:
            list[ValidationError]; empty list == valid path
        """
        errors: List[ValidationError] = []
        if len(self._numbers) != len(self._cells):
            errors.append(ValidationError("error", "Path visits a cell more than once"))
        if len(self._cells) != len(grid):
            errors.append(ValidationError(
                "error", f"Path has {len(self._cells)} cells, grid has {len(grid)}"
            ))
        for cell in self._cells:
            if not grid.contains(cell):
                errors.append(ValidationError("error", "Path cell is not in the grid", location=cell))
        for a, b in self.links():
            if b not in grid.neighbors(a):
                errors.append(ValidationError(
                    "error",
                    f"Consecutive numbers {self._numbers.get(a)} and {self._numbers.get(a, 0) + 1} are not adjacent",
                    location=a
                ))
        return errors

    def is_valid(self, grid) -> bool:
        return not self.validate(grid)
