"""
Puzzle - an immutable Hexkudo puzzle and its JSON persistence.

A puzzle is a grid, the clue numbers shown to the player, optional links
(adjacent cells known to hold consecutive numbers) and the solution path the
clues were derived from.

JSON layout (format_version 1):
    {
      "format_version": 1,
      "grid": {"shape": "hexagon", "size": 3},
      "clues": [[q, r, number], ...],
      "links": [[[q, r], [q, r]], ...],
      "solution": [[q, r], ...],
      "seed": 42,
      "difficulty": "medium"
    }
"""
import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from hexkudo.core.errors import InvalidPuzzleData, InvalidShape
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.solver import solve
from hexkudo.core.types import Cell, Difficulty, SolverStatus, ValidationError

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

Link = Tuple[Cell, Cell]


def _as_int(value) -> int:
    """Integer value of a JSON number; floats with a fraction and booleans are rejected."""
    if isinstance(value, bool) or int(value) != value:
        raise ValueError(f"{value!r} is not an integer")
    return int(value)


class Puzzle:
    """
    Immutable puzzle.

    Attributes:
        grid: Playing field
        clues: Read-only mapping cell -> number
        links: Sorted tuple of linked cell pairs
        solution: The unique completing Path
        seed: Seed the puzzle was built from (None when unknown)
        difficulty: Estimated tier
    """

    __slots__ = ("grid", "clues", "links", "solution", "seed", "difficulty")

    def __init__(self, grid: HexGrid, clues: Mapping[Cell, int], solution: Path,
                 links: Iterable[Sequence[Cell]] = (), seed: Optional[int] = None,
                 difficulty: Difficulty = Difficulty.EASY):
        object.__setattr__(self, "grid", grid)
        object.__setattr__(self, "clues", MappingProxyType(dict(clues)))
        object.__setattr__(self, "links", tuple(sorted(tuple(sorted((tuple(a), tuple(b)))) for a, b in links)))
        object.__setattr__(self, "solution", solution)
        object.__setattr__(self, "seed", seed)
        object.__setattr__(self, "difficulty", Difficulty.parse(difficulty))

    def __setattr__(self, name, value):
        raise AttributeError("Puzzle is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Puzzle):
            return NotImplemented
        return (self.grid == other.grid and dict(self.clues) == dict(other.clues)
                and self.links == other.links and self.solution == other.solution
                and self.seed == other.seed and self.difficulty == other.difficulty)

    def __hash__(self) -> int:
        return hash((self.grid, self.solution, self.links, tuple(sorted(self.clues.items()))))

    def __repr__(self) -> str:
        return (f"Puzzle({self.grid.shape}, size={self.grid.size}, cells={len(self.grid)}, "
                f"clues={len(self.clues)}, links={len(self.links)}, {self.difficulty.label})")

    @property
    def size(self) -> int:
        """Number of cells, i.e. the largest number N."""
        return len(self.grid)

    @property
    def clue_count(self) -> int:
        return len(self.clues) + len(self.links)

    # =============================================================================
    # VALIDATION
    # =============================================================================

    def validate(self, check_unique: bool = False) -> List[ValidationError]:
        """
        Check that clues and links agree with the solution path.

        Args:
            check_unique: Also run the solver to confirm the clues have exactly
                one completion (slow on large grids)

        Returns:
            list[ValidationError]; empty list == consistent puzzle
        """
        errors = list(self.solution.validate(self.grid))
        if errors:
            return errors

        for cell, number in self.clues.items():
            if cell not in self.grid:
                errors.append(ValidationError("error", "Clue cell is not in the grid", location=cell))
            elif self.solution.number_of(cell) != number:
                errors.append(ValidationError(
                    "error", f"Clue {number} disagrees with solution value {self.solution.number_of(cell)}",
                    location=cell
                ))

        for a, b in self.links:
            if a not in self.grid or b not in self.grid:
                errors.append(ValidationError("error", "Link cell is not in the grid", location=a))
            elif abs(self.solution.number_of(a) - self.solution.number_of(b)) != 1:
                errors.append(ValidationError("error", f"Link {a}-{b} is not on the solution path", location=a))

        if check_unique and not errors:
            result = solve(self.grid, self.clues, self.links)
            if result.status != SolverStatus.UNIQUE:
                errors.append(ValidationError("error", f"Clues are not unique: {result.status.value}"))

        return errors

    # =============================================================================
    # SERIALIZATION
    # =============================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format_version": FORMAT_VERSION,
            "grid": self.grid.to_dict(),
            "clues": [[q, r, n] for (q, r), n in sorted(self.clues.items())],
            "links": [[list(a), list(b)] for a, b in self.links],
            "solution": [[q, r] for q, r in self.solution],
            "seed": self.seed,
            "difficulty": self.difficulty.name.lower(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], check_unique: bool = False) -> "Puzzle":
        """
        Load a puzzle exported with to_dict().

        Raises:
            InvalidPuzzleData: Unknown version, malformed fields, or clues that
                disagree with the solution
        """
        if not isinstance(data, dict):
            raise InvalidPuzzleData("Puzzle data must be a JSON object")
        version = data.get("format_version")
        if version != FORMAT_VERSION:
            raise InvalidPuzzleData(f"Unsupported format_version: {version!r}")

        try:
            grid = HexGrid.from_dict(data["grid"])
        except KeyError as exc:
            raise InvalidPuzzleData(f"Missing field: {exc}") from exc
        except InvalidShape as exc:
            raise InvalidPuzzleData(f"Invalid grid: {exc}") from exc

        try:
            clues = {(_as_int(q), _as_int(r)): _as_int(n) for q, r, n in data.get("clues", [])}
            links = [((_as_int(a[0]), _as_int(a[1])), (_as_int(b[0]), _as_int(b[1])))
                     for a, b in data.get("links", [])]
            solution = Path((_as_int(q), _as_int(r)) for q, r in data["solution"])
            seed = data.get("seed")
            seed = None if seed is None else _as_int(seed)
            difficulty = Difficulty.parse(data.get("difficulty", "easy"))
        except KeyError as exc:
            raise InvalidPuzzleData(f"Missing field: {exc}") from exc
        except (TypeError, ValueError, IndexError) as exc:
            raise InvalidPuzzleData(f"Malformed puzzle data: {exc}") from exc

        puzzle = cls(grid, clues, solution, links=links, seed=seed, difficulty=difficulty)
        errors = [e for e in puzzle.validate(check_unique=check_unique) if e.severity == "error"]
        if errors:
            raise InvalidPuzzleData(f"Puzzle data is inconsistent: {errors[0]}", errors)
        return puzzle

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str, check_unique: bool = False) -> "Puzzle":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidPuzzleData(f"Invalid JSON: {exc}") from exc
        return cls.from_dict(data, check_unique=check_unique)

    def save(self, filepath: str) -> None:
        """Write the puzzle as JSON."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"Saved puzzle to {filepath}")

    @classmethod
    def load(cls, filepath: str, check_unique: bool = False) -> "Puzzle":
        """Read a puzzle saved with save()."""
        with open(filepath, "r", encoding="utf-8") as f:
            text = f.read()
        return cls.from_json(text, check_unique=check_unique)
