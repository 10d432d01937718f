"""
Shared types for the Hexkudo engine.
Separated to avoid circular imports between modules.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

Cell = Tuple[int, int]


class CellKind(Enum):
    """Kinds of positions found in an ASCII-art layout."""
    CELL = "cell"             # Playable cell
    BLOCKED = "blocked"       # Logo/centre marker, not part of the graph
    BACKGROUND = "background" # Outside the puzzle


class Difficulty(IntEnum):
    """Ordered difficulty tiers (EASY < MEDIUM < HARD < EXPERT)."""
    EASY = 0
    MEDIUM = 1
    HARD = 2
    EXPERT = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """Accept a Difficulty, its name (any case) or its integer value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown difficulty: {value!r}") from None
        return cls(int(value))


class SolverStatus(Enum):
    """Outcome of a solve."""
    UNSOLVABLE = "unsolvable"
    UNIQUE = "unique"
    MULTIPLE = "multiple"


class MoveResult(Enum):
    """Local legality of a single player move."""
    ACCEPTED = "accepted"
    REJECTED_ADJACENCY = "rejected_adjacency"
    REJECTED_DUPLICATE = "rejected_duplicate"


class CompletionStatus(Enum):
    """State of a player's grid with respect to a puzzle."""
    INCOMPLETE = "incomplete"
    SOLVED = "solved"
    INVALID_COMPLETION = "invalid_completion"


@dataclass
class SolverStats:
    """Search statistics collected by the solver and read by the estimator."""
    forced_moves: int = 0
    branch_points: int = 0
    max_depth: int = 0
    nodes: int = 0

    def as_dict(self) -> dict:
        return {
            "forced_moves": self.forced_moves,
            "branch_points": self.branch_points,
            "max_depth": self.max_depth,
            "nodes": self.nodes,
        }


class ValidationError:
    """Represents a validation error with severity and description."""
    def __init__(self, severity: str, message: str, location: Optional[Cell] = None):
        self.severity = severity  # "error", "warning", "info"
        self.message = message
        self.location = location

    def __str__(self):
        loc_str = f" at {self.location}" if self.location else ""
        return f"{self.severity.upper()}: {self.message}{loc_str}"

    def __repr__(self):
        return f"ValidationError({self.severity!r}, {self.message!r}, {self.location!r})"
