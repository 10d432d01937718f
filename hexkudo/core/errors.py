"""
Exception types raised by the Hexkudo engine.

Solver outcomes (unsolvable / multiple solutions) and rejected player moves are
not exceptions; they are reported through `SolverStatus` and `MoveResult`.
"""


class HexkudoError(Exception):
    """Base class for all engine errors."""


class InvalidShape(HexkudoError, ValueError):
    """Grid request is malformed, too small or disconnected. Not retryable."""


class GenerationFailed(HexkudoError):
    """The path generator exhausted its restart budget."""


class BuilderFailed(GenerationFailed):
    """The puzzle builder exhausted its attempt budget for the requested tier."""


class BuildCancelled(HexkudoError):
    """A generation or build was cancelled by a newer request."""


class SearchBudgetExceeded(HexkudoError):
    """The solver visited more search nodes than its configured budget."""

    def __init__(self, nodes: int, budget: int):
        super().__init__(f"Search stopped after {nodes} nodes (budget {budget})")
        self.nodes = nodes
        self.budget = budget


class InvalidPuzzleData(HexkudoError, ValueError):
    """Serialized puzzle data cannot be turned back into a consistent puzzle."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])
