"""
Hexkudo - hexagonal path puzzle engine.

Build a puzzle, then validate moves and check the player's board:

    from hexkudo import new_puzzle, validate_move
    puzzle = new_puzzle("hexagon", 3, "medium", seed=42)
"""
from .core import (
    CompletionStatus, Difficulty, HexGrid, MoveResult, Path, Puzzle, SolverStatus,
    build_puzzle, estimate, generate, solve,
)
from .core.errors import (
    BuildCancelled, BuilderFailed, GenerationFailed, HexkudoError, InvalidPuzzleData,
    InvalidShape, SearchBudgetExceeded,
)
from .app import PlayerBoard, PuzzleWorker, check_complete, hint, new_puzzle, validate_move
from .config import EngineConfig, load_config

__version__ = "0.1.0"

__all__ = [
    'CompletionStatus', 'Difficulty', 'HexGrid', 'MoveResult', 'Path', 'Puzzle', 'SolverStatus',
    'build_puzzle', 'estimate', 'generate', 'solve',
    'BuildCancelled', 'BuilderFailed', 'GenerationFailed', 'HexkudoError', 'InvalidPuzzleData',
    'InvalidShape', 'SearchBudgetExceeded',
    'PlayerBoard', 'PuzzleWorker', 'check_complete', 'hint', 'new_puzzle', 'validate_move',
    'EngineConfig', 'load_config',
]
