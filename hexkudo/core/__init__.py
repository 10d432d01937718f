"""
Hexkudo - Core Package
Grid model, path generation, solving, puzzle building and difficulty rating.
"""
from .hex_grid import HexGrid, SHAPE_BUILDERS
from .types import (
    Cell, CompletionStatus, Difficulty, MoveResult, SolverStats, SolverStatus, ValidationError,
)
from .errors import (
    BuildCancelled, BuilderFailed, GenerationFailed, HexkudoError, InvalidPuzzleData,
    InvalidShape, SearchBudgetExceeded,
)
from .path import Path
from .generator import PathGenerator, generate
from .solver import Solver, SolverResult, forced_moves, next_forced_move, solve
from .difficulty import difficulty_score, estimate
from .puzzle import Puzzle
from .builder import PuzzleBuilder, build_puzzle
from .commands import Command, CommandHistory

__all__ = [
    'HexGrid', 'SHAPE_BUILDERS', 'Cell', 'CompletionStatus', 'Difficulty', 'MoveResult',
    'SolverStats', 'SolverStatus', 'ValidationError',
    'BuildCancelled', 'BuilderFailed', 'GenerationFailed', 'HexkudoError', 'InvalidPuzzleData',
    'InvalidShape', 'SearchBudgetExceeded',
    'Path', 'PathGenerator', 'generate', 'Solver', 'SolverResult', 'forced_moves',
    'next_forced_move', 'solve', 'difficulty_score', 'estimate', 'Puzzle', 'PuzzleBuilder',
    'build_puzzle', 'Command', 'CommandHistory',
]
