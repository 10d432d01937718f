"""
Play-time API of the Hexkudo engine.

These functions are what a game front end calls:
- new_puzzle: build a puzzle for a shape, size and difficulty
- validate_move: local legality of one entry, without a full solve
- check_complete: has the player finished, and correctly
- hint: one forced move from the current entries

The engine keeps no player state; the caller owns the assignment
(cell -> number) of the player's entries. Clue cells are read from the puzzle.
"""
import logging
from functools import lru_cache
from typing import Dict, Mapping, Optional, Tuple

from hexkudo.config import EngineConfig
from hexkudo.core.builder import build_puzzle
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.solver import next_forced_move, validate_completion
from hexkudo.core.types import Cell, CompletionStatus, MoveResult

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def get_grid(shape: str, size: int) -> HexGrid:
    """Shared grid instance per (shape, size); grids are immutable and cache distances."""
    return HexGrid.build(shape, size)


def new_puzzle(shape: str, size: int, difficulty, seed: Optional[int] = None,
               config: Optional[EngineConfig] = None, cancel=None) -> Puzzle:
    """
    Build a new puzzle.

    Args:
        shape: Grid shape name ("hexagon", "classic", ...)
        size: Grid size
        difficulty: Difficulty or its name
        seed: Reproduces the same puzzle; None draws a fresh seed

    Raises:
        InvalidShape: Malformed grid request
        GenerationFailed: Generator or builder budget exhausted
    """
    grid = get_grid(str(shape).strip().lower(), size)
    return build_puzzle(grid, difficulty, seed, config=config, cancel=cancel)


def _check_entry(puzzle: Puzzle, cell: Cell, number: int) -> None:
    if cell not in puzzle.grid:
        raise ValueError(f"Cell {cell} is not in the grid")
    if not 1 <= number <= puzzle.size:
        raise ValueError(f"Value {number} out of range (1-{puzzle.size})")


def merged_board(puzzle: Puzzle, assignment: Mapping[Cell, int]) -> Optional[Dict[Cell, int]]:
    """
    Clues plus player entries.

    Returns:
        cell -> number, or None when an entry overwrites a clue with a different number

    Raises:
        ValueError: An entry is outside the grid or out of range
    """
    board = dict(puzzle.clues)
    for cell, number in assignment.items():
        cell = (int(cell[0]), int(cell[1]))
        _check_entry(puzzle, cell, number)
        if cell in board and board[cell] != number:
            return None
        board[cell] = number
    return board


def validate_move(puzzle: Puzzle, assignment: Mapping[Cell, int], cell: Cell, number: int) -> MoveResult:
    """
    Check one entry against the numbers already on the board.

    Rules:
    - a clue cell cannot be written, and a number can appear only once
      -> REJECTED_DUPLICATE
    - number - 1 and number + 1, where present, must sit next to `cell`, and
      a linked neighbour must hold a consecutive number -> REJECTED_ADJACENCY

    Raises:
        ValueError: cell outside the grid or number out of range
    """
    cell = (int(cell[0]), int(cell[1]))
    _check_entry(puzzle, cell, number)
    if cell in puzzle.clues:
        return MoveResult.REJECTED_DUPLICATE

    board = dict(puzzle.clues)
    for other, value in assignment.items():
        other = (int(other[0]), int(other[1]))
        if other != cell and other not in board:
            board[other] = value

    where: Dict[int, Cell] = {value: c for c, value in board.items()}
    if number in where:
        return MoveResult.REJECTED_DUPLICATE

    neighbors = puzzle.grid.neighbors(cell)
    for adjacent in (number - 1, number + 1):
        placed = where.get(adjacent)
        if placed is not None and placed not in neighbors:
            return MoveResult.REJECTED_ADJACENCY

    for a, b in puzzle.links:
        partner = b if a == cell else a if b == cell else None
        if partner is None:
            continue
        value = board.get(partner)
        if value is not None and abs(value - number) != 1:
            return MoveResult.REJECTED_ADJACENCY

    return MoveResult.ACCEPTED


def check_complete(puzzle: Puzzle, assignment: Mapping[Cell, int]) -> CompletionStatus:
    """
    Classify the player's board.

    Returns:
        INCOMPLETE while any cell is empty, SOLVED for a valid full numbering,
        INVALID_COMPLETION otherwise
    """
    board = merged_board(puzzle, assignment)
    filled = set(puzzle.clues) | {(int(c[0]), int(c[1])) for c in assignment}
    if len(filled) < puzzle.size:
        return CompletionStatus.INCOMPLETE
    if board is None:
        return CompletionStatus.INVALID_COMPLETION

    errors = validate_completion(puzzle.grid, board, puzzle.links)
    if errors:
        logger.debug(f"Invalid completion: {errors[0]}")
        return CompletionStatus.INVALID_COMPLETION
    return CompletionStatus.SOLVED


def hint(puzzle: Puzzle, assignment: Mapping[Cell, int]) -> Optional[Tuple[Cell, int]]:
    """
    One forced move from the current board.

    Returns:
        (cell, number), or None when no move is forced or the board is contradictory
    """
    board = merged_board(puzzle, assignment)
    if board is None:
        return None
    if len(set(board.values())) != len(board):
        return None
    return next_forced_move(puzzle.grid, board, puzzle.links)
