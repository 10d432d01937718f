"""
PlayerBoard - the player's entries for one puzzle, with undo/redo and checkpoints.

The board only accepts moves that validate_move accepts. Every change goes
through the command history so it can be undone; checkpoints save the entries
so a wrong line of play can be abandoned in one step.
"""
import logging
from typing import Dict, List, Optional, Tuple

from hexkudo.app.engine import check_complete, hint, validate_move
from hexkudo.core.commands import (
    ClearCellCommand, CommandHistory, PlaceNumberCommand, RestoreEntriesCommand,
)
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.types import Cell, CompletionStatus, MoveResult

logger = logging.getLogger(__name__)


class PlayerBoard:
    """
    Player entries on top of a puzzle's clues.

    Attributes:
        puzzle: The puzzle being played
        history: Undo/redo history of entries
    """

    def __init__(self, puzzle: Puzzle, max_history: int = 100):
        self.puzzle = puzzle
        self.history = CommandHistory(max_history=max_history)
        self._entries: Dict[Cell, int] = {}
        self._checkpoints: List[Dict[Cell, int]] = []

    # ------------------------------------------------------------------
    # low-level access used by commands
    # ------------------------------------------------------------------

    def get_entry(self, cell: Cell) -> Optional[int]:
        return self._entries.get(cell)

    def set_entry(self, cell: Cell, number: int) -> None:
        self._entries[cell] = number

    def clear_entry(self, cell: Cell) -> None:
        self._entries.pop(cell, None)

    def snapshot(self) -> Dict[Cell, int]:
        return dict(self._entries)

    def restore(self, entries: Dict[Cell, int]) -> None:
        self._entries = dict(entries)

    # ------------------------------------------------------------------
    # player actions
    # ------------------------------------------------------------------

    @property
    def entries(self) -> Dict[Cell, int]:
        """Copy of the player's entries (clues excluded)."""
        return dict(self._entries)

    def value_at(self, cell: Cell) -> Optional[int]:
        """Clue or entry shown in a cell."""
        if cell in self.puzzle.clues:
            return self.puzzle.clues[cell]
        return self._entries.get(cell)

    def place(self, cell: Cell, number: int) -> MoveResult:
        """Write a number if validate_move accepts it."""
        cell = (int(cell[0]), int(cell[1]))
        result = validate_move(self.puzzle, self._entries, cell, number)
        if result == MoveResult.ACCEPTED:
            self.history.execute_command(PlaceNumberCommand(cell, number), self)
        else:
            logger.debug(f"Move {number} at {cell} rejected: {result.value}")
        return result

    def clear(self, cell: Cell) -> bool:
        """Erase an entry. Clue cells and empty cells return False."""
        cell = (int(cell[0]), int(cell[1]))
        if cell in self.puzzle.clues:
            return False
        return self.history.execute_command(ClearCellCommand(cell), self)

    def reset(self) -> bool:
        """Erase every entry (undoable)."""
        if not self._entries:
            return False
        return self.history.execute_command(RestoreEntriesCommand({}, "Reset board"), self)

    def undo(self) -> bool:
        return self.history.undo(self)

    def redo(self) -> bool:
        return self.history.redo(self)

    # ------------------------------------------------------------------
    # checkpoints
    # ------------------------------------------------------------------

    def checkpoint(self) -> int:
        """Save the current entries; returns the number of saved checkpoints."""
        self._checkpoints.append(self.snapshot())
        return len(self._checkpoints)

    def restore_checkpoint(self) -> bool:
        """Return to the most recent checkpoint and drop it (undoable)."""
        if not self._checkpoints:
            return False
        entries = self._checkpoints.pop()
        return self.history.execute_command(
            RestoreEntriesCommand(entries, f"Restore checkpoint {len(self._checkpoints) + 1}"), self
        )

    @property
    def checkpoint_count(self) -> int:
        return len(self._checkpoints)

    # ------------------------------------------------------------------
    # engine queries
    # ------------------------------------------------------------------

    def status(self) -> CompletionStatus:
        return check_complete(self.puzzle, self._entries)

    def hint(self) -> Optional[Tuple[Cell, int]]:
        return hint(self.puzzle, self._entries)

    def apply_hint(self) -> Optional[Tuple[Cell, int]]:
        """Place the next forced move, if any, and return it."""
        move = self.hint()
        if move is None:
            return None
        cell, number = move
        if self.place(cell, number) != MoveResult.ACCEPTED:
            return None
        return move
