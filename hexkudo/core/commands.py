"""
Command pattern for reversible player entries.

Commands act on any board object exposing:
    get_entry(cell) -> Optional[int]
    set_entry(cell, number)
    clear_entry(cell)
    snapshot() -> Dict[Cell, int]
    restore(entries)
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from hexkudo.core.types import Cell


class Command(ABC):
    """Abstract base class for all reversible commands."""

    @abstractmethod
    def execute(self, board) -> bool:
        """Execute the command. Returns True if successful."""

    @abstractmethod
    def undo(self, board) -> bool:
        """Undo the command. Returns True if successful."""

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""


class PlaceNumberCommand(Command):
    """Write a number into a cell."""

    def __init__(self, cell: Cell, number: int):
        self.cell = cell
        self.number = number
        self.old_number: Optional[int] = None

    def execute(self, board) -> bool:
        self.old_number = board.get_entry(self.cell)
        board.set_entry(self.cell, self.number)
        return True

    def undo(self, board) -> bool:
        if self.old_number is None:
            board.clear_entry(self.cell)
        else:
            board.set_entry(self.cell, self.old_number)
        return True

    def get_description(self) -> str:
        return f"Place {self.number} at {self.cell}"


class ClearCellCommand(Command):
    """Erase the player's entry in a cell."""

    def __init__(self, cell: Cell):
        self.cell = cell
        self.old_number: Optional[int] = None

    def execute(self, board) -> bool:
        self.old_number = board.get_entry(self.cell)
        if self.old_number is None:
            return False
        board.clear_entry(self.cell)
        return True

    def undo(self, board) -> bool:
        if self.old_number is None:
            return False
        board.set_entry(self.cell, self.old_number)
        return True

    def get_description(self) -> str:
        return f"Clear {self.cell}"


class RestoreEntriesCommand(Command):
    """Replace all entries at once (checkpoint restore, reset)."""

    def __init__(self, entries: Dict[Cell, int], description: str):
        self.entries = dict(entries)
        self.description = description
        self.old_entries: Optional[Dict[Cell, int]] = None

    def execute(self, board) -> bool:
        self.old_entries = board.snapshot()
        board.restore(self.entries)
        return True

    def undo(self, board) -> bool:
        if self.old_entries is None:
            return False
        board.restore(self.old_entries)
        return True

    def get_description(self) -> str:
        return self.description


class CommandHistory:
    """
    Undo/redo stacks of executed commands.

    Executing a new command empties the redo stack. At most max_history
    commands are kept for undo; older ones are forgotten.
    """

    def __init__(self, max_history: int = 100):
        if max_history < 1:
            raise ValueError(f"max_history must be >= 1, got {max_history}")
        self.max_history = max_history
        self._done: Deque[Command] = deque(maxlen=max_history)
        self._undone: List[Command] = []

    def execute_command(self, command: Command, board) -> bool:
        """Run a command; on success it becomes the next undo step."""
        if not command.execute(board):
            return False
        self._done.append(command)
        self._undone.clear()
        return True

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self, board) -> bool:
        if not self._done or not self._done[-1].undo(board):
            return False
        self._undone.append(self._done.pop())
        return True

    def redo(self, board) -> bool:
        if not self._undone or not self._undone[-1].execute(board):
            return False
        self._done.append(self._undone.pop())
        return True

    def get_undo_description(self) -> Optional[str]:
        return self._done[-1].get_description() if self._done else None

    def get_redo_description(self) -> Optional[str]:
        return self._undone[-1].get_description() if self._undone else None

    def clear_history(self):
        self._done.clear()
        self._undone.clear()

    def get_history_info(self) -> Dict[str, Any]:
        return {
            "total_commands": len(self._done) + len(self._undone),
            "undo_steps": len(self._done),
            "redo_steps": len(self._undone),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
