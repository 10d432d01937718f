"""
Hexkudo - Application Package
Play-time API, player board, background worker and command-line tool.
"""
from .engine import check_complete, hint, new_puzzle, validate_move
from .board import PlayerBoard
from .worker import PuzzleWorker

__all__ = ['check_complete', 'hint', 'new_puzzle', 'validate_move', 'PlayerBoard', 'PuzzleWorker']
