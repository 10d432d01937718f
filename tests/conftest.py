import os
import sys
import pytest

# Add project root to sys.path (so tests can import hexkudo.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.types import Difficulty


# Radius-1 hexagon: centre, then the ring clockwise from east
RING_PATH = [(0, 0), (1, 0), (0, 1), (-1, 1), (-1, 0), (0, -1), (1, -1)]


@pytest.fixture
def hexagon1():
    return HexGrid.build("hexagon", 1)


@pytest.fixture
def hexagon2():
    return HexGrid.build("hexagon", 2)


@pytest.fixture
def line4():
    """Four cells in a row: the only paths run end to end."""
    return HexGrid.from_cells([(0, 0), (1, 0), (2, 0), (3, 0)])


@pytest.fixture
def ring_puzzle(hexagon1):
    """
    Hand-made radius-1 puzzle with a unique solution:

        1 at the centre, 3 south-east of it, 7 north-east of it;
        2 must sit east, then 4, 5, 6 follow the ring.
    """
    solution = Path(RING_PATH)
    clues = {(0, 0): 1, (0, 1): 3, (1, -1): 7}
    return Puzzle(hexagon1, clues, solution, seed=None, difficulty=Difficulty.EASY)


@pytest.fixture
def load_puzzle():
    """Returns a function that loads and returns a Puzzle from a JSON file."""
    def _load(path):
        return Puzzle.load(path)
    return _load
