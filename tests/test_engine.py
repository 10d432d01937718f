"""
Play-time API tests:
- validate_move outcomes
- check_complete outcomes
- hint
- new_puzzle and puzzle persistence
"""
import json

import pytest

from hexkudo.app.engine import check_complete, hint, new_puzzle, validate_move
from hexkudo.core.builder import build_puzzle
from hexkudo.core.errors import InvalidPuzzleData, InvalidShape
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.types import CompletionStatus, MoveResult

# Player entries completing the ring puzzle (clues: 1 centre, 3 south-east, 7 north-east)
SOLUTION_ENTRIES = {(1, 0): 2, (-1, 1): 4, (-1, 0): 5, (0, -1): 6}


# =============================================================================
# validate_move
# =============================================================================

def test_five_out_of_order_next_to_three_and_four(ring_puzzle):
    # 4 sits south-west; east of the centre touches 3 but not 4
    entries = {(-1, 1): 4}
    assert validate_move(ring_puzzle, entries, (1, 0), 5) == MoveResult.REJECTED_ADJACENCY


def test_accepted_move(ring_puzzle):
    entries = {(-1, 1): 4}
    assert validate_move(ring_puzzle, entries, (-1, 0), 5) == MoveResult.ACCEPTED
    assert validate_move(ring_puzzle, {}, (1, 0), 2) == MoveResult.ACCEPTED


def test_duplicate_number_rejected(ring_puzzle):
    assert validate_move(ring_puzzle, {}, (1, 0), 3) == MoveResult.REJECTED_DUPLICATE
    assert validate_move(ring_puzzle, {(1, 0): 2}, (-1, 0), 2) == MoveResult.REJECTED_DUPLICATE


def test_clue_cell_cannot_be_overwritten(ring_puzzle):
    assert validate_move(ring_puzzle, {}, (0, 1), 3) == MoveResult.REJECTED_DUPLICATE
    assert validate_move(ring_puzzle, {}, (0, 0), 2) == MoveResult.REJECTED_DUPLICATE


def test_rewriting_own_entry_is_allowed(ring_puzzle):
    assert validate_move(ring_puzzle, {(1, 0): 2}, (1, 0), 2) == MoveResult.ACCEPTED


def test_link_rejects_non_consecutive(hexagon1, ring_puzzle):
    linked = Puzzle(hexagon1, ring_puzzle.clues, ring_puzzle.solution, links=[((1, 0), (0, 1))])
    assert validate_move(linked, {}, (1, 0), 4) == MoveResult.ACCEPTED
    assert validate_move(linked, {(-1, 1): 5}, (1, 0), 6) == MoveResult.REJECTED_ADJACENCY


@pytest.mark.parametrize("cell,number", [((1, 0), 0), ((1, 0), 8), ((3, 3), 2)])
def test_malformed_move_raises(ring_puzzle, cell, number):
    with pytest.raises(ValueError):
        validate_move(ring_puzzle, {}, cell, number)


# =============================================================================
# check_complete
# =============================================================================

def test_incomplete(ring_puzzle):
    assert check_complete(ring_puzzle, {}) == CompletionStatus.INCOMPLETE
    partial = dict(SOLUTION_ENTRIES)
    partial.pop((0, -1))
    assert check_complete(ring_puzzle, partial) == CompletionStatus.INCOMPLETE


def test_solved(ring_puzzle):
    assert check_complete(ring_puzzle, SOLUTION_ENTRIES) == CompletionStatus.SOLVED


def test_invalid_completion(ring_puzzle):
    wrong = dict(SOLUTION_ENTRIES)
    wrong[(-1, 0)], wrong[(0, -1)] = 6, 5
    assert check_complete(ring_puzzle, wrong) == CompletionStatus.INVALID_COMPLETION

    overwritten = dict(SOLUTION_ENTRIES)
    overwritten[(0, 0)] = 4
    assert check_complete(ring_puzzle, overwritten) == CompletionStatus.INVALID_COMPLETION


# =============================================================================
# hint
# =============================================================================

def test_hint_returns_lowest_forced_number(ring_puzzle):
    assert hint(ring_puzzle, {(1, 0): 2}) == ((-1, 1), 4)


def test_hint_on_clues_only(ring_puzzle):
    move = hint(ring_puzzle, {})
    if move is not None:
        cell, number = move
        assert ring_puzzle.solution.number_of(cell) == number


def test_hint_none_when_contradictory(ring_puzzle):
    assert hint(ring_puzzle, {(1, 0): 3}) is None
    assert hint(ring_puzzle, {(0, 0): 2}) is None


def test_hint_none_when_solved(ring_puzzle):
    assert hint(ring_puzzle, SOLUTION_ENTRIES) is None


# =============================================================================
# new_puzzle and persistence
# =============================================================================

def test_new_puzzle_matches_builder():
    puzzle = new_puzzle("Hexagon", 1, "easy", seed=42)
    assert puzzle == build_puzzle(HexGrid.build("hexagon", 1), "easy", rng_seed=42)


def test_new_puzzle_rejects_bad_shape():
    with pytest.raises(InvalidShape):
        new_puzzle("hexagon", 0, "easy", seed=1)


def test_json_round_trip(tmp_path, load_puzzle):
    puzzle = new_puzzle("classic", 2, "easy", seed=9)
    assert Puzzle.from_json(puzzle.to_json()) == puzzle

    path = tmp_path / "puzzle.json"
    puzzle.save(str(path))
    loaded = load_puzzle(str(path))
    assert loaded == puzzle
    assert loaded.grid.blocked == frozenset({(0, 0)})
    assert Puzzle.from_dict(puzzle.to_dict(), check_unique=True) == puzzle


def test_custom_grid_round_trip(ring_puzzle):
    grid = HexGrid.from_cells(ring_puzzle.grid.cells)
    custom = Puzzle(grid, ring_puzzle.clues, ring_puzzle.solution, seed=3)
    data = json.loads(custom.to_json())
    assert data["grid"]["shape"] == "custom"
    assert Puzzle.from_dict(data) == custom


def test_inconsistent_clue_rejected(ring_puzzle):
    data = ring_puzzle.to_dict()
    data["clues"][0][2] = 5
    with pytest.raises(InvalidPuzzleData) as info:
        Puzzle.from_dict(data)
    assert info.value.errors


@pytest.mark.parametrize("mutate", [
    lambda d: d.update(format_version=99),
    lambda d: d.pop("solution"),
    lambda d: d.update(grid={"shape": "hexagon", "size": 0}),
    lambda d: d.update(solution=d["solution"][:-1]),
    lambda d: d.update(links=[[[1, 0], [-1, 0]]]),
    lambda d: d.update(grid=[1, 2]),
    lambda d: d["clues"][1].__setitem__(2, d["clues"][1][2] + 0.5),
    lambda d: d.update(links=[[[1, 0]]]),
])
def test_malformed_data_rejected(ring_puzzle, mutate):
    data = ring_puzzle.to_dict()
    mutate(data)
    with pytest.raises(InvalidPuzzleData):
        Puzzle.from_dict(data)


def test_invalid_json_text():
    with pytest.raises(InvalidPuzzleData):
        Puzzle.from_json("{not json")


def test_puzzle_is_immutable(ring_puzzle):
    with pytest.raises(AttributeError):
        ring_puzzle.seed = 5
    with pytest.raises(TypeError):
        ring_puzzle.clues[(1, 0)] = 2
