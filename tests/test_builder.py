"""
Puzzle builder tests:
- Radius-1 scenario with seed 42
- Built puzzles solve uniquely to their own path
- Reproducibility, links, attempt budget, cancellation
"""
import threading

import pytest

from hexkudo.config import BuilderConfig, DifficultyConfig, EngineConfig
from hexkudo.core.builder import PuzzleBuilder, build_puzzle
from hexkudo.core.errors import BuildCancelled, BuilderFailed
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.solver import solve
from hexkudo.core.types import Difficulty, SolverStatus


def test_radius_one_seed_42(hexagon1):
    puzzle = build_puzzle(hexagon1, Difficulty.EASY, rng_seed=42)
    assert puzzle == build_puzzle(hexagon1, "easy", rng_seed=42), "Same seed, same puzzle"

    assert puzzle.seed == 42
    assert puzzle.difficulty == Difficulty.EASY
    assert puzzle.solution == Path([(0, 1), (-1, 1), (-1, 0), (0, -1), (0, 0), (1, -1), (1, 0)])
    assert dict(puzzle.clues) == {(0, 1): 1, (0, -1): 4, (1, -1): 6, (1, 0): 7}
    assert puzzle.links == ()

    # Hiding everything but 1 and 7 leaves several completions, so the builder must keep more
    endpoints_only = {puzzle.solution.cell_at(1): 1, puzzle.solution.cell_at(7): 7}
    assert solve(hexagon1, endpoints_only).status == SolverStatus.MULTIPLE

    result = solve(hexagon1, puzzle.clues)
    assert result.status == SolverStatus.UNIQUE
    assert result.solution == puzzle.solution


@pytest.mark.parametrize("shape,size,target,seed", [
    ("hexagon", 2, "easy", 1),
    ("hexagon", 2, "easy", 2),
    ("classic", 2, "easy", 3),
    ("hexagon", 2, "medium", 4),
    ("rectangle", 4, "easy", 5),
])
def test_built_puzzles_are_unique(shape, size, target, seed):
    grid = HexGrid.build(shape, size)
    puzzle = build_puzzle(grid, target, rng_seed=seed)
    assert puzzle.difficulty == Difficulty.parse(target)
    assert puzzle.validate() == []
    result = solve(grid, puzzle.clues, puzzle.links)
    assert result.status == SolverStatus.UNIQUE
    assert result.solution == puzzle.solution


def test_fresh_seed_recorded(hexagon1):
    builder = PuzzleBuilder(hexagon1)
    puzzle = builder.build("easy")
    assert puzzle.seed == builder.last_seed
    assert builder.build("easy", puzzle.seed) == puzzle


def test_links_take_part_in_reduction(hexagon2):
    config = EngineConfig(builder=BuilderConfig(use_links=True))
    puzzle = build_puzzle(hexagon2, "easy", rng_seed=6, config=config)
    assert puzzle.links, "Some links should survive on an EASY puzzle"
    numbers = puzzle.solution.as_assignment()
    for a, b in puzzle.links:
        assert abs(numbers[a] - numbers[b]) == 1
    assert solve(hexagon2, puzzle.clues, puzzle.links).status == SolverStatus.UNIQUE


def test_unreachable_target_fails(hexagon1):
    # EXPERT on 7 cells would need only the two endpoints, which is never unique
    config = EngineConfig(
        builder=BuilderConfig(max_attempts=2),
        difficulty=DifficultyConfig(branch_thresholds=(100, 100, 100), depth_thresholds=(100, 100, 100)),
    )
    builder = PuzzleBuilder(hexagon1, config)
    with pytest.raises(BuilderFailed):
        builder.build("expert", 1)
    assert builder.last_attempts == 2


def test_cancelled_build(hexagon2):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(BuildCancelled):
        build_puzzle(hexagon2, "easy", rng_seed=1, cancel=cancel)


def test_failed_path_generation_uses_next_attempt():
    star = HexGrid.from_cells([(0, 0), (1, 0), (-1, 1), (0, -1)])
    builder = PuzzleBuilder(star, EngineConfig(builder=BuilderConfig(max_attempts=3)))
    with pytest.raises(BuilderFailed):
        builder.build("easy", 5)
    assert builder.last_attempts == 3
