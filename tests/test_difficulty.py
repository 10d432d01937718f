"""
Difficulty estimator tests: tier thresholds and monotonicity.
"""
import pytest

from hexkudo.config import DifficultyConfig
from hexkudo.core.difficulty import density_tier, difficulty_score, estimate, search_tier
from hexkudo.core.types import Difficulty, SolverStats


@pytest.mark.parametrize("clues,expected", [
    (37, Difficulty.EASY),
    (21, Difficulty.EASY),     # 0.568
    (17, Difficulty.MEDIUM),   # 0.459
    (13, Difficulty.HARD),     # 0.351
    (10, Difficulty.EXPERT),   # 0.270
])
def test_density_tiers(clues, expected):
    assert estimate(SolverStats(), clues, 37) == expected


@pytest.mark.parametrize("branches,expected", [
    (0, Difficulty.EASY),
    (1, Difficulty.MEDIUM),
    (2, Difficulty.MEDIUM),
    (5, Difficulty.HARD),
    (7, Difficulty.EXPERT),
])
def test_search_tiers(branches, expected):
    assert search_tier(SolverStats(branch_points=branches)) == expected
    # dense clues leave the search tier in charge
    assert estimate(SolverStats(branch_points=branches), 37, 37) == expected


@pytest.mark.parametrize("branches", [0, 1, 3, 10])
def test_fewer_clues_never_easier(branches):
    stats = SolverStats(branch_points=branches, max_depth=branches)
    tiers = [estimate(stats, clues, 61) for clues in range(61, -1, -1)]
    assert tiers == sorted(tiers), "Tier must not drop as clues are removed"


def test_more_search_never_easier():
    tiers = [estimate(SolverStats(branch_points=b), 20, 37) for b in range(0, 20)]
    assert tiers == sorted(tiers)


@pytest.mark.parametrize("branches", [0, 1, 3, 7])
def test_deeper_search_never_easier(branches):
    tiers = [estimate(SolverStats(branch_points=branches, max_depth=d), 37, 37) for d in range(0, 12)]
    assert tiers == sorted(tiers)
    assert tiers[-1] == Difficulty.EXPERT


@pytest.mark.parametrize("depth,expected", [
    (0, Difficulty.EASY),
    (2, Difficulty.MEDIUM),
    (4, Difficulty.HARD),
    (40, Difficulty.EXPERT),
])
def test_depth_tiers(depth, expected):
    assert search_tier(SolverStats(max_depth=depth)) == expected


def test_tier_is_harder_of_the_two():
    stats = SolverStats(branch_points=3)
    assert density_tier(30, 37) == Difficulty.EASY
    assert search_tier(stats) == Difficulty.HARD
    assert estimate(stats, 30, 37) == Difficulty.HARD


def test_custom_thresholds():
    config = DifficultyConfig(density_thresholds=(0.9, 0.8, 0.7), branch_thresholds=(0, 0, 0))
    assert estimate(SolverStats(), 34, 37, config) == Difficulty.EASY
    assert estimate(SolverStats(), 20, 37, config) == Difficulty.EXPERT
    assert estimate(SolverStats(branch_points=1), 37, 37, config) == Difficulty.EXPERT


def test_score_grows_with_sparsity_and_search():
    base = difficulty_score(SolverStats(), 30, 37)
    assert difficulty_score(SolverStats(), 10, 37) > base
    assert difficulty_score(SolverStats(branch_points=2, max_depth=2), 30, 37) > base
    assert difficulty_score(SolverStats(), 37, 37) == 0.0


def test_empty_grid_rejected():
    with pytest.raises(ValueError):
        estimate(SolverStats(), 0, 0)
