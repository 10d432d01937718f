"""
Difficulty estimation from solver statistics.

The tier is the harder of a clue-density tier and a search-effort tier, so a
sparse puzzle is never rated easier than a dense one with the same search.
"""
from typing import Optional

from hexkudo.config import DifficultyConfig
from hexkudo.core.types import Difficulty, SolverStats


def density_tier(clue_count: int, grid_size: int, config: Optional[DifficultyConfig] = None) -> Difficulty:
    config = config or DifficultyConfig()
    if grid_size < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size}")
    density = clue_count / grid_size
    for tier, threshold in enumerate(config.density_thresholds):
        if density >= threshold:
            return Difficulty(tier)
    return Difficulty.EXPERT


def _tier_at_most(value: int, thresholds) -> Difficulty:
    for tier, threshold in enumerate(thresholds):
        if value <= threshold:
            return Difficulty(tier)
    return Difficulty.EXPERT


def search_tier(stats: SolverStats, config: Optional[DifficultyConfig] = None) -> Difficulty:
    """Harder of the branch-point tier and the search-depth tier."""
    config = config or DifficultyConfig()
    return max(_tier_at_most(stats.branch_points, config.branch_thresholds),
               _tier_at_most(stats.max_depth, config.depth_thresholds))


def estimate(stats: SolverStats, clue_count: int, grid_size: int,
             config: Optional[DifficultyConfig] = None) -> Difficulty:
    """
    Rate a puzzle.

    Args:
        stats: Statistics of solving the clue set
        clue_count: Number of clues (links count as clues too)
        grid_size: Number of cells

    Returns:
        Difficulty tier; non-decreasing as clue_count drops or branch points and depth grow
    """
    return max(density_tier(clue_count, grid_size, config), search_tier(stats, config))


def difficulty_score(stats: SolverStats, clue_count: int, grid_size: int,
                     config: Optional[DifficultyConfig] = None) -> float:
    """Numeric score for reporting: sparsity plus weighted search effort."""
    config = config or DifficultyConfig()
    if grid_size < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size}")
    sparsity = 1.0 - min(clue_count, grid_size) / grid_size
    return round(10.0 * sparsity + stats.branch_points + config.depth_weight * stats.max_depth, 3)
