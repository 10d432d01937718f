"""
Random Hamiltonian path generation.

The generator performs a randomized walk over the grid graph. At each step it
moves to the unvisited neighbour that itself has the fewest unvisited
neighbours (Warnsdorff's rule), breaking ties with the seeded RNG. A walk that
reaches a dead end is abandoned and a new walk starts on a fresh RNG stream
spawned from the caller's seed; there is no cell-by-cell backtracking. After
`GeneratorConfig.max_restarts` walks the generator gives up.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from hexkudo.config import GeneratorConfig
from hexkudo.core.errors import BuildCancelled, GenerationFailed
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.types import Cell

logger = logging.getLogger(__name__)

SEED_LIMIT = 2 ** 32


def fresh_seed() -> int:
    """Draw a new seed from OS entropy."""
    return int(np.random.default_rng().integers(0, SEED_LIMIT))


def check_cancelled(cancel) -> None:
    """Raise BuildCancelled if the cancellation flag is set."""
    if cancel is not None and cancel.is_set():
        raise BuildCancelled("Generation cancelled")


class PathGenerator:
    """
    Generate Hamiltonian paths for a grid.

    Attributes:
        grid: Grid the paths are generated for
        config: Restart budget
        last_seed: Seed used by the last call to generate()
        last_restarts: Number of abandoned walks in the last call
    """

    def __init__(self, grid: HexGrid, config: Optional[GeneratorConfig] = None):
        self.grid = grid
        self.config = config or GeneratorConfig()
        self.last_seed: Optional[int] = None
        self.last_restarts: int = 0

    def generate(self, rng_seed: Optional[int] = None, cancel=None) -> Path:
        """
        Generate a path.

        Args:
            rng_seed: Non-negative integer seed; None draws a fresh one
            cancel: Optional flag object with is_set(), checked between walks

        Returns:
            A Hamiltonian Path of the grid; identical for identical (grid, seed)

        Raises:
            GenerationFailed: Restart budget exhausted or no path can exist
            BuildCancelled: The cancellation flag was set
        """
        seed = fresh_seed() if rng_seed is None else int(rng_seed)
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        self.last_seed = seed
        self.last_restarts = 0

        dead_ends = self.grid.degree_one_cells()
        if len(dead_ends) > 2:
            raise GenerationFailed(
                f"{len(dead_ends)} cells have a single neighbor; no Hamiltonian path exists"
            )

        streams = np.random.SeedSequence(seed)
        for attempt in range(self.config.max_restarts):
            check_cancelled(cancel)
            rng = np.random.default_rng(streams.spawn(1)[0])
            walk = self._walk(rng, dead_ends)
            if walk is not None:
                self.last_restarts = attempt
                logger.debug(f"Path found for seed {seed} after {attempt} restarts")
                return Path(walk)

        self.last_restarts = self.config.max_restarts
        logger.warning(
            f"No path for {self.grid!r} with seed {seed} after {self.config.max_restarts} walks"
        )
        raise GenerationFailed(
            f"No Hamiltonian path found after {self.config.max_restarts} attempts (seed {seed})"
        )

    def _walk(self, rng: np.random.Generator, dead_ends: Sequence[Cell]) -> Optional[List[Cell]]:
        """One Warnsdorff walk. Returns the full walk or None on a dead end."""
        grid = self.grid
        cells = grid.cells
        total = len(cells)

        if dead_ends:
            start = dead_ends[int(rng.integers(len(dead_ends)))]
        else:
            start = cells[int(rng.integers(total))]
        # A second degree-one cell can only be the last cell of the path
        reserved = set(dead_ends) - {start}

        free = {c: len(grid.neighbors(c)) for c in cells}
        visited = {start}
        walk = [start]
        for nbr in grid.neighbors(start):
            free[nbr] -= 1

        current = start
        while len(walk) < total:
            options = [c for c in grid.neighbors(current) if c not in visited]
            if len(walk) < total - 1:
                options = [c for c in options if c not in reserved]
            if not options:
                return None

            fewest = min(free[c] for c in options)
            best = sorted(c for c in options if free[c] == fewest)
            step = best[int(rng.integers(len(best)))] if len(best) > 1 else best[0]

            visited.add(step)
            walk.append(step)
            for nbr in grid.neighbors(step):
                free[nbr] -= 1
            current = step

        return walk


def generate(grid: HexGrid, rng_seed: Optional[int] = None,
             config: Optional[GeneratorConfig] = None, cancel=None) -> Path:
    """Generate one Hamiltonian path of `grid` (see PathGenerator.generate)."""
    return PathGenerator(grid, config).generate(rng_seed, cancel=cancel)
