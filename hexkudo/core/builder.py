"""
Puzzle builder: turn a generated path into a puzzle with a unique solution.

Each attempt generates a path, starts from the full numbering and tries to
hide clues one by one in a seeded random order. A removal is kept only when the
solver still finds exactly one completion and the estimated difficulty stays at
or below the target. The attempt succeeds when the final estimate equals the
target; otherwise the next attempt starts on a fresh RNG stream.
"""
import logging
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from hexkudo.config import EngineConfig
from hexkudo.core.difficulty import estimate
from hexkudo.core.errors import BuilderFailed, GenerationFailed, SearchBudgetExceeded
from hexkudo.core.generator import PathGenerator, check_cancelled, fresh_seed
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.solver import Solver
from hexkudo.core.types import Cell, Difficulty, SolverStats, SolverStatus

logger = logging.getLogger(__name__)

Link = Tuple[Cell, Cell]


class PuzzleBuilder:
    """
    Build puzzles of a requested difficulty for one grid.

    Attributes:
        grid: Playing field
        config: Engine configuration (generator, solver, builder, difficulty)
        last_seed: Seed used by the last call to build()
        last_attempts: Attempts used by the last call to build()
    """

    def __init__(self, grid: HexGrid, config: Optional[EngineConfig] = None):
        self.grid = grid
        self.config = config or EngineConfig()
        self.solver = Solver(grid, self.config.solver)
        self.last_seed: Optional[int] = None
        self.last_attempts: int = 0

    def build(self, target_difficulty, rng_seed: Optional[int] = None, cancel=None) -> Puzzle:
        """
        Build a puzzle.

        Args:
            target_difficulty: Difficulty (or its name) to reach
            rng_seed: Non-negative seed; None draws a fresh one
            cancel: Optional flag with is_set(), checked between attempts and removals

        Returns:
            Puzzle whose clues have exactly one completion

        Raises:
            BuilderFailed: No attempt produced a path and reached the target tier
            BuildCancelled: The cancellation flag was set
        """
        target = Difficulty.parse(target_difficulty)
        seed = fresh_seed() if rng_seed is None else int(rng_seed)
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        self.last_seed = seed

        attempts = self.config.builder.max_attempts
        root = np.random.SeedSequence(seed)
        generator = PathGenerator(self.grid, self.config.generator)

        for attempt in range(1, attempts + 1):
            check_cancelled(cancel)
            self.last_attempts = attempt
            stream = root.spawn(1)[0]
            path_seed = int(stream.generate_state(1)[0])
            try:
                path = generator.generate(path_seed, cancel=cancel)
            except GenerationFailed as exc:
                logger.debug(f"Attempt {attempt}: no path ({exc})")
                continue
            rng = np.random.default_rng(stream)

            clues, links, tier = self._reduce(path, target, rng, cancel)
            logger.debug(
                f"Attempt {attempt}: {len(clues)} clues, {len(links)} links, tier {tier.label}"
            )
            if tier == target:
                logger.info(
                    f"Built {target.label} puzzle on {self.grid!r} (seed {seed}, attempt {attempt})"
                )
                return Puzzle(self.grid, clues, path, links=links, seed=seed, difficulty=tier)

        logger.warning(f"Could not reach {target.label} on {self.grid!r} in {attempts} attempts")
        raise BuilderFailed(
            f"No {target.label} puzzle found after {attempts} attempts (seed {seed})"
        )

    def _reduce(self, path: Path, target: Difficulty, rng: np.random.Generator,
                cancel=None) -> Tuple[Dict[Cell, int], Set[Link], Difficulty]:
        """Greedy randomized clue removal; returns the surviving clues, links and tier."""
        n = len(path)
        clues: Dict[Cell, int] = path.as_assignment()
        links: Set[Link] = set()
        if self.config.builder.use_links:
            links = {tuple(sorted(pair)) for pair in path.links()}

        fixed = set()
        if self.config.builder.keep_endpoints:
            fixed = {path.cell_at(1), path.cell_at(n)}

        candidates: List[Tuple[str, object]] = [("clue", c) for c in sorted(clues) if c not in fixed]
        candidates += [("link", pair) for pair in sorted(links)]
        order = rng.permutation(len(candidates))

        tier = estimate(SolverStats(), len(clues) + len(links), n, self.config.difficulty)
        for index in order:
            check_cancelled(cancel)
            kind, item = candidates[int(index)]
            if kind == "clue":
                number = clues.pop(item)
            else:
                links.discard(item)

            kept = False
            try:
                result = self.solver.solve(clues, links)
            except SearchBudgetExceeded as exc:
                logger.debug(f"Removal of {kind} {item} not proven unique: {exc}")
            else:
                if result.status == SolverStatus.UNIQUE:
                    new_tier = estimate(result.stats, len(clues) + len(links), n, self.config.difficulty)
                    if new_tier <= target:
                        tier = new_tier
                        kept = True

            if not kept:
                if kind == "clue":
                    clues[item] = number
                else:
                    links.add(item)

        return clues, links, tier


def build_puzzle(grid: HexGrid, target_difficulty, rng_seed: Optional[int] = None,
                 config: Optional[EngineConfig] = None, cancel=None) -> Puzzle:
    """Build one puzzle (see PuzzleBuilder.build)."""
    return PuzzleBuilder(grid, config).build(target_difficulty, rng_seed, cancel=cancel)
