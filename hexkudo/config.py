"""
Engine configuration models.

This module defines the tunable budgets and thresholds of the engine:
- GeneratorConfig: path generation restart budget
- SolverConfig: search node budget
- BuilderConfig: clue removal policy and attempt budget
- DifficultyConfig: tier thresholds for the estimator
- EngineConfig: the four groups together

There is no external timeout anywhere in the engine; these budgets are the
only bound on running time, so defaults are conservative.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HEXKUDO_CONFIG"


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Path generation parameters.

    Attributes:
        max_restarts: Number of fresh random walks tried before giving up
    """
    max_restarts: int = 300

    def __post_init__(self):
        if self.max_restarts < 1:
            raise ValueError(f"max_restarts must be >= 1, got {self.max_restarts}")


@dataclass(frozen=True)
class SolverConfig:
    """
    Solver parameters.

    Attributes:
        max_nodes: Search nodes (branch placements) allowed per solve
    """
    max_nodes: int = 200_000

    def __post_init__(self):
        if self.max_nodes < 1:
            raise ValueError(f"max_nodes must be >= 1, got {self.max_nodes}")


@dataclass(frozen=True)
class BuilderConfig:
    """
    Puzzle builder parameters.

    Attributes:
        max_attempts: Full generate-and-reduce attempts before BuilderFailed
        keep_endpoints: Always keep numbers 1 and N as clues
        use_links: Start with every consecutive pair linked and let links
            take part in the removal pass
    """
    max_attempts: int = 25
    keep_endpoints: bool = True
    use_links: bool = False

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")


@dataclass(frozen=True)
class DifficultyConfig:
    """
    Estimator thresholds.

    A puzzle's tier is the harder of two tiers:
    - density tier: clue density at or above density_thresholds[i] keeps the
      tier at i (EASY, MEDIUM, HARD); below the last threshold is EXPERT
    - search tier: the harder of the branch tier and the depth tier. Branch
      points (or max search depth) at or below branch_thresholds[i]
      (depth_thresholds[i]) keep the tier at i; above the last is EXPERT

    Attributes:
        density_thresholds: Descending clue-density bounds for EASY/MEDIUM/HARD
        branch_thresholds: Ascending branch-point bounds for EASY/MEDIUM/HARD
        depth_thresholds: Ascending max-depth bounds for EASY/MEDIUM/HARD
        depth_weight: Weight of max search depth in the numeric score
    """
    density_thresholds: Tuple[float, float, float] = (0.55, 0.40, 0.30)
    branch_thresholds: Tuple[int, int, int] = (0, 2, 6)
    depth_thresholds: Tuple[int, int, int] = (0, 2, 4)
    depth_weight: float = 0.5

    def __post_init__(self):
        d = tuple(float(x) for x in self.density_thresholds)
        b = tuple(int(x) for x in self.branch_thresholds)
        s = tuple(int(x) for x in self.depth_thresholds)
        if len(d) != 3 or len(b) != 3 or len(s) != 3:
            raise ValueError("density, branch and depth thresholds need 3 values each")
        if not (d[0] >= d[1] >= d[2]):
            raise ValueError(f"density_thresholds must be descending: {d}")
        if not (b[0] <= b[1] <= b[2]):
            raise ValueError(f"branch_thresholds must be ascending: {b}")
        if not (s[0] <= s[1] <= s[2]):
            raise ValueError(f"depth_thresholds must be ascending: {s}")
        object.__setattr__(self, "density_thresholds", d)
        object.__setattr__(self, "branch_thresholds", b)
        object.__setattr__(self, "depth_thresholds", s)


@dataclass(frozen=True)
class EngineConfig:
    """All engine configuration groups."""
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    builder: BuilderConfig = field(default_factory=BuilderConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """
        Build a config from a nested dict, e.g. {"solver": {"max_nodes": 5000}}.

        Raises:
            ValueError: On unknown groups or keys, or invalid values
        """
        group_classes = {
            "generator": GeneratorConfig,
            "solver": SolverConfig,
            "builder": BuilderConfig,
            "difficulty": DifficultyConfig,
        }
        kwargs = {}
        for name, values in (data or {}).items():
            if name not in group_classes:
                raise ValueError(f"Unknown config group: {name!r}")
            klass = group_classes[name]
            known = {f.name for f in fields(klass)}
            unknown = set(values) - known
            if unknown:
                raise ValueError(f"Unknown keys in {name!r}: {sorted(unknown)}")
            kwargs[name] = klass(**values)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load an EngineConfig from a JSON file.

    With no path, the file named by $HEXKUDO_CONFIG is used when set;
    otherwise defaults are returned.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return EngineConfig()

    config_path = Path(path)
    logger.info(f"Loading configuration from {config_path}")
    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return EngineConfig.from_dict(data)
