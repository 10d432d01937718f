"""
Configuration tests: defaults, overrides, JSON files and the environment variable.
"""
import json

import pytest

from hexkudo.config import (
    CONFIG_ENV_VAR, BuilderConfig, DifficultyConfig, EngineConfig, GeneratorConfig,
    SolverConfig, load_config,
)


def test_defaults():
    config = EngineConfig()
    assert config.generator.max_restarts == GeneratorConfig().max_restarts
    assert config.builder.keep_endpoints is True
    assert config.builder.use_links is False
    assert config.difficulty.density_thresholds == (0.55, 0.40, 0.30)


def test_from_dict_overrides_one_group():
    config = EngineConfig.from_dict({"solver": {"max_nodes": 500}})
    assert config.solver.max_nodes == 500
    assert config.builder == BuilderConfig()


def test_from_dict_round_trip():
    config = EngineConfig(builder=BuilderConfig(max_attempts=3, use_links=True))
    assert EngineConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("data", [
    {"solvr": {}},
    {"solver": {"max_node": 5}},
])
def test_unknown_keys_rejected(data):
    with pytest.raises(ValueError):
        EngineConfig.from_dict(data)


@pytest.mark.parametrize("factory", [
    lambda: GeneratorConfig(max_restarts=0),
    lambda: SolverConfig(max_nodes=0),
    lambda: BuilderConfig(max_attempts=0),
    lambda: DifficultyConfig(density_thresholds=(0.3, 0.4, 0.5)),
    lambda: DifficultyConfig(branch_thresholds=(5, 1, 0)),
    lambda: DifficultyConfig(branch_thresholds=(1, 2)),
    lambda: DifficultyConfig(depth_thresholds=(4, 2, 0)),
])
def test_invalid_values_rejected(factory):
    with pytest.raises(ValueError):
        factory()


def test_configs_are_frozen():
    with pytest.raises(AttributeError):
        SolverConfig().max_nodes = 3


def test_load_config_file(tmp_path):
    path = tmp_path / "hexkudo.json"
    path.write_text(json.dumps({"builder": {"max_attempts": 4}}))
    assert load_config(path).builder.max_attempts == 4


def test_load_config_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"generator": {"max_restarts": 9}}))
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().generator.max_restarts == 9


def test_load_config_defaults_without_file(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert load_config() == EngineConfig()
