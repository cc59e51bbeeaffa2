"""Tests for configuration handling."""

import dataclasses

import pytest

from manifold_sim.errors import ConfigurationWarning
from manifold_sim.utils.config import Config, load_config, save_config


def test_defaults():
    config = Config()
    assert config.metric_kind == "pendulum"
    assert config.potential_kind == "pendulum"
    assert config.constraint_expr is None
    assert config.mass == 1.0
    assert config.dq == 1e-4


def test_kind_names_are_canonicalized():
    config = Config(metric_kind="Schwarzschild", potential_kind="central")
    assert config.metric_kind == "schwarzschild"
    assert config.potential_kind == "Central"
    assert Config(potential_kind="NEAREARTH").potential_kind == "nearEarth"


@pytest.mark.parametrize("kwargs", [
    {"metric_kind": "hyperbolic"},
    {"potential_kind": "yukawa"},
    {"mass": 0.0},
    {"dq": -1e-4},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)


def test_central_force_coefficient():
    assert Config(schwarzschild_radius=0.4).central_force_coefficient == pytest.approx(-0.2)
    assert Config(schwarzschild_radius=0.4, is_repulsive=True).central_force_coefficient == pytest.approx(0.2)


def test_config_is_immutable():
    config = Config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.mass = 2.0
    changed = config.replace(mass=2.0)
    assert changed.mass == 2.0
    assert config.mass == 1.0


def test_from_dict_warns_on_unknown_keys():
    with pytest.warns(ConfigurationWarning):
        config = Config.from_dict({"mass": 3.0, "colour": "red"})
    assert config.mass == 3.0


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_save_load_round_trip(tmp_path, suffix):
    config = Config(metric_kind="flat", potential_kind="nearEarth", coupling_mu=0.0,
                    constraint_expr="q1**2 + q2**2 - 1", gravity=3.7)
    path = tmp_path / f"config{suffix}"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded == config


def test_load_partial_yaml(tmp_path):
    path = tmp_path / "partial.yml"
    path.write_text("metric_kind: flat\ncoupling_mu: 0.25\n")

    config = load_config(str(path))

    assert config.metric_kind == "flat"
    assert config.coupling_mu == 0.25
    assert config.potential_kind == "pendulum"
