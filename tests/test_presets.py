"""Tests for preset scenarios."""

import numpy as np
import pytest

from manifold_sim.physics.simulator import StepOrchestrator, StepRequest
from manifold_sim.presets import PRESETS, CentralOrbit, DoublePendulum, get_preset
from manifold_sim.utils.config import Config


@pytest.mark.parametrize("name", list(PRESETS))
def test_preset_generates(name):
    """Every preset yields a valid configuration and a finite state."""
    preset = get_preset(name)
    config, state = preset.generate()

    assert isinstance(config, Config)
    assert preset.name == name
    assert preset.description
    assert state.is_finite()


@pytest.mark.parametrize("name", list(PRESETS))
def test_preset_runs(name):
    config, state = get_preset(name).generate()
    response = StepOrchestrator(config).run(StepRequest(state, dt=0.001, step_count=10))

    assert not response.halted
    assert response.steps_completed == 10


def test_preset_overrides():
    config, state = DoublePendulum(q=[0.1, 0.2], gravity=1.62).generate()
    assert config.gravity == 1.62
    assert np.allclose(state.q, [0.1, 0.2])
    assert np.allclose(state.v, [0.0, 0.0])


def test_get_preset_unknown():
    with pytest.raises(ValueError):
        get_preset("triple_pendulum")


def test_central_orbit_is_circular():
    config, state = CentralOrbit(radius=1.0).generate()
    response = StepOrchestrator(config).run(
        StepRequest(state, dt=0.01, step_count=500, record_trajectory=True)
    )

    radii = [np.hypot(*q) for q in response.trajectory]
    assert max(abs(r - 1.0) for r in radii) < 1e-4
