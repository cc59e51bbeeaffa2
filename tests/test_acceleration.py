"""Tests for the constrained acceleration solver."""

import numpy as np
import pytest

from manifold_sim.errors import ConfigurationWarning
from manifold_sim.physics.acceleration import AccelerationSolver
from manifold_sim.physics.simulator import StepOrchestrator, StepRequest
from manifold_sim.physics.state import State
from manifold_sim.utils.config import Config


def test_free_particle_has_no_acceleration():
    solver = AccelerationSolver(Config(metric_kind="flat", potential_kind="free", coupling_mu=0.5))
    result = solver.solve([0.3, -2.0], [1.5, 0.7])

    assert np.allclose(result.acceleration, 0.0)
    assert result.faults == ()
    assert not result.constrained


def test_oscillator_acceleration():
    """On the identity metric a = -∇V / m."""
    solver = AccelerationSolver(
        Config(metric_kind="flat", potential_kind="oscillator", coupling_mu=0.0, k1=8.0, k2=5.0)
    )
    a = solver.acceleration([1.0, 0.0], [0.0, 0.0])
    assert np.allclose(a, [-13.0, 5.0], atol=1e-6)


def test_double_pendulum_equations_of_motion():
    """Acceleration satisfies the textbook double-pendulum equations (unit masses and lengths)."""
    gravity = 9.8
    solver = AccelerationSolver(Config(metric_kind="pendulum", potential_kind="pendulum", gravity=gravity))
    q = np.array([0.9, -0.3])
    v = np.array([1.2, -0.8])
    a1, a2 = solver.acceleration(q, v)

    delta = q[0] - q[1]
    first = 2 * a1 + np.cos(delta) * a2 + np.sin(delta) * v[1] ** 2 + 2 * gravity * np.sin(q[0])
    second = a2 + np.cos(delta) * a1 - np.sin(delta) * v[0] ** 2 + gravity * np.sin(q[1])
    assert abs(first) < 1e-6
    assert abs(second) < 1e-6


def test_constrained_fall():
    """On q1 = q2 in a uniform field each coordinate accelerates at -g/2."""
    solver = AccelerationSolver(
        Config(metric_kind="flat", potential_kind="nearEarth", coupling_mu=0.0, constraint_expr="q1 - q2")
    )
    result = solver.solve([0.0, 0.0], [0.0, 0.0])

    assert result.constrained
    assert np.allclose(result.acceleration, [-4.9, -4.9], atol=1e-9)
    assert np.isclose(result.multiplier, -4.9)
    assert result.faults == ()


def test_degenerate_constraint_falls_back():
    """A vanishing constraint gradient leaves the motion unconstrained."""
    solver = AccelerationSolver(
        Config(metric_kind="flat", potential_kind="nearEarth", coupling_mu=0.0,
               constraint_expr="q1**2 + q2**2")
    )
    result = solver.solve([0.0, 0.0], [0.0, 0.0])

    assert not result.constrained
    assert "degenerate_constraint" in result.faults
    assert np.allclose(result.acceleration, [0.0, -9.8])


def test_constraint_evaluation_failure_falls_back():
    solver = AccelerationSolver(
        Config(metric_kind="flat", potential_kind="nearEarth", coupling_mu=0.0, constraint_expr="log(q1)")
    )
    result = solver.solve([0.0, 0.5], [0.0, 0.0])

    assert result.faults == ("constraint_evaluation",)
    assert np.allclose(result.acceleration, [0.0, -9.8])


def test_singular_metric_gives_zero_acceleration():
    solver = AccelerationSolver(Config(metric_kind="flat", potential_kind="oscillator", coupling_mu=1.0))
    result = solver.solve([1.0, 0.0], [0.0, 0.0])

    assert "singular_metric" in result.faults
    assert np.array_equal(result.acceleration, np.zeros(2))


def test_metric_singularity_gives_zero_acceleration():
    solver = AccelerationSolver(
        Config(metric_kind="schwarzschild", potential_kind="free", schwarzschild_radius=0.4)
    )
    result = solver.solve([0.4, 0.0], [0.1, 0.0])

    assert result.faults == ("metric_singularity",)
    assert np.array_equal(result.acceleration, np.zeros(2))


def test_non_finite_acceleration_is_reported():
    """Differencing across the Central singularity is flagged, not raised."""
    solver = AccelerationSolver(
        Config(metric_kind="flat", potential_kind="Central", coupling_mu=0.0, dq=1e-4)
    )
    result = solver.solve([1e-4, 0.0], [0.0, 0.0])

    assert "non_finite" in result.faults
    assert not result.is_finite


def test_callable_matches_solve():
    solver = AccelerationSolver(Config())
    q, v = [0.4, 0.1], [0.2, -0.3]
    assert np.array_equal(solver(q, v), solver.solve(q, v).acceleration)


def test_deep_constraint_expression_does_not_escape_solver():
    """A constraint rejected for depth leaves a run unconstrained instead of crashing it."""
    with pytest.warns(ConfigurationWarning):
        config = Config(metric_kind="flat", potential_kind="nearEarth", coupling_mu=0.0,
                        constraint_expr="q1 - q2" + " + 0*q1" * 955)
        orchestrator = StepOrchestrator(config)

    response = orchestrator.run(StepRequest(State([0.0, 0.0], [0.0, 0.0]), dt=0.01, step_count=1))

    assert response.steps_completed == 1
    assert np.allclose(response.final_acceleration, [0.0, -9.8])
