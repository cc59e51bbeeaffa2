"""Tests for the connection and the non-potential forces."""

import numpy as np

from manifold_sim.physics.christoffel import ChristoffelAssembler
from manifold_sim.physics.differentiation import NumericalDifferentiator
from manifold_sim.physics.generalized_force import GeneralizedForce
from manifold_sim.physics.metric import MetricProvider
from manifold_sim.utils.config import Config


def assembler(**kwargs):
    config = Config(**kwargs)
    return ChristoffelAssembler(MetricProvider(config), NumericalDifferentiator(config.dq))


def test_flat_connection_vanishes():
    gamma = assembler(metric_kind="flat", coupling_mu=0.3).christoffel([1.0, 2.0])
    assert np.array_equal(gamma, np.zeros((2, 2, 2)))


def test_pendulum_connection():
    """Only the terms from d g12 survive for the double pendulum."""
    q = [0.7, 0.2]
    gamma = assembler(metric_kind="pendulum", coupling_mu=1.0).christoffel(q)
    s = np.sin(0.5)

    assert np.isclose(gamma[0, 1, 1], s, atol=1e-7)
    assert np.isclose(gamma[1, 0, 0], -s, atol=1e-7)
    for index in [(0, 0, 0), (0, 0, 1), (0, 1, 0), (1, 1, 1), (1, 0, 1), (1, 1, 0)]:
        assert abs(gamma[index]) < 1e-7


def test_connection_symmetric_in_lower_pair():
    for kind, q in [("pendulum", [1.1, -0.4]), ("schwarzschild", [1.0, 0.5])]:
        gamma = assembler(metric_kind=kind).christoffel(q)
        assert np.allclose(gamma, gamma.transpose(0, 2, 1), atol=1e-10)


def test_contract():
    gamma = np.zeros((2, 2, 2))
    gamma[0, 1, 1] = 2.0
    gamma[1, 0, 1] = gamma[1, 1, 0] = 1.0
    result = ChristoffelAssembler.contract(gamma, [3.0, 5.0])
    assert np.allclose(result, [2.0 * 25.0, 2.0 * 15.0])


def test_no_force_by_default():
    for kind in ["flat", "pendulum"]:
        config = Config(metric_kind=kind)
        force = GeneralizedForce(config, MetricProvider(config))
        assert np.array_equal(force([0.3, 0.4], [1.0, -1.0]), np.zeros(2))


def test_time_dilation_force():
    config = Config(metric_kind="schwarzschild", schwarzschild_radius=0.4)
    metric = MetricProvider(config)
    force = GeneralizedForce(config, metric)
    q = np.array([1.0, 0.5])
    r = np.hypot(*q)

    expected = -0.4 / r ** 3 * (metric.metric(q) @ q)
    assert np.allclose(force(q, [0.0, 0.0]), expected)
    assert np.array_equal(force([0.0, 0.0], [1.0, 1.0]), np.zeros(2))


def test_drag_and_magnetic_forces():
    config = Config(metric_kind="flat", drag=0.5, magnetic_field=2.0)
    force = GeneralizedForce(config, MetricProvider(config))
    v = np.array([1.0, -3.0])
    assert np.allclose(force([0.0, 0.0], v), -0.5 * v + 2.0 * np.array([-3.0, -1.0]))
