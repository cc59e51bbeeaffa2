"""Tests for the metric provider."""

import numpy as np
import pytest

from manifold_sim.errors import MetricSingularity
from manifold_sim.physics.metric import MetricProvider
from manifold_sim.utils.config import Config


def test_flat_metric():
    """Flat metric is constant with mu off the diagonal."""
    metric = MetricProvider(Config(metric_kind="flat", coupling_mu=0.3))
    assert np.allclose(metric.metric([5.0, -2.0]), [[1.0, 0.3], [0.3, 1.0]])


def test_pendulum_metric():
    """Pendulum metric follows the double-pendulum kinetic form."""
    metric = MetricProvider(Config(metric_kind="pendulum", coupling_mu=0.5, l1=2.0, l2=1.5))
    g = metric.metric([0.7, 0.2])

    assert np.isclose(g[0, 0], 1.5 * 4.0)
    assert np.isclose(g[1, 1], 0.5 * 2.25)
    assert np.isclose(g[0, 1], 0.5 * 2.0 * 1.5 * np.cos(0.5))
    assert g[0, 1] == g[1, 0]


@pytest.mark.parametrize("kind, mu, q", [
    ("flat", 0.5, [0.3, -1.2]),
    ("pendulum", 1.0, [0.7, 0.2]),
    ("pendulum", 1.0, [np.pi / 2, -0.4]),
    ("schwarzschild", 1.0, [1.0, 0.5]),
    ("schwarzschild", 1.0, [-0.3, 0.2]),
])
def test_inverse_times_metric_is_identity(kind, mu, q):
    """g⁻¹ g = I wherever the metric is regular."""
    metric = MetricProvider(Config(metric_kind=kind, coupling_mu=mu))
    g = metric.metric(q)
    inv, singular = metric.inverse(g)

    assert not singular
    assert np.allclose(inv @ g, np.eye(2), atol=1e-10)


def test_schwarzschild_origin_is_identity():
    metric = MetricProvider(Config(metric_kind="schwarzschild"))
    assert np.array_equal(metric.metric([0.0, 0.0]), np.eye(2))


def test_schwarzschild_radius_raises():
    """The metric is undefined on r = rs."""
    metric = MetricProvider(Config(metric_kind="schwarzschild", schwarzschild_radius=0.4))
    with pytest.raises(MetricSingularity):
        metric.metric([0.4, 0.0])


def test_singular_flat_metric():
    """mu = 1 makes the flat metric degenerate; the inverse falls back to zeros."""
    metric = MetricProvider(Config(metric_kind="flat", coupling_mu=1.0))
    inv, singular = metric.inverse_at([0.0, 0.0])

    assert singular
    assert np.array_equal(inv, np.zeros((2, 2)))
