"""Covariant metric tensor of the configuration manifold."""

from typing import Tuple
import numpy as np

from manifold_sim.errors import MetricSingularity
from manifold_sim.utils.config import Config


# Distance from the Schwarzschild radius treated as sitting on it.
SINGULARITY_TOLERANCE = 1e-12

# Relative determinant below which the metric counts as singular.
DETERMINANT_TOLERANCE = 1e-14


class MetricProvider:
    """Evaluates the kinetic metric g_ij(q) for the configured metric kind.

    Supports three kinds:
    1. flat: constant [[1, mu], [mu, 1]]
    2. pendulum: double-pendulum kinetic form with g12 = mu*l1*l2*cos(q1 - q2)
    3. schwarzschild: spatial part of a Schwarzschild-like metric in Cartesian
       coordinates, f = 1/(1 - rs/r). Identity at r = 0, undefined at r = rs.
    """

    def __init__(self, config: Config):
        self.kind = config.metric_kind
        self.mu = config.coupling_mu
        self.l1 = config.l1
        self.l2 = config.l2
        self.rs = config.schwarzschild_radius

    def __call__(self, q) -> np.ndarray:
        return self.metric(q)

    def metric(self, q) -> np.ndarray:
        """Metric tensor at q as a symmetric 2x2 array.

        Raises:
            MetricSingularity: For the schwarzschild kind at r == rs
        """
        q1, q2 = float(q[0]), float(q[1])

        if self.kind == "pendulum":
            g11 = (1 + self.mu) * self.l1 ** 2
            g22 = self.mu * self.l2 ** 2
            g12 = self.mu * self.l1 * self.l2 * np.cos(q1 - q2)
        elif self.kind == "schwarzschild":
            r = np.hypot(q1, q2)
            if r == 0:
                return np.eye(2)
            if abs(r - self.rs) <= SINGULARITY_TOLERANCE * max(1.0, self.rs):
                raise MetricSingularity(f"Metric is singular at r = rs = {self.rs}")
            f = 1.0 / (1.0 - self.rs / r)
            factor = 1.0 / r ** 2
            g11 = 1 + factor * (f - 1) * q1 ** 2
            g22 = 1 + factor * (f - 1) * q2 ** 2
            g12 = (f - 1) * q1 * q2 * factor
        else:
            g11 = 1.0
            g22 = 1.0
            g12 = self.mu

        return np.array([[g11, g12], [g12, g22]])

    def inverse(self, g) -> Tuple[np.ndarray, bool]:
        """Closed-form inverse adj(g)/det(g).

        Returns:
            Tuple of (inverse, singular). A singular metric yields the zero
            matrix and ``singular=True``.
        """
        g = np.asarray(g, dtype=float)
        det = g[0, 0] * g[1, 1] - g[0, 1] * g[1, 0]
        scale = max(1.0, float(np.max(np.abs(g)))) ** 2
        if not np.isfinite(det) or abs(det) <= DETERMINANT_TOLERANCE * scale:
            return np.zeros((2, 2)), True
        inv = np.array([
            [g[1, 1], -g[0, 1]],
            [-g[1, 0], g[0, 0]],
        ]) / det
        return inv, False

    def inverse_at(self, q) -> Tuple[np.ndarray, bool]:
        """Inverse metric evaluated at q."""
        return self.inverse(self.metric(q))
