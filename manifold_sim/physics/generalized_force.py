"""Non-potential generalized forces."""

import numpy as np

from manifold_sim.physics.metric import MetricProvider
from manifold_sim.utils.config import Config


class GeneralizedForce:
    """Forces that do not derive from the scalar potential.

    - Time dilation (schwarzschild metric only): F_i = -rs/r³ Σ_j g_ij q_j,
      folding the curved time coordinate into the spatial dynamics. Zero at r = 0.
    - Linear drag: F = -b v
    - Magnetic-like deflection: F = B (v2, -v1)

    Drag and magnetic field default to zero, so for every metric kind but
    schwarzschild the force vanishes unless configured.
    """

    def __init__(self, config: Config, metric: MetricProvider):
        self.metric = metric
        self.rs = config.schwarzschild_radius
        self.drag = config.drag
        self.magnetic_field = config.magnetic_field

    def __call__(self, q, v) -> np.ndarray:
        return self.force(q, v)

    def force(self, q, v) -> np.ndarray:
        q = np.asarray(q, dtype=float)
        v = np.asarray(v, dtype=float)
        total = self.time_dilation(q)
        if self.drag:
            total = total - self.drag * v
        if self.magnetic_field:
            total = total + self.magnetic_field * np.array([v[1], -v[0]])
        return total

    def time_dilation(self, q) -> np.ndarray:
        """Time-dilation pseudo-force, zero outside the schwarzschild metric."""
        q = np.asarray(q, dtype=float)
        if self.metric.kind != "schwarzschild":
            return np.zeros(2)
        r = np.hypot(q[0], q[1])
        if r == 0:
            return np.zeros(2)
        factor = -self.rs / r ** 3
        return factor * (self.metric.metric(q) @ q)
