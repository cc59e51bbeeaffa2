"""Scalar potentials over the generalized coordinates."""

import numpy as np

from manifold_sim.utils.config import Config


class PotentialProvider:
    """Scalar potential V(q) for the configured potential kind.

    Supported kinds:
    1. free: V = 0
    2. pendulum: gravity on both links, m(1+mu)g l1 (1 - cos q1) + m mu g l2 (1 - cos q2)
    3. smallangle: quadratic approximation of the pendulum potential
    4. oscillator: 0.5 k1 (q1² + q2²) + 0.5 k2 (q1 - q2)²
    5. Central: k/r outside rs, regularized to a quadratic inside rs.
       V(r <= rs) = 0.5 k/rs - 0.5 k r²/rs³ + k/rs, continuous with its
       derivative at r = rs. r = 0 is a hard singularity (+inf).
    6. nearEarth: uniform field, m g q2
    """

    def __init__(self, config: Config):
        self.kind = config.potential_kind
        self.mass = config.mass
        self.mu = config.coupling_mu
        self.l1 = config.l1
        self.l2 = config.l2
        self.k1 = config.k1
        self.k2 = config.k2
        self.gravity = config.gravity
        self.rs = config.schwarzschild_radius
        self.k = config.central_force_coefficient

    def __call__(self, q) -> float:
        return self.potential(q)

    def potential(self, q) -> float:
        """Potential energy at q."""
        q1, q2 = float(q[0]), float(q[1])

        if self.kind == "pendulum":
            return (self.mass * (1 + self.mu) * self.gravity * self.l1 * (1 - np.cos(q1))
                    + self.mass * self.mu * self.gravity * self.l2 * (1 - np.cos(q2)))
        if self.kind == "smallangle":
            return (0.5 * self.mass * (1 + self.mu) * self.gravity * self.l1 * q1 ** 2
                    + 0.5 * self.mass * self.mu * self.gravity * self.l2 * q2 ** 2)
        if self.kind == "oscillator":
            return 0.5 * self.k1 * (q1 ** 2 + q2 ** 2) + 0.5 * self.k2 * (q1 - q2) ** 2
        if self.kind == "Central":
            return self.central(np.hypot(q1, q2))
        if self.kind == "nearEarth":
            return self.mass * self.gravity * q2
        return 0.0

    def central(self, r: float) -> float:
        """Radial profile of the Central potential."""
        if r == 0:
            return float("inf")
        if r <= self.rs:
            return 0.5 * self.k / self.rs - 0.5 * self.k * r ** 2 / self.rs ** 3 + self.k / self.rs
        return self.k / r

    def sample_grid(self, xs, ys) -> np.ndarray:
        """Potential sampled on the grid spanned by xs and ys.

        Args:
            xs: q1 sample values
            ys: q2 sample values

        Returns:
            Array of shape (len(ys), len(xs)) with V at (xs[j], ys[i]) in [i, j]
        """
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        grid = np.empty((ys.size, xs.size))
        for i, y in enumerate(ys):
            for j, x in enumerate(xs):
                grid[i, j] = self.potential((x, y))
        return grid
