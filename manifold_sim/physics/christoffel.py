"""Christoffel symbols of the first kind from numerical metric derivatives."""

import numpy as np

from manifold_sim.physics.differentiation import NumericalDifferentiator
from manifold_sim.physics.metric import MetricProvider


class ChristoffelAssembler:
    """Assembles the Levi-Civita connection with a lowered first index.

    G[i, j, k] = 0.5 * (d_j g_ik + d_k g_ij - d_i g_jk)

    which is symmetric in (j, k). Contracting with a velocity gives the
    covariant curvature term Γ[v, v]_i = Σ_jk G[i, j, k] v_j v_k that the
    acceleration solver subtracts before raising the index with g⁻¹.

    The flat metric is constant, so its connection is returned as exact zeros
    instead of differentiating round-off.
    """

    def __init__(self, metric: MetricProvider, differentiator: NumericalDifferentiator):
        self.metric = metric
        self.differentiator = differentiator

    def metric_derivatives(self, q) -> np.ndarray:
        """Array dg with dg[i, j, k] = d g_ij / d q_k."""
        return self.differentiator.tensor_gradient(self.metric.metric, q)

    def christoffel(self, q) -> np.ndarray:
        """Rank-3 connection tensor at q, recomputed on every call."""
        gamma = np.zeros((2, 2, 2))
        if self.metric.kind == "flat":
            return gamma

        dg = self.metric_derivatives(q)
        for i in range(2):
            for j in range(2):
                for k in range(2):
                    gamma[i, j, k] = 0.5 * (dg[i, k, j] + dg[i, j, k] - dg[j, k, i])
        return gamma

    @staticmethod
    def contract(gamma: np.ndarray, v) -> np.ndarray:
        """Γ[v, v]_i = Σ_jk G[i, j, k] v_j v_k."""
        v = np.asarray(v, dtype=float)
        return np.einsum("ijk,j,k->i", gamma, v, v)
