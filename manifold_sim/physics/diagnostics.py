"""Energy diagnostics for the manifold dynamics."""

import math
from dataclasses import dataclass
from typing import Tuple

from manifold_sim.errors import DomainFault
from manifold_sim.physics.metric import MetricProvider
from manifold_sim.physics.potential import PotentialProvider


# Substituted for |E0| when the reference energy is exactly zero.
ENERGY_FLOOR = 1e-12

# Relative error above which a sample is marked as drifting.
DRIFT_WARNING_THRESHOLD = 1e-2

# Floor used when taking log10 of a zero error.
LOG_ERROR_FLOOR = 1e-16


@dataclass(frozen=True)
class EnergySample:
    """Energy at one step and its drift relative to the reference energy."""
    step_index: int
    energy: float
    relative_error: float
    drifting: bool = False

    @property
    def log10_error(self) -> float:
        """log10 of the relative error, floored so zero error stays finite."""
        if math.isnan(self.relative_error):
            return float("nan")
        return math.log10(max(self.relative_error, LOG_ERROR_FLOOR))


class EnergyMonitor:
    """Compute total mechanical energy E = 0.5 vᵀ g(q) v + V(q).

    Diagnostics only; nothing here feeds back into the dynamics.
    """

    def __init__(
        self,
        metric: MetricProvider,
        potential: PotentialProvider,
        energy_floor: float = ENERGY_FLOOR,
        drift_warning_threshold: float = DRIFT_WARNING_THRESHOLD
    ):
        """Initialize monitor.

        Args:
            metric: Metric provider for the kinetic term
            potential: Potential provider
            energy_floor: Denominator used when the reference energy is zero
            drift_warning_threshold: Relative error marking a sample as drifting
        """
        self.metric = metric
        self.potential = potential
        self.energy_floor = energy_floor
        self.drift_warning_threshold = drift_warning_threshold

    def compute_energies(self, q, v) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy.

        A point where the metric is undefined yields nan kinetic energy.

        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        try:
            g = self.metric.metric(q)
        except DomainFault:
            kinetic = float("nan")
        else:
            kinetic = 0.5 * float(v[0] * (g[0, 0] * v[0] + g[0, 1] * v[1])
                                  + v[1] * (g[1, 0] * v[0] + g[1, 1] * v[1]))
        potential = float(self.potential.potential(q))
        return kinetic, potential, kinetic + potential

    def energy(self, q, v) -> float:
        """Total energy at (q, v)."""
        return self.compute_energies(q, v)[2]

    def relative_error(self, energy: float, reference: float) -> float:
        """|E - E0| / |E0|, with the floor standing in for E0 == 0."""
        denominator = abs(reference) if reference != 0 else self.energy_floor
        return abs(energy - reference) / denominator

    def sample(self, step_index: int, q, v, reference: float) -> EnergySample:
        """Energy sample at a step, measured against the reference energy."""
        energy = self.energy(q, v)
        error = self.relative_error(energy, reference)
        drifting = not (error <= self.drift_warning_threshold)
        return EnergySample(step_index, energy, error, drifting)
