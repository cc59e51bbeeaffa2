"""Constrained equations of motion on the configuration manifold."""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from manifold_sim.errors import ConstraintEvaluationError, DomainFault
from manifold_sim.physics.christoffel import ChristoffelAssembler
from manifold_sim.physics.constraint import ConstraintFunction, compile_constraint
from manifold_sim.physics.differentiation import NumericalDifferentiator
from manifold_sim.physics.generalized_force import GeneralizedForce
from manifold_sim.physics.metric import MetricProvider
from manifold_sim.physics.potential import PotentialProvider
from manifold_sim.utils.config import Config


@dataclass(frozen=True)
class AccelerationResult:
    """Acceleration at one (q, v) plus how it was obtained."""
    acceleration: np.ndarray
    multiplier: float = 0.0
    constrained: bool = False
    faults: Tuple[str, ...] = ()

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.acceleration)))


class AccelerationSolver:
    """Solves for the contravariant acceleration a = g⁻¹ (A0 + λ ∇f).

    A0 = F/m - Γ[v, v] - ∇V/m is the covariant right-hand side. When the
    constraint is active, λ enforces d²f/dt² = 0:

        λ = -(∇fᵀ g⁻¹ A0 + vᵀ Hf v) / (∇fᵀ g⁻¹ ∇f)

    This cancels the constraint's second derivative only; drift accumulated by
    the integrator is not corrected.

    Domain faults never escape ``solve``. Each one is resolved with a fallback
    and reported by name in ``AccelerationResult.faults``:

    - metric_singularity: metric undefined at q, zero acceleration
    - singular_metric: det(g) == 0, zero inverse metric
    - constraint_evaluation: constraint not evaluable near q, unconstrained
    - degenerate_constraint: ∇f == 0 or ∇fᵀ g⁻¹ ∇f == 0, unconstrained
    - non_finite: the result contains inf or nan
    """

    def __init__(
        self,
        config: Config,
        metric: Optional[MetricProvider] = None,
        potential: Optional[PotentialProvider] = None,
        constraint: Optional[ConstraintFunction] = None,
        differentiator: Optional[NumericalDifferentiator] = None,
        christoffel: Optional[ChristoffelAssembler] = None,
        force: Optional[GeneralizedForce] = None,
    ):
        """Initialize solver.

        Args:
            config: Simulation configuration
            metric: Metric provider (default: built from config)
            potential: Potential provider (default: built from config)
            constraint: Compiled constraint (default: compiled from config.constraint_expr)
            differentiator: Finite-difference operator (default: step config.dq)
            christoffel: Connection assembler (default: from metric and differentiator)
            force: Generalized force (default: built from config)
        """
        self.config = config
        self.mass = config.mass
        self.metric = metric or MetricProvider(config)
        self.potential = potential or PotentialProvider(config)
        self.constraint = constraint if constraint is not None else compile_constraint(config.constraint_expr)
        self.differentiator = differentiator or NumericalDifferentiator(config.dq)
        self.christoffel = christoffel or ChristoffelAssembler(self.metric, self.differentiator)
        self.force = force or GeneralizedForce(config, self.metric)

    def __call__(self, q, v) -> np.ndarray:
        return self.acceleration(q, v)

    def acceleration(self, q, v) -> np.ndarray:
        """Acceleration vector at (q, v)."""
        return self.solve(q, v).acceleration

    def covariant_rhs(self, q, v) -> np.ndarray:
        """A0 = F/m - Γ[v, v] - ∇V/m.

        Raises:
            DomainFault: If the metric is undefined near q
        """
        gamma = self.christoffel.christoffel(q)
        grad_v = self.differentiator.gradient(self.potential.potential, q)
        forces = self.force.force(q, v)
        return forces / self.mass - ChristoffelAssembler.contract(gamma, v) - grad_v / self.mass

    def solve(self, q, v) -> AccelerationResult:
        q = np.asarray(q, dtype=float)
        v = np.asarray(v, dtype=float)
        faults = []

        try:
            a0 = self.covariant_rhs(q, v)
            inv, singular = self.metric.inverse_at(q)
        except DomainFault as exc:
            return AccelerationResult(np.zeros(2), faults=(exc.code,))
        if singular:
            faults.append("singular_metric")

        multiplier = 0.0
        constrained = False
        covariant = a0
        if self.constraint.is_active:
            try:
                grad_f = self.differentiator.gradient(self.constraint, q)
                hess_f = self.differentiator.hessian(self.constraint, q)
            except ConstraintEvaluationError as exc:
                faults.append(exc.code)
            else:
                denominator = grad_f @ inv @ grad_f
                if not np.any(grad_f) or denominator == 0 or not np.isfinite(denominator):
                    faults.append("degenerate_constraint")
                else:
                    multiplier = -(grad_f @ inv @ a0 + v @ hess_f @ v) / denominator
                    covariant = a0 + multiplier * grad_f
                    constrained = True

        acceleration = inv @ covariant
        if not np.all(np.isfinite(acceleration)):
            faults.append("non_finite")

        return AccelerationResult(
            acceleration=acceleration,
            multiplier=float(multiplier),
            constrained=constrained,
            faults=tuple(faults),
        )
