"""Physics kernel for constrained 2-DOF manifold dynamics."""

from manifold_sim.physics.acceleration import AccelerationResult, AccelerationSolver
from manifold_sim.physics.christoffel import ChristoffelAssembler
from manifold_sim.physics.constraint import ZERO_CONSTRAINT, ConstraintFunction, compile_constraint
from manifold_sim.physics.diagnostics import EnergyMonitor, EnergySample
from manifold_sim.physics.differentiation import NumericalDifferentiator
from manifold_sim.physics.generalized_force import GeneralizedForce
from manifold_sim.physics.metric import MetricProvider
from manifold_sim.physics.potential import PotentialProvider
from manifold_sim.physics.simulator import Simulator, StepOrchestrator, StepRequest, StepResponse
from manifold_sim.physics.state import State

__all__ = [
    "AccelerationResult",
    "AccelerationSolver",
    "ChristoffelAssembler",
    "ConstraintFunction",
    "ZERO_CONSTRAINT",
    "compile_constraint",
    "EnergyMonitor",
    "EnergySample",
    "NumericalDifferentiator",
    "GeneralizedForce",
    "MetricProvider",
    "PotentialProvider",
    "Simulator",
    "StepOrchestrator",
    "StepRequest",
    "StepResponse",
    "State",
]
