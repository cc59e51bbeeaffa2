"""Numerical integrators for the generalized-coordinate system."""

from manifold_sim.physics.integrators.base import Integrator
from manifold_sim.physics.integrators.euler import EulerIntegrator
from manifold_sim.physics.integrators.rk4 import RK4Integrator

INTEGRATORS = {
    "euler": EulerIntegrator,
    "rk4": RK4Integrator,
}


def get_integrator(name: str) -> Integrator:
    """Get an integrator instance by name."""
    integrator_class = INTEGRATORS.get(name.lower())
    if integrator_class is None:
        raise ValueError(f"Unknown integrator '{name}'. Available: {list(INTEGRATORS)}")
    return integrator_class()


__all__ = ["Integrator", "EulerIntegrator", "RK4Integrator", "INTEGRATORS", "get_integrator"]
