"""Euler method integrator (baseline, O(h) accuracy)."""

from typing import Callable

from manifold_sim.physics.integrators.base import Integrator
from manifold_sim.physics.state import State


class EulerIntegrator(Integrator):
    """Euler method - simple first-order integrator.
    
    Fast but less accurate. Good for baseline comparisons of energy drift.
    """
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def step(self, state: State, dt: float, acceleration: Callable) -> State:
        """Euler step: v_new = v + a*dt, q_new = q + v*dt."""
        a = acceleration(state.q, state.v)
        return State(state.q + state.v * dt, state.v + a * dt)
