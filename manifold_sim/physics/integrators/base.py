"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Callable

from manifold_sim.physics.state import State


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    Integrators advance the first-order system (q', v') = (v, a(q, v)) and
    know nothing about constraints; those live in the acceleration function.
    """
    
    @abstractmethod
    def step(self, state: State, dt: float, acceleration: Callable) -> State:
        """Perform one integration step.
        
        Args:
            state: Current state (q, v)
            dt: Time step
            acceleration: Callable a(q, v) returning the acceleration 2-vector
            
        Returns:
            New State; the input state is left untouched
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (e.g., 1 for Euler, 4 for RK4)."""
        pass
