"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from manifold_sim.physics.state import State
from manifold_sim.utils.config import Config


class Preset(ABC):
    """Abstract base class for preset scenarios.

    A preset pairs a configuration with initial conditions. Any
    configuration field can be overridden by keyword.
    """
    
    def __init__(self, q=None, v=None, **overrides):
        """Initialize preset.
        
        Args:
            q: Initial coordinates (default: the preset's own)
            v: Initial velocities (default: the preset's own)
            **overrides: Config fields replacing the preset's values
        """
        self.q = q
        self.v = v
        self.overrides = overrides
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
    
    @property
    def description(self) -> str:
        return (self.__doc__ or "").strip().splitlines()[0]
    
    @abstractmethod
    def default_config(self) -> Config:
        """Configuration before overrides."""
        pass
    
    @abstractmethod
    def default_state(self) -> State:
        """Initial conditions before overrides."""
        pass
    
    def config(self) -> Config:
        return self.default_config().replace(**self.overrides)
    
    def initial_state(self) -> State:
        default = self.default_state()
        q = default.q if self.q is None else self.q
        v = default.v if self.v is None else self.v
        return State(q, v)
    
    def generate(self) -> Tuple[Config, State]:
        """Generate configuration and initial conditions.
        
        Returns:
            Tuple of (config, initial_state)
        """
        return self.config(), self.initial_state()
