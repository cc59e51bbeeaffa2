"""Point mass in a plane under various force fields."""

import numpy as np

from manifold_sim.physics.state import State
from manifold_sim.presets.base import Preset
from manifold_sim.utils.config import Config


class FreeParticle(Preset):
    """Force-free particle on the flat plane."""
    
    @property
    def name(self) -> str:
        return "free_particle"
    
    def default_config(self) -> Config:
        return Config(metric_kind="flat", potential_kind="free", coupling_mu=0.0)
    
    def default_state(self) -> State:
        return State([0.0, 0.0], [1.0, 0.5])


class CoupledOscillator(Preset):
    """Two masses on springs k1 coupled by a spring k2."""
    
    @property
    def name(self) -> str:
        return "coupled_oscillator"
    
    def default_config(self) -> Config:
        return Config(metric_kind="flat", potential_kind="oscillator", coupling_mu=0.0)
    
    def default_state(self) -> State:
        return State([1.0, 0.0], [0.0, 0.0])


class CentralOrbit(Preset):
    """Circular orbit in the attractive regularized k/r well."""
    
    def __init__(self, q=None, v=None, radius: float = 1.0, **overrides):
        """Initialize central orbit preset.
        
        Args:
            radius: Orbit radius; the initial speed is the circular speed there
        """
        super().__init__(q, v, **overrides)
        self.radius = radius
    
    @property
    def name(self) -> str:
        return "central_orbit"
    
    def default_config(self) -> Config:
        return Config(metric_kind="flat", potential_kind="Central", coupling_mu=0.0)
    
    def default_state(self) -> State:
        config = self.config()
        # |k|/r² = v²/r outside rs
        speed = np.sqrt(abs(config.central_force_coefficient) / (config.mass * self.radius))
        return State([self.radius, 0.0], [0.0, speed])


class SchwarzschildOrbit(Preset):
    """Orbit in the central well with the Schwarzschild-like metric and time dilation."""
    
    @property
    def name(self) -> str:
        return "schwarzschild_orbit"
    
    def default_config(self) -> Config:
        return Config(metric_kind="schwarzschild", potential_kind="Central")
    
    def default_state(self) -> State:
        return State([2.0, 0.0], [0.0, 0.3])
