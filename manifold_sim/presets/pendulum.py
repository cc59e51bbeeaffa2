"""Double pendulum presets in angle coordinates."""

import numpy as np

from manifold_sim.physics.state import State
from manifold_sim.presets.base import Preset
from manifold_sim.utils.config import Config


class DoublePendulum(Preset):
    """Double pendulum with the full gravity potential (chaotic at large angles)."""
    
    @property
    def name(self) -> str:
        return "double_pendulum"
    
    def default_config(self) -> Config:
        return Config(metric_kind="pendulum", potential_kind="pendulum")
    
    def default_state(self) -> State:
        return State([np.pi / 2, np.pi / 2], [0.0, 0.0])


class SmallAnglePendulum(Preset):
    """Double pendulum in the small-angle (quadratic) approximation."""
    
    @property
    def name(self) -> str:
        return "small_angle_pendulum"
    
    def default_config(self) -> Config:
        return Config(metric_kind="pendulum", potential_kind="smallangle")
    
    def default_state(self) -> State:
        return State([0.1, -0.1], [0.0, 0.0])
