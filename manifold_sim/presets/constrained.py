"""Presets held to a curve by a holonomic constraint."""

from manifold_sim.physics.state import State
from manifold_sim.presets.base import Preset
from manifold_sim.utils.config import Config


class InclinedPlane(Preset):
    """Bead sliding down the line q2 = -0.5 q1 in a uniform field."""
    
    @property
    def name(self) -> str:
        return "inclined_plane"
    
    def default_config(self) -> Config:
        return Config(
            metric_kind="flat",
            potential_kind="nearEarth",
            coupling_mu=0.0,
            constraint_expr="q2 + 0.5*q1",
        )
    
    def default_state(self) -> State:
        return State([0.0, 0.0], [0.0, 0.0])


class CircleConstraint(Preset):
    """Bead on the unit circle in a uniform field: a pendulum in Cartesian form."""
    
    @property
    def name(self) -> str:
        return "circle_constraint"
    
    def default_config(self) -> Config:
        return Config(
            metric_kind="flat",
            potential_kind="nearEarth",
            coupling_mu=0.0,
            constraint_expr="q1**2 + q2**2 - 1",
        )
    
    def default_state(self) -> State:
        return State([1.0, 0.0], [0.0, 0.0])
