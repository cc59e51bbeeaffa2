"""Preset scenarios: a configuration plus initial conditions."""

from manifold_sim.presets.base import Preset
from manifold_sim.presets.constrained import CircleConstraint, InclinedPlane
from manifold_sim.presets.fields import (
    CentralOrbit,
    CoupledOscillator,
    FreeParticle,
    SchwarzschildOrbit,
)
from manifold_sim.presets.pendulum import DoublePendulum, SmallAnglePendulum

PRESETS = {
    "double_pendulum": DoublePendulum,
    "small_angle_pendulum": SmallAnglePendulum,
    "free_particle": FreeParticle,
    "coupled_oscillator": CoupledOscillator,
    "central_orbit": CentralOrbit,
    "schwarzschild_orbit": SchwarzschildOrbit,
    "inclined_plane": InclinedPlane,
    "circle_constraint": CircleConstraint,
}


def get_preset(name: str, **kwargs) -> Preset:
    """Get preset by name."""
    preset_class = PRESETS.get(name.lower())
    if preset_class is None:
        raise ValueError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return preset_class(**kwargs)


__all__ = [
    "Preset",
    "PRESETS",
    "get_preset",
    "DoublePendulum",
    "SmallAnglePendulum",
    "FreeParticle",
    "CoupledOscillator",
    "CentralOrbit",
    "SchwarzschildOrbit",
    "InclinedPlane",
    "CircleConstraint",
]
