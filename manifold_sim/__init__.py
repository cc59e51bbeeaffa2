"""
Manifold Simulator - constrained point-mass dynamics on a 2-DOF manifold.

Features:
- Flat, double-pendulum and Schwarzschild-like kinetic metrics
- Pendulum, small-angle, oscillator, central and uniform-field potentials
- Holonomic constraints from restricted expressions (Lagrange projection)
- Richardson-extrapolated numerical derivatives and Christoffel symbols
- RK4 integration with an energy-drift log
- Worker-process batch API, presets and a CLI
"""

__version__ = "0.1.0"

from manifold_sim.physics.simulator import Simulator, StepOrchestrator, StepRequest, StepResponse
from manifold_sim.physics.state import State
from manifold_sim.utils.config import Config, load_config, save_config

__all__ = [
    "Simulator",
    "StepOrchestrator",
    "StepRequest",
    "StepResponse",
    "State",
    "Config",
    "load_config",
    "save_config",
]
