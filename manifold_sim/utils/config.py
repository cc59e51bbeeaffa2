"""Configuration management."""

import json
import warnings
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, fields, replace

from manifold_sim.errors import ConfigurationWarning


METRIC_KINDS = ("flat", "pendulum", "schwarzschild")
POTENTIAL_KINDS = ("free", "pendulum", "smallangle", "oscillator", "Central", "nearEarth")

_METRIC_LOOKUP = {kind.lower(): kind for kind in METRIC_KINDS}
_POTENTIAL_LOOKUP = {kind.lower(): kind for kind in POTENTIAL_KINDS}


def canonical_metric_kind(kind: str) -> str:
    """Map a metric kind name onto its canonical spelling."""
    canonical = _METRIC_LOOKUP.get(str(kind).lower())
    if canonical is None:
        raise ValueError(f"Unknown metric kind '{kind}'. Available: {list(METRIC_KINDS)}")
    return canonical


def canonical_potential_kind(kind: str) -> str:
    """Map a potential kind name onto its canonical spelling."""
    canonical = _POTENTIAL_LOOKUP.get(str(kind).lower())
    if canonical is None:
        raise ValueError(f"Unknown potential kind '{kind}'. Available: {list(POTENTIAL_KINDS)}")
    return canonical


@dataclass(frozen=True)
class Config:
    """Simulation configuration, fixed for the duration of a run."""
    # Model selection
    metric_kind: str = "pendulum"
    potential_kind: str = "pendulum"
    constraint_expr: Optional[str] = None
    is_repulsive: bool = False

    # Physical constants
    mass: float = 1.0
    coupling_mu: float = 1.0
    l1: float = 1.0
    l2: float = 1.0
    k1: float = 8.0
    k2: float = 5.0
    gravity: float = 9.8
    schwarzschild_radius: float = 0.4

    # Velocity-dependent generalized forces
    drag: float = 0.0
    magnetic_field: float = 0.0

    # Finite-difference step
    dq: float = 1e-4

    def __post_init__(self):
        object.__setattr__(self, "metric_kind", canonical_metric_kind(self.metric_kind))
        object.__setattr__(self, "potential_kind", canonical_potential_kind(self.potential_kind))
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if self.dq <= 0:
            raise ValueError(f"dq must be positive, got {self.dq}")

    @property
    def central_force_coefficient(self) -> float:
        """Coefficient k of the Central potential k/r (positive when repulsive)."""
        sign = 1.0 if self.is_repulsive else -1.0
        return sign * 0.5 * self.schwarzschild_radius

    def replace(self, **changes) -> "Config":
        """Return a new configuration with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a configuration, ignoring (and warning about) unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            warnings.warn(
                f"Ignoring unknown configuration keys: {unknown}",
                ConfigurationWarning
            )
        return cls(**{key: value for key, value in data.items() if key in known})


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    return Config.from_dict(data or {})


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
