"""Utility functions for configuration."""

from manifold_sim.utils.config import (
    Config,
    load_config,
    save_config,
    METRIC_KINDS,
    POTENTIAL_KINDS,
)

__all__ = ["Config", "load_config", "save_config", "METRIC_KINDS", "POTENTIAL_KINDS"]
