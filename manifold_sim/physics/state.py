"""Simulation state: generalized coordinates and velocities."""

from dataclasses import dataclass
import numpy as np


@dataclass
class State:
    """Pair of 2-vectors (q, v)."""
    q: np.ndarray
    v: np.ndarray

    def __post_init__(self):
        self.q = np.array(self.q, dtype=float).reshape(2)
        self.v = np.array(self.v, dtype=float).reshape(2)

    @classmethod
    def from_vector(cls, y) -> "State":
        """Build from a flat (q1, q2, v1, v2) vector."""
        y = np.asarray(y, dtype=float)
        return cls(y[:2], y[2:])

    def as_vector(self) -> np.ndarray:
        return np.concatenate([self.q, self.v])

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.q)) and np.all(np.isfinite(self.v)))

    def copy(self) -> "State":
        return State(self.q.copy(), self.v.copy())
