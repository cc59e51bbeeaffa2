"""Richardson-extrapolated central differences.

The central difference D(h) = (f(x+h) - f(x-h)) / 2h has a leading error of
order h^2, so combining two step sizes as (4 D(h/2) - D(h)) / 3 cancels it.
Every operator here works for scalar- and array-valued functions alike, since
the arithmetic is element-wise.

Failures raised by the differentiated function are propagated unchanged.
"""

from typing import Callable
import numpy as np


DEFAULT_STEP = 1e-4

# Leading truncation order of the central difference.
RICHARDSON_ORDER = 2


def central_difference(f: Callable, x: float, h: float):
    """Plain second-order central difference of f at x."""
    return (f(x + h) - f(x - h)) / (2.0 * h)


def richardson_derivative(f: Callable, x: float, h: float = DEFAULT_STEP):
    """First derivative of f at x with the O(h^2) term eliminated."""
    scale = 2 ** RICHARDSON_ORDER
    coarse = central_difference(f, x, h)
    fine = central_difference(f, x, h / 2)
    return (scale * fine - coarse) / (scale - 1)


class NumericalDifferentiator:
    """Gradient, Hessian and tensor-gradient of functions of a coordinate vector.

    Functions take a 1-D coordinate array ``q`` and return either a scalar
    (gradient, hessian) or an array (tensor_gradient).
    """

    def __init__(self, step: float = DEFAULT_STEP):
        if step <= 0:
            raise ValueError(f"Differentiation step must be positive, got {step}")
        self.step = step

    def partial(self, f: Callable, q, axis: int):
        """Derivative of f along one coordinate axis at q."""
        q = np.asarray(q, dtype=float)

        def along(x):
            point = q.copy()
            point[axis] = x
            return f(point)

        return richardson_derivative(along, q[axis], self.step)

    def gradient(self, f: Callable, q) -> np.ndarray:
        """Vector of per-axis first derivatives of a scalar function."""
        q = np.asarray(q, dtype=float)
        return np.array([float(self.partial(f, q, axis)) for axis in range(q.size)])

    def hessian(self, f: Callable, q) -> np.ndarray:
        """Matrix of second derivatives, each mixed partial computed once and mirrored."""
        q = np.asarray(q, dtype=float)
        n = q.size
        hess = np.zeros((n, n))
        for i in range(n):
            for j in range(i, n):
                def inner(point, axis=j):
                    return self.partial(f, point, axis)

                hess[i, j] = self.partial(inner, q, i)
                hess[j, i] = hess[i, j]
        return hess

    def tensor_gradient(self, f: Callable, q) -> np.ndarray:
        """Derivatives of an array-valued function.

        Returns an array of shape ``f(q).shape + (n,)`` whose last index is
        the differentiation axis, i.e. ``result[..., k] = d f / d q_k``.
        """
        q = np.asarray(q, dtype=float)
        derivatives = [np.asarray(self.partial(f, q, axis), dtype=float) for axis in range(q.size)]
        return np.stack(derivatives, axis=-1)
