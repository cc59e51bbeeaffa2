"""Tests for Richardson-extrapolated finite differences."""

import numpy as np
import pytest

from manifold_sim.physics.differentiation import (
    NumericalDifferentiator,
    central_difference,
    richardson_derivative,
)


def test_quadratic_derivative():
    """Derivative of x² is exact to round-off."""
    d = richardson_derivative(lambda x: x ** 2, 1.3, 1e-4)
    assert abs(d - 2.6) < 1e-8


def test_cubic_derivative_beats_central_difference():
    """Richardson removes the h² error a plain central difference leaves on x³."""
    exact = 3 * 1.3 ** 2
    plain = central_difference(lambda x: x ** 3, 1.3, 1e-4)
    extrapolated = richardson_derivative(lambda x: x ** 3, 1.3, 1e-4)

    assert abs(plain - exact) > 5e-9
    assert abs(extrapolated - exact) < 1e-8


def test_gradient():
    """Gradient of q1² q2."""
    diff = NumericalDifferentiator(1e-4)
    grad = diff.gradient(lambda q: q[0] ** 2 * q[1], [1.0, 2.0])
    assert grad.shape == (2,)
    assert np.allclose(grad, [4.0, 1.0], atol=1e-7)


def test_hessian_is_symmetric():
    """Mixed partials are computed once and mirrored."""
    diff = NumericalDifferentiator(1e-4)
    hess = diff.hessian(lambda q: q[0] ** 2 * q[1] + np.sin(q[1]), [1.0, 2.0])

    expected = np.array([[4.0, 2.0], [2.0, -np.sin(2.0)]])
    assert np.allclose(hess, expected, atol=1e-5)
    assert hess[0, 1] == hess[1, 0]


def test_tensor_gradient_layout():
    """Last index of the tensor gradient is the differentiation axis."""
    diff = NumericalDifferentiator(1e-4)

    def matrix(q):
        return np.array([[q[0], q[0] * q[1]], [q[0] * q[1], q[1] ** 2]])

    dm = diff.tensor_gradient(matrix, [1.0, 2.0])
    assert dm.shape == (2, 2, 2)
    assert np.allclose(dm[0, 0], [1.0, 0.0], atol=1e-8)
    assert np.allclose(dm[0, 1], [2.0, 1.0], atol=1e-8)
    assert np.allclose(dm[1, 1], [0.0, 4.0], atol=1e-8)


def test_function_errors_propagate():
    """Failures of the differentiated function are not swallowed."""
    diff = NumericalDifferentiator()

    def broken(q):
        raise ZeroDivisionError("boom")

    with pytest.raises(ZeroDivisionError):
        diff.gradient(broken, [0.0, 0.0])


def test_step_must_be_positive():
    with pytest.raises(ValueError):
        NumericalDifferentiator(0.0)
