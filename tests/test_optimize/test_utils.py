import numpy as np
import pytest

from quasifit.optimize.utils import approx_grad


def test_approx_grad_matches_linear_function():
    def fun(x: np.ndarray) -> float:
        return float(3 * x[0] - 2 * x[1])

    grad = approx_grad(fun, np.array([0.2, -0.1]))
    assert np.allclose(grad, np.array([3.0, -2.0]), atol=1e-6)


def test_approx_grad_matches_quadratic_and_counts_evals():
    def fun(x: np.ndarray) -> float:
        return float(x[0] ** 2 + 3 * x[1] ** 2 + x[2])

    grad, evals = approx_grad(fun, np.array([0.5, -1.5, 2.0]), return_evals=True)
    assert np.allclose(grad, np.array([1.0, -9.0, 1.0]), atol=1e-6)
    assert evals == 6


def test_approx_grad_does_not_modify_input():
    x = np.array([1.0, 2.0])
    approx_grad(lambda v: float(v @ v), x)
    assert np.array_equal(x, np.array([1.0, 2.0]))


def test_approx_grad_invalid_eps():
    with pytest.raises(ValueError):
        approx_grad(lambda x: float(x[0]), np.array([0.0]), eps=0.0)
