import numpy as np
import pytest

from quasifit.optimize import FunctionConverge, Problem, Status, backtracking_armijo, bfgs, lbfgs


def rosenbrock(x: np.ndarray) -> float:
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def rosenbrock_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def himmelblau(x: np.ndarray) -> float:
    return (x[0] ** 2 + x[1] - 11) ** 2 + (x[0] + x[1] ** 2 - 7) ** 2


def himmelblau_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            4 * x[0] * (x[0] ** 2 + x[1] - 11) + 2 * (x[0] + x[1] ** 2 - 7),
            2 * (x[0] ** 2 + x[1] - 11) + 4 * x[1] * (x[0] + x[1] ** 2 - 7),
        ]
    )


def test_bfgs_reaches_rosenbrock_minimum():
    problem = Problem(fun=rosenbrock, grad=rosenbrock_grad, dim=2)
    res = bfgs(problem, np.array([-1.2, 1.0]), maxiter=200)
    assert res.success
    assert res.status is Status.GRADIENT_THRESHOLD
    assert np.allclose(res.x, np.ones(2), atol=1e-5)
    assert res.fun < 1e-9


def test_lbfgs_handles_higher_dimension():
    def rosen_nd(x: np.ndarray) -> float:
        return sum(
            (1 - x[i]) ** 2 + 100 * (x[i + 1] - x[i] ** 2) ** 2
            for i in range(0, len(x) - 1, 2)
        )

    def rosen_grad_nd(x: np.ndarray) -> np.ndarray:
        g = np.zeros_like(x)
        for i in range(0, len(x) - 1, 2):
            g[i] = -2 * (1 - x[i]) - 400 * x[i] * (x[i + 1] - x[i] ** 2)
            g[i + 1] = 200 * (x[i + 1] - x[i] ** 2)
        return g

    problem = Problem(fun=rosen_nd, grad=rosen_grad_nd, dim=4)
    x0 = np.array([-1.2, 1.0, -1.0, 1.0])
    res = lbfgs(problem, x0, m=5, maxiter=400)
    assert res.success
    assert np.allclose(res.x, np.ones(4), atol=1e-5)
    assert res.fun < 1e-8


def test_bfgs_vs_lbfgs_on_himmelblau():
    problem = Problem(fun=himmelblau, grad=himmelblau_grad, dim=2)
    x0 = np.array([3.0, 1.5])
    res_bfgs = bfgs(problem, x0, maxiter=200)
    res_lbfgs = lbfgs(problem, x0, m=6, maxiter=200)
    assert res_bfgs.success and res_lbfgs.success
    assert res_bfgs.fun < 1e-10
    assert res_lbfgs.fun < 1e-10
    assert np.allclose(res_bfgs.x, res_lbfgs.x, atol=1e-6)


def test_bfgs_without_gradient():
    problem = Problem(fun=rosenbrock, dim=2)
    res = bfgs(problem, np.array([-1.2, 1.0]), maxiter=100, tol=1e-5)
    assert res.success
    assert res.njev == 0
    assert res.fun < 1e-6


def test_bfgs_stops_at_iteration_limit():
    problem = Problem(fun=rosenbrock, grad=rosenbrock_grad, dim=2)
    res = bfgs(problem, np.array([-1.2, 1.0]), maxiter=3)
    assert not res.success
    assert res.status is Status.ITERATION_LIMIT
    assert res.nit == 3


def test_starting_at_minimum_takes_no_step():
    problem = Problem(fun=rosenbrock, grad=rosenbrock_grad, dim=2)
    res = bfgs(problem, np.ones(2))
    assert res.status is Status.GRADIENT_THRESHOLD
    assert res.nit == 0
    assert np.array_equal(res.x, np.ones(2))


def test_function_converger_stops_stalled_run():
    # tiny window and loose tolerance: the run stalls long before |g| is small
    converger = FunctionConverge(absolute=1.0, iterations=2)
    problem = Problem(fun=rosenbrock, grad=rosenbrock_grad, dim=2)
    res = bfgs(problem, np.array([-1.2, 1.0]), tol=1e-14, converger=converger)
    assert res.status is Status.FUNCTION_CONVERGENCE
    assert res.success


def test_non_finite_start_is_failure():
    problem = Problem(fun=lambda x: float("inf"), grad=lambda x: np.ones_like(x), dim=1)
    res = bfgs(problem, np.zeros(1))
    assert res.status is Status.FAILURE
    assert not res.success


def test_history_records_iterates():
    problem = Problem(fun=himmelblau, grad=himmelblau_grad, dim=2)
    res = bfgs(problem, np.array([3.0, 1.5]), history=True)
    assert len(res.history) == res.nit + 1
    assert np.array_equal(res.history[-1], res.x)


def test_bfgs_accepts_armijo_line_search():
    problem = Problem(fun=himmelblau, grad=himmelblau_grad, dim=2)
    res = bfgs(problem, np.array([3.0, 1.5]), line_search=backtracking_armijo, maxiter=500)
    assert res.success
    assert res.fun < 1e-10


def test_dimension_mismatch_raises():
    problem = Problem(fun=himmelblau, grad=himmelblau_grad, dim=2)
    with pytest.raises(ValueError):
        bfgs(problem, np.zeros(3))


def test_lbfgs_rejects_non_positive_memory():
    problem = Problem(fun=himmelblau, grad=himmelblau_grad, dim=2)
    with pytest.raises(ValueError):
        lbfgs(problem, np.zeros(2), m=0)
