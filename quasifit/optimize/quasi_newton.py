"""Quasi-Newton optimization algorithms (BFGS and L-BFGS)."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Optional

import numpy as np

from ..logging import get_logger
from .convergence import FunctionConverge
from .core import RTOL, OptimizeResult, Problem, Status, check_convergence
from .line_search import LineSearch, wolfe_line_search
from .utils import approx_grad

logger = get_logger(__name__)

# curvature pairs with y.s below this fraction of |s||y| are skipped
_CURVATURE_EPS = 1e-10


class _Evaluator:
    """Counts objective and gradient evaluations for one run."""

    def __init__(self, problem: Problem) -> None:
        self.problem = problem
        self.nfev = 0
        self.njev = 0

    def fun(self, x: np.ndarray) -> float:
        self.nfev += 1
        return float(self.problem.fun(x))

    def grad(self, x: np.ndarray) -> np.ndarray:
        if self.problem.grad is not None:
            self.njev += 1
            return np.asarray(self.problem.grad(x), dtype=float)
        grad, evals = approx_grad(self.problem.fun, x, return_evals=True)
        self.nfev += int(evals)
        return grad


def _run(
    problem: Problem,
    x0: np.ndarray,
    direction: Callable[[np.ndarray], np.ndarray],
    update: Callable[[np.ndarray, np.ndarray], None],
    reset: Callable[[], None],
    maxiter: int,
    tol: float,
    line_search: LineSearch,
    history: bool,
    converger: Optional[FunctionConverge],
) -> OptimizeResult:
    """Shared major-iteration loop; the method supplies direction and update."""
    x = np.asarray(x0, dtype=float).copy()
    if problem.dim is not None and x.size != problem.dim:
        raise ValueError(f"x0 has {x.size} entries but the problem has dimension {problem.dim}.")
    evaluator = _Evaluator(problem)
    hist: list[np.ndarray] = [x.copy()] if history else []

    fx = evaluator.fun(x)
    grad = evaluator.grad(x)
    if converger is not None:
        converger.reset()
        converger.update(fx)

    nit = 0
    status = Status.ITERATION_LIMIT
    message = "Maximum iterations reached."
    if not np.isfinite(fx) or not np.all(np.isfinite(grad)):
        status = Status.FAILURE
        message = "Non-finite objective or gradient at the initial point."

    while status is Status.ITERATION_LIMIT:
        if check_convergence(float(np.linalg.norm(grad)), tol):
            status = Status.GRADIENT_THRESHOLD
            message = "Gradient tolerance satisfied."
            break
        if nit >= maxiter:
            break
        p = direction(grad)
        if float(np.dot(grad, p)) >= 0:
            # curvature model went bad; fall back to steepest descent
            reset()
            p = -grad
        step = line_search(evaluator.fun, evaluator.grad, x, p, fx, grad)
        s = step.alpha * p
        x_new = x + s
        if np.array_equal(x_new, x):
            status = Status.FAILURE
            message = "Line search made no progress."
            break
        fx_new = evaluator.fun(x_new)
        grad_new = evaluator.grad(x_new)
        if not np.isfinite(fx_new) or not np.all(np.isfinite(grad_new)):
            status = Status.FAILURE
            message = "Non-finite objective or gradient encountered."
            break
        update(x_new - x, grad_new - grad)
        x, fx, grad = x_new, fx_new, grad_new
        nit += 1
        if history:
            hist.append(x.copy())
        logger.debug("iter %d: f=%.6e |g|=%.3e alpha=%.3e", nit, fx, np.linalg.norm(grad), step.alpha)
        if converger is not None and converger.update(fx):
            status = Status.FUNCTION_CONVERGENCE
            message = "Objective stopped improving."

    return OptimizeResult(
        x=x,
        fun=float(fx),
        nit=nit,
        status=status,
        message=message,
        grad_norm=float(np.linalg.norm(grad)),
        nfev=evaluator.nfev,
        njev=evaluator.njev,
        history=hist,
    )


def bfgs(
    problem: Problem,
    x0: np.ndarray,
    maxiter: int = 1000,
    tol: float = RTOL,
    line_search: LineSearch = wolfe_line_search,
    history: bool = False,
    converger: Optional[FunctionConverge] = None,
) -> OptimizeResult:
    """Full-memory BFGS with strong Wolfe line search.

    The first step runs along the normalized steepest-descent direction. The
    inverse Hessian approximation is then rescaled by ``y.s / y.y`` and
    updated from there.
    """
    n = np.asarray(x0).size
    inv_hessian = np.eye(n)
    scaled = False

    def direction(grad: np.ndarray) -> np.ndarray:
        if not scaled:
            return -grad / np.linalg.norm(grad)
        return -inv_hessian @ grad

    def update(s: np.ndarray, y: np.ndarray) -> None:
        nonlocal inv_hessian, scaled
        ys = float(np.dot(y, s))
        if ys <= _CURVATURE_EPS * np.linalg.norm(s) * np.linalg.norm(y):
            return
        if not scaled:
            inv_hessian = np.eye(n) * (ys / float(np.dot(y, y)))
            scaled = True
        rho = 1.0 / ys
        identity = np.eye(n)
        outer_sy = np.outer(s, y)
        inv_hessian = (
            (identity - rho * outer_sy) @ inv_hessian @ (identity - rho * outer_sy.T)
            + rho * np.outer(s, s)
        )

    def reset() -> None:
        nonlocal inv_hessian, scaled
        inv_hessian = np.eye(n)
        scaled = False

    return _run(problem, x0, direction, update, reset, maxiter, tol, line_search, history, converger)


def lbfgs(
    problem: Problem,
    x0: np.ndarray,
    m: int = 10,
    maxiter: int = 1000,
    tol: float = RTOL,
    line_search: LineSearch = wolfe_line_search,
    history: bool = False,
    converger: Optional[FunctionConverge] = None,
) -> OptimizeResult:
    """Limited-memory BFGS using two-loop recursion.

    With an empty history the direction is the unit steepest-descent vector.
    """
    if m <= 0:
        raise ValueError("Memory parameter m must be positive.")
    s_history: Deque[np.ndarray] = deque(maxlen=m)
    y_history: Deque[np.ndarray] = deque(maxlen=m)

    def direction(g: np.ndarray) -> np.ndarray:
        q = g.copy()
        alpha_vals = []
        for s, y in reversed(list(zip(s_history, y_history))):
            rho = 1.0 / float(np.dot(y, s))
            alpha_i = rho * float(np.dot(s, q))
            q = q - alpha_i * y
            alpha_vals.append((rho, alpha_i, s, y))
        if s_history:
            last_s = s_history[-1]
            last_y = y_history[-1]
            gamma = float(np.dot(last_s, last_y) / np.dot(last_y, last_y))
        else:
            gamma = 1.0 / float(np.linalg.norm(g))
        r = gamma * q
        for rho, alpha_i, s, y in reversed(alpha_vals):
            beta = rho * float(np.dot(y, r))
            r = r + s * (alpha_i - beta)
        return -r

    def update(s: np.ndarray, y: np.ndarray) -> None:
        if float(np.dot(y, s)) > _CURVATURE_EPS * np.linalg.norm(s) * np.linalg.norm(y):
            s_history.append(s)
            y_history.append(y)

    def reset() -> None:
        s_history.clear()
        y_history.clear()

    return _run(problem, x0, direction, update, reset, maxiter, tol, line_search, history, converger)


__all__ = ["bfgs", "lbfgs"]
