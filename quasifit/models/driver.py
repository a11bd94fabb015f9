"""Optimizer driver: fit a model's theta with a quasi-Newton minimizer."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

import numpy as np

from ..config import ConvergenceSettings, default_convergence_settings
from ..errors import ConfigurationError, NumericalDomainError, OptimizerError
from ..logging import get_logger
from ..optimize import FunctionConverge, OptimizeResult, Problem, Status, bfgs, lbfgs
from ..optimize.core import ATOL
from .state import ModelState

logger = get_logger(__name__)

METHODS: dict[str, Callable[..., OptimizeResult]] = {
    "bfgs": bfgs,
    "lbfgs": lbfgs,
}


class Trainable(Protocol):
    """What the driver needs from a model."""

    state: ModelState

    def cost(self, theta: np.ndarray) -> float:
        ...

    def gradient(self, theta: np.ndarray, grad: Optional[np.ndarray] = None) -> np.ndarray:
        ...


def select_method(name: str) -> Callable[..., OptimizeResult]:
    """Return the minimizer registered under ``name`` (case-insensitive)."""
    try:
        return METHODS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown optimization method {name!r}.",
            hint=f"choose one of {sorted(METHODS)}",
        ) from None


def build_problem(model: Trainable, dim: int) -> Problem:
    """Bind the model's cost and gradient into a :class:`Problem`.

    The gradient is evaluated into one buffer reused across calls; the
    minimizer receives a copy because it keeps successive gradients. A cost
    that is undefined at a trial point is reported as ``inf`` so the line
    search backs off from it.
    """
    buffer = np.zeros(dim)

    def fun(theta: np.ndarray) -> float:
        try:
            return model.cost(theta)
        except NumericalDomainError as exc:
            logger.debug("cost undefined at trial point: %s", exc.message)
            return np.inf

    def grad(theta: np.ndarray) -> np.ndarray:
        model.gradient(theta, buffer)
        return buffer.copy()

    return Problem(fun=fun, grad=grad, dim=dim)


def minimize(
    model: Trainable,
    settings: Optional[ConvergenceSettings] = None,
    method: str = "bfgs",
) -> OptimizeResult:
    """
    Train ``model`` from its current theta.

    Args:
        model: Linear or logistic regression model with a dataset set.
        settings: Stopping rules; :func:`default_convergence_settings` when None.
        method: ``"bfgs"`` or ``"lbfgs"``.

    Returns:
        The minimizer's result. ``model.state.theta`` now holds ``result.x``
        and ``model.state.result`` holds the result.

    Raises:
        ConfigurationError: If the dataset, its targets or theta are
            inconsistent, or the method is unknown. Raised before the
            minimizer starts.
        OptimizerError: If the minimizer fails or stops without converging.
            The model is left unchanged.
    """
    if settings is None:
        settings = default_convergence_settings()
    solver = select_method(method)
    state = model.state
    x0 = state.initial_theta()

    problem = build_problem(model, x0.size)
    converger = FunctionConverge(
        absolute=settings.function_absolute_tolerance,
        iterations=settings.function_iteration_window,
    )
    logger.debug(
        "Starting %s: %d samples, %d parameters", method, state.n_samples, x0.size
    )
    if settings.gradient_threshold < ATOL:
        logger.debug(
            "gradient_threshold %.1e is below the float64 floor; stopping at |g| <= %.1e",
            settings.gradient_threshold,
            ATOL,
        )
    try:
        # the starting point must have a defined cost
        model.cost(x0)
        result = solver(
            problem,
            x0,
            maxiter=settings.max_major_iterations,
            tol=settings.gradient_threshold,
            converger=converger,
        )
    except ConfigurationError:
        raise
    except (ArithmeticError, ValueError) as exc:
        logger.warning("%s aborted: %s", method, exc)
        raise OptimizerError(str(exc), status=Status.FAILURE) from exc

    if not result.success:
        logger.warning(
            "%s stopped with %s after %d iterations: %s",
            method,
            result.status.name,
            result.nit,
            result.message,
        )
        raise OptimizerError(result.message, status=result.status, result=result)

    state.theta = result.x
    state.result = result
    logger.info(
        "%s converged (%s) in %d iterations, cost=%.6e",
        method,
        result.status.name,
        result.nit,
        result.fun,
    )
    return result


__all__ = ["METHODS", "Trainable", "build_problem", "minimize", "select_method"]
