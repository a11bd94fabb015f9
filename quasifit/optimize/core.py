"""Core interfaces shared by the quasi-Newton minimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]

RTOL = 1e-8
ATOL = 1e-10


class Status(Enum):
    """Terminal status of a minimizer run."""

    GRADIENT_THRESHOLD = "gradient_threshold"
    FUNCTION_CONVERGENCE = "function_convergence"
    ITERATION_LIMIT = "iteration_limit"
    FAILURE = "failure"

    @property
    def converged(self) -> bool:
        return self in (Status.GRADIENT_THRESHOLD, Status.FUNCTION_CONVERGENCE)


@dataclass(frozen=True)
class Problem:
    """Container describing an unconstrained minimization problem."""

    fun: Objective
    grad: Optional[Gradient] = None
    dim: Optional[int] = None


@dataclass
class OptimizeResult:
    """Result object returned by :func:`bfgs` and :func:`lbfgs`."""

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int
    njev: int
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status.converged


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if gradient norm satisfies tolerance."""
    return grad_norm <= max(tol, ATOL)


__all__ = [
    "ATOL",
    "Array",
    "Gradient",
    "Objective",
    "OptimizeResult",
    "Problem",
    "RTOL",
    "Status",
    "check_convergence",
]
