"""Deterministic line-search routines following Nocedal & Wright.

Both searches share one call signature so the minimizers can take either::

    line_search(f, grad, x, p, fx, grad_fx) -> LineSearchResult
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .core import Array, Gradient, Objective


@dataclass(frozen=True)
class LineSearchResult:
    """Accepted step length and the evaluations spent finding it."""

    alpha: float
    nfev: int
    njev: int


LineSearch = Callable[..., LineSearchResult]

# relative band within which f(x) counts as flat; near a minimum the cost
# changes by less than its rounding error and the derivative decides instead
_FLAT = 1e-10


def backtracking_armijo(
    f: Objective,
    grad: Gradient,
    x: Array,
    p: Array,
    fx: float,
    grad_fx: Array,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
) -> LineSearchResult:
    """Classic Armijo backtracking line search. ``grad`` is not evaluated."""
    del grad
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    alpha = float(alpha0)
    grad_dot = float(np.dot(grad_fx, p))
    if grad_dot >= 0:
        raise ValueError("Search direction must be a descent direction.")
    nfev = 0
    for _ in range(max_iter):
        f_new = f(x + alpha * p)
        nfev += 1
        if math.isfinite(f_new) and f_new <= fx + c * alpha * grad_dot:
            return LineSearchResult(alpha, nfev, 0)
        alpha *= rho
    return LineSearchResult(alpha, nfev, 0)


def wolfe_line_search(
    f: Objective,
    grad: Gradient,
    x: Array,
    p: Array,
    fx: float,
    grad_fx: Array,
    alpha0: float = 1.0,
    c1: float = 1e-4,
    c2: float = 0.9,
    max_iter: int = 40,
) -> LineSearchResult:
    """Perform a strong Wolfe line search using bracketing and zoom."""
    if not (0 < c1 < c2 < 1):
        raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")

    nfev = 0
    njev = 0

    def phi(alpha: float) -> float:
        nonlocal nfev
        nfev += 1
        return f(x + alpha * p)

    def phi_prime(alpha: float) -> float:
        nonlocal njev
        njev += 1
        return float(np.dot(grad(x + alpha * p), p))

    phi0 = float(fx)
    der0 = float(np.dot(grad_fx, p))
    if der0 >= 0:
        raise ValueError("Search direction must be a descent direction.")
    flat = _FLAT * abs(phi0)
    phi_ref = phi0 + flat

    alpha_prev = 0.0
    phi_prev = phi0
    alpha = float(alpha0)

    for iteration in range(max_iter):
        phi_alpha = phi(alpha)
        # a non-finite value means the step overshot the region where f is defined
        if (
            not math.isfinite(phi_alpha)
            or phi_alpha > phi_ref + c1 * alpha * der0
            or (iteration > 0 and phi_alpha >= phi_prev + flat)
        ):
            alpha = _zoom(phi, phi_prime, alpha_prev, alpha, phi_prev, phi_ref, flat, der0, c1, c2)
            return LineSearchResult(alpha, nfev, njev)
        der_alpha = phi_prime(alpha)
        if abs(der_alpha) <= -c2 * der0:
            return LineSearchResult(alpha, nfev, njev)
        if der_alpha >= 0:
            alpha = _zoom(phi, phi_prime, alpha, alpha_prev, phi_alpha, phi_ref, flat, der0, c1, c2)
            return LineSearchResult(alpha, nfev, njev)
        alpha_prev = alpha
        phi_prev = phi_alpha
        alpha *= 2.0
    return LineSearchResult(alpha, nfev, njev)


def _zoom(
    phi: Callable[[float], float],
    phi_prime: Callable[[float], float],
    alo: float,
    ahi: float,
    phi_alo: float,
    phi_ref: float,
    flat: float,
    der0: float,
    c1: float,
    c2: float,
) -> float:
    """Zoom stage enforcing strong Wolfe conditions.

    Returns the best sufficient-decrease point found when the bracket
    collapses without meeting the curvature condition.
    """
    for _ in range(32):
        alpha = 0.5 * (alo + ahi)
        phi_alpha = phi(alpha)
        if (
            not math.isfinite(phi_alpha)
            or phi_alpha > phi_ref + c1 * alpha * der0
            or phi_alpha >= phi_alo + flat
        ):
            ahi = alpha
        else:
            der_alpha = phi_prime(alpha)
            if abs(der_alpha) <= -c2 * der0:
                return alpha
            if der_alpha * (ahi - alo) >= 0:
                ahi = alo
            alo = alpha
            phi_alo = phi_alpha
        if abs(ahi - alo) < 1e-12:
            break
    return alo


__all__ = ["LineSearch", "LineSearchResult", "backtracking_armijo", "wolfe_line_search"]
