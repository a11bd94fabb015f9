"""Finite-difference helpers in pure NumPy."""

from __future__ import annotations

import numpy as np

from .core import Array, Objective


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    return_evals:
        Also return the number of objective evaluations spent.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    step = np.zeros_like(x)
    for i in range(x.size):
        step[i] = eps
        grad[i] = (fun(x + step) - fun(x - step)) / (2.0 * eps)
        step[i] = 0.0
    if return_evals:
        return grad, 2 * x.size
    return grad


__all__ = ["approx_grad"]
