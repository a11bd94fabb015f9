"""Hypothesis functions: the raw score of a feature vector under theta."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import numpy as np


class Hypothesis(ABC):
    """Map ``(x, theta)`` to a real score, before any link function.

    Subclasses implement :meth:`__call__` for a single feature vector and may
    override :meth:`batch` with a vectorized form. The default batch falls
    back to one call per row.
    """

    @abstractmethod
    def __call__(self, x: np.ndarray, theta: np.ndarray) -> float:
        """Score one feature vector."""

    def batch(self, X: np.ndarray, theta: np.ndarray) -> np.ndarray:
        """Score every row of ``X``."""
        return np.array([self(row, theta) for row in X], dtype=np.float64)


class DotProductHypothesis(Hypothesis):
    """``sum(theta[i] * x[i])``: the default hypothesis of both models."""

    def __call__(self, x: np.ndarray, theta: np.ndarray) -> float:
        return float(np.dot(theta, x))

    def batch(self, X: np.ndarray, theta: np.ndarray) -> np.ndarray:
        return X @ theta

    def __repr__(self) -> str:
        return "DotProductHypothesis()"


class FunctionHypothesis(Hypothesis):
    """Adapt a plain callable ``fn(x, theta) -> float`` to :class:`Hypothesis`.

    Examples
    --------
    >>> import numpy as np
    >>> h = FunctionHypothesis(lambda x, theta: theta[0] * x[0] ** 2)
    >>> h(np.array([3.0]), np.array([2.0]))
    18.0
    """

    def __init__(self, fn: Callable[[np.ndarray, np.ndarray], float]) -> None:
        if not callable(fn):
            raise TypeError("fn must be callable.")
        self.fn = fn

    def __call__(self, x: np.ndarray, theta: np.ndarray) -> float:
        return float(self.fn(x, theta))

    def __repr__(self) -> str:
        return f"FunctionHypothesis({self.fn!r})"


def as_hypothesis(value: Hypothesis | Callable[[np.ndarray, np.ndarray], float]) -> Hypothesis:
    """Return ``value`` as a :class:`Hypothesis`, wrapping bare callables."""
    if isinstance(value, Hypothesis):
        return value
    return FunctionHypothesis(value)


__all__ = ["DotProductHypothesis", "FunctionHypothesis", "Hypothesis", "as_hypothesis"]
