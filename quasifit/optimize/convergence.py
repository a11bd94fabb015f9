"""Function-value convergence test for iterative minimizers."""

from __future__ import annotations

from typing import Optional


class FunctionConverge:
    """Declare convergence when the objective stops improving.

    An iteration counts as an improvement only if the objective drops below
    the best value seen so far by more than
    ``absolute + relative * max(|f|, |best|)``. After ``iterations``
    consecutive iterations without improvement the run has converged.
    ``iterations=0`` disables the test.

    Examples
    --------
    >>> conv = FunctionConverge(absolute=1e-3, iterations=2)
    >>> [conv.update(f) for f in (1.0, 0.5, 0.4999, 0.4999)]
    [False, False, False, True]
    """

    def __init__(self, absolute: float = 0.0, relative: float = 0.0, iterations: int = 0) -> None:
        if absolute < 0 or relative < 0:
            raise ValueError("Tolerances must be non-negative.")
        if iterations < 0:
            raise ValueError("iterations must be non-negative.")
        self.absolute = float(absolute)
        self.relative = float(relative)
        self.iterations = int(iterations)
        self.reset()

    def reset(self) -> None:
        self.best: Optional[float] = None
        self.stalled = 0

    def update(self, f: float) -> bool:
        """Record the objective of a new iterate; return True once converged."""
        if self.best is None:
            self.best = f
            return False
        if self.iterations == 0:
            return False
        scale = max(abs(f), abs(self.best))
        if f < self.best and self.best - f > self.relative * scale + self.absolute:
            self.best = f
            self.stalled = 0
            return False
        self.stalled += 1
        return self.stalled >= self.iterations


__all__ = ["FunctionConverge"]
