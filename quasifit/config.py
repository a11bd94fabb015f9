"""Convergence settings for training calls."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class ConvergenceSettings:
    """
    Stopping rules for one training call.

    Args:
        max_major_iterations: Cap on quasi-Newton iterations. Reaching it is
            reported as a failure to converge.
        gradient_threshold: Training succeeds once the gradient norm drops to
            this value. Thresholds below ``quasifit.optimize.core.ATOL``
            (1e-10) are raised to it, so the default of 1e-12 stops at 1e-10.
        function_absolute_tolerance: Smallest decrease of the cost that still
            counts as progress.
        function_iteration_window: Number of consecutive iterations without
            progress after which training succeeds.
    """

    max_major_iterations: int = 100_000
    gradient_threshold: float = 1e-12
    function_absolute_tolerance: float = 1e-12
    function_iteration_window: int = 100_000

    def __post_init__(self) -> None:
        for name in ("max_major_iterations", "function_iteration_window"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}.")
        for name in ("gradient_threshold", "function_absolute_tolerance"):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value!r}.")


def default_convergence_settings() -> ConvergenceSettings:
    """Return the settings used when a training call is given none."""
    return ConvergenceSettings()


__all__ = ["ConvergenceSettings", "default_convergence_settings"]
