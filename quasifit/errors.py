"""Error hierarchy for quasifit.

Configuration problems are detected before any cost evaluation, numerical
domain problems surface from the loss functions, and minimizer failures are
reported to the caller as :class:`OptimizerError` instead of aborting.
"""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .optimize.core import OptimizeResult, Status


class QuasiFitError(RuntimeError):
    """Base error for all quasifit failures."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        final_message = message
        if hint:
            final_message = f"{message}\n{self._format_hint(hint)}"
        super().__init__(final_message)
        self.message = message
        self.hint = hint

    @staticmethod
    def _format_hint(hint: str) -> str:
        return textwrap.indent(f"Hint: {hint}", prefix="  ")


class ConfigurationError(QuasiFitError, ValueError):
    """Raised when the dataset, parameters or settings are inconsistent."""


class NumericalDomainError(QuasiFitError, ArithmeticError):
    """Raised when a loss is evaluated outside its mathematical domain."""


class OptimizerError(QuasiFitError):
    """Raised when the minimizer does not converge.

    Attributes:
        status: Terminal status reported by the minimizer, if it returned.
        reason: Human-readable explanation of the failure.
        result: Partial result, if the minimizer returned one.
    """

    def __init__(
        self,
        reason: str,
        *,
        status: Optional["Status"] = None,
        result: Optional["OptimizeResult"] = None,
        hint: Optional[str] = None,
    ) -> None:
        label = status.name if status is not None else "ERROR"
        super().__init__(f"optimization did not converge ({label}): {reason}", hint=hint)
        self.status = status
        self.reason = reason
        self.result = result


__all__ = [
    "ConfigurationError",
    "NumericalDomainError",
    "OptimizerError",
    "QuasiFitError",
]
