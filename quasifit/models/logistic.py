"""Logistic regression fitted by quasi-Newton minimization of cross-entropy."""

from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np

from ..config import ConvergenceSettings
from ..errors import ConfigurationError, NumericalDomainError
from ..optimize import OptimizeResult
from . import driver
from .hypothesis import Hypothesis
from .state import ModelState

DEFAULT_THRESHOLD = 0.5


def sigmoid(z: np.ndarray | float) -> np.ndarray | float:
    """Logistic link ``1 / (1 + exp(-z))``.

    Very negative ``z`` saturates to exactly 0 and large ``z`` to exactly 1.
    """
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-np.asarray(z, dtype=np.float64)))


class LogisticRegression:
    """
    Binary classifier ``P(y=1 | x) = sigmoid(h(x, theta))``.

    Targets must be 0 or 1. :meth:`predict` reports ``True`` when the
    probability reaches ``threshold``; a threshold of 0 means unset and is
    read as 0.5.
    """

    def __init__(
        self,
        features: Optional[Any] = None,
        outputs: Optional[Any] = None,
        theta: Optional[Any] = None,
        learning_rate: float = 1.0,
        hypothesis: Optional[Hypothesis | Callable[[np.ndarray, np.ndarray], float]] = None,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.state = ModelState(
            features=features,
            outputs=outputs,
            theta=theta,
            learning_rate=learning_rate,
            hypothesis=hypothesis,
        )
        self.threshold = threshold

    @property
    def theta(self) -> Optional[np.ndarray]:
        return self.state.theta

    @theta.setter
    def theta(self, value: Any) -> None:
        self.state.theta = value

    @property
    def result(self) -> Optional[OptimizeResult]:
        return self.state.result

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"threshold must lie in [0, 1], got {value!r}.")
        self._threshold = value

    @property
    def effective_threshold(self) -> float:
        return self._threshold if self._threshold != 0.0 else DEFAULT_THRESHOLD

    def _probabilities(self, theta: Any) -> np.ndarray:
        theta = np.asarray(theta, dtype=np.float64)
        self.state.validate(theta)
        outputs = self.state.outputs
        bad = outputs[(outputs != 0.0) & (outputs != 1.0)]
        if bad.size:
            raise ConfigurationError(
                f"logistic regression targets must be 0 or 1, got {float(bad[0])!r}.",
                hint="encode the positive class as 1 and the negative class as 0",
            )
        return sigmoid(self.state.hypothesis.batch(self.state.features, theta))

    def cost(self, theta: Any) -> float:
        """Mean cross-entropy of ``theta`` over the whole dataset.

        Raises:
            ConfigurationError: If a target is neither 0 nor 1.
            NumericalDomainError: If any probability is exactly 0 or 1, where
                the logarithm is undefined.
        """
        h = self._probabilities(theta)
        saturated = (h <= 0.0) | (h >= 1.0)
        if np.any(saturated):
            raise NumericalDomainError(
                f"cross-entropy is undefined: {int(saturated.sum())} example(s) have "
                "a predicted probability of exactly 0 or 1.",
                hint="the classes may be separable, or theta has diverged",
            )
        y = self.state.outputs
        losses = -y * np.log(h) - (1.0 - y) * np.log(1.0 - h)
        return float(np.mean(losses))

    def gradient(self, theta: Any, grad: Optional[np.ndarray] = None) -> np.ndarray:
        """Gradient of :meth:`cost` scaled by the learning rate.

        ``grad[j] = learning_rate/m * sum((sigmoid(h(x_i, theta)) - y_i) * x_i[j])``,
        assigned into ``grad`` (allocated when None) and returned.
        """
        state = self.state
        errors = self._probabilities(theta) - state.outputs
        grad = state.gradient_buffer(grad)
        grad[:] = (state.learning_rate / errors.size) * (state.features.T @ errors)
        return grad

    def minimize(
        self, settings: Optional[ConvergenceSettings] = None, method: str = "bfgs"
    ) -> OptimizeResult:
        """Train theta; see :func:`quasifit.models.driver.minimize`."""
        return driver.minimize(self, settings, method)

    def predict_proba(self, x: Any) -> float:
        """Probability that ``x`` belongs to the positive class."""
        x = self.state.feature_vector(x)
        return float(sigmoid(self.state.hypothesis(x, self.state.theta)))

    def predict(self, x: Any) -> bool:
        """Classify ``x``: ``predict_proba(x) >= threshold``."""
        return self.predict_proba(x) >= self.effective_threshold

    def __repr__(self) -> str:
        return f"LogisticRegression({self.state!r}, threshold={self._threshold})"


__all__ = ["DEFAULT_THRESHOLD", "LogisticRegression", "sigmoid"]
