"""Linear regression fitted by quasi-Newton minimization of halved MSE."""

from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np

from ..config import ConvergenceSettings
from ..optimize import OptimizeResult
from . import driver
from .hypothesis import Hypothesis
from .state import ModelState


class LinearRegression:
    """
    Least-squares regression ``y ~ h(x, theta)``.

    ``cost(theta) = 1/(2m) * sum((h(x_i, theta) - y_i)^2)``. No intercept is
    added: include a constant column in the features to fit one.

    Examples
    --------
    >>> model = LinearRegression(features=[[1.0], [2.0], [3.0]], outputs=[2.0, 4.0, 6.0])
    >>> _ = model.minimize()
    >>> round(model.predict([4.0]), 6)
    8.0
    """

    def __init__(
        self,
        features: Optional[Any] = None,
        outputs: Optional[Any] = None,
        theta: Optional[Any] = None,
        learning_rate: float = 1.0,
        hypothesis: Optional[Hypothesis | Callable[[np.ndarray, np.ndarray], float]] = None,
    ) -> None:
        self.state = ModelState(
            features=features,
            outputs=outputs,
            theta=theta,
            learning_rate=learning_rate,
            hypothesis=hypothesis,
        )

    @property
    def theta(self) -> Optional[np.ndarray]:
        return self.state.theta

    @theta.setter
    def theta(self, value: Any) -> None:
        self.state.theta = value

    @property
    def result(self) -> Optional[OptimizeResult]:
        return self.state.result

    def _residuals(self, theta: Any) -> np.ndarray:
        theta = np.asarray(theta, dtype=np.float64)
        self.state.validate(theta)
        return self.state.hypothesis.batch(self.state.features, theta) - self.state.outputs

    def cost(self, theta: Any) -> float:
        """Halved mean squared error of ``theta`` over the whole dataset."""
        residuals = self._residuals(theta)
        return float(residuals @ residuals) / (2 * residuals.size)

    def gradient(self, theta: Any, grad: Optional[np.ndarray] = None) -> np.ndarray:
        """Gradient of :meth:`cost` scaled by the learning rate.

        ``grad[j] = learning_rate/m * sum((h(x_i, theta) - y_i) * x_i[j])``.
        The result is written into ``grad`` (zeroed first, so reusing a buffer
        never accumulates) and returned.
        """
        state = self.state
        residuals = self._residuals(theta)
        grad = state.gradient_buffer(grad)
        grad += (state.learning_rate / residuals.size) * (state.features.T @ residuals)
        return grad

    def minimize(
        self, settings: Optional[ConvergenceSettings] = None, method: str = "bfgs"
    ) -> OptimizeResult:
        """Train theta; see :func:`quasifit.models.driver.minimize`."""
        return driver.minimize(self, settings, method)

    def predict(self, x: Any) -> float:
        """Raw prediction ``h(x, theta)`` for one feature vector."""
        x = self.state.feature_vector(x)
        return float(self.state.hypothesis(x, self.state.theta))

    def __repr__(self) -> str:
        return f"LinearRegression({self.state!r})"


__all__ = ["LinearRegression"]
