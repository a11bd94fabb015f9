"""Model state shared by the linear and logistic regression models."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional

import numpy as np

from ..errors import ConfigurationError
from ..optimize.core import OptimizeResult
from .hypothesis import DotProductHypothesis, Hypothesis, as_hypothesis


def _frozen_copy(array: np.ndarray) -> np.ndarray:
    out = np.array(array, dtype=np.float64, copy=True)
    out.flags.writeable = False
    return out


def _as_float_array(value: Any, name: str) -> np.ndarray:
    try:
        array = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{name} must be a rectangular array of real numbers.",
            hint="every feature vector must have the same length",
        ) from exc
    if not np.all(np.isfinite(array)):
        raise ConfigurationError(f"{name} contains NaN or infinite values.")
    return array


class ModelState:
    """
    Dataset, parameters and hypothesis of one model.

    ``features`` (shape ``(m, n)``) and ``outputs`` (shape ``(m,)``) are
    copied on assignment and stored read-only. ``theta`` (shape ``(n,)``) is
    only ever replaced as a whole: by the caller before training and by the
    optimizer driver afterwards.

    Args:
        features: Training feature matrix, one row per example.
        outputs: Training targets, one per example.
        theta: Initial parameter vector. Zeros of length ``n`` when omitted.
        learning_rate: Positive scale applied to the gradient.
        hypothesis: Score function; the dot product when omitted. Plain
            callables ``fn(x, theta)`` are accepted.
    """

    def __init__(
        self,
        features: Optional[Any] = None,
        outputs: Optional[Any] = None,
        theta: Optional[Any] = None,
        learning_rate: float = 1.0,
        hypothesis: Optional[Hypothesis | Callable[[np.ndarray, np.ndarray], float]] = None,
    ) -> None:
        self._features: Optional[np.ndarray] = None
        self._outputs: Optional[np.ndarray] = None
        self._theta: Optional[np.ndarray] = None
        self.result: Optional[OptimizeResult] = None
        if features is not None:
            self.features = features
        if outputs is not None:
            self.outputs = outputs
        if theta is not None:
            self.theta = theta
        self.learning_rate = learning_rate
        self.hypothesis = hypothesis if hypothesis is not None else DotProductHypothesis()

    @property
    def features(self) -> Optional[np.ndarray]:
        return self._features

    @features.setter
    def features(self, value: Any) -> None:
        array = _as_float_array(value, "features")
        if array.size == 0 and array.ndim < 2:
            array = array.reshape(0, 0)
        if array.ndim != 2:
            raise ConfigurationError(f"features must be 2D (m, n), got shape {array.shape}.")
        self._features = _frozen_copy(array)

    @property
    def outputs(self) -> Optional[np.ndarray]:
        return self._outputs

    @outputs.setter
    def outputs(self, value: Any) -> None:
        array = _as_float_array(value, "outputs")
        if array.ndim != 1:
            raise ConfigurationError(f"outputs must be 1D (m,), got shape {array.shape}.")
        self._outputs = _frozen_copy(array)

    @property
    def theta(self) -> Optional[np.ndarray]:
        return self._theta

    @theta.setter
    def theta(self, value: Any) -> None:
        array = _as_float_array(value, "theta")
        if array.ndim != 1:
            raise ConfigurationError(f"theta must be 1D (n,), got shape {array.shape}.")
        self._theta = _frozen_copy(array)

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, value: float) -> None:
        value = float(value)
        if not (math.isfinite(value) and value > 0):
            raise ConfigurationError(f"learning_rate must be positive and finite, got {value!r}.")
        self._learning_rate = value

    @property
    def hypothesis(self) -> Hypothesis:
        return self._hypothesis

    @hypothesis.setter
    def hypothesis(self, value: Hypothesis | Callable[[np.ndarray, np.ndarray], float]) -> None:
        self._hypothesis = as_hypothesis(value)

    @property
    def n_samples(self) -> int:
        return 0 if self._features is None else int(self._features.shape[0])

    @property
    def n_features(self) -> int:
        return 0 if self._features is None else int(self._features.shape[1])

    @property
    def trained(self) -> bool:
        return self.result is not None

    def validate(self, theta: Optional[np.ndarray] = None) -> None:
        """Check the dataset and a parameter vector for consistency.

        Raises:
            ConfigurationError: If the dataset is missing or empty, the target
                count differs from the example count, or ``theta`` (the stored
                one when omitted) does not have one entry per feature.
        """
        if self._features is None or self._outputs is None:
            raise ConfigurationError("features and outputs must be set before training.")
        m, n = self._features.shape
        if m == 0:
            raise ConfigurationError("dataset is empty; at least one example is required.")
        if n == 0:
            raise ConfigurationError("feature vectors are empty; at least one feature is required.")
        if self._outputs.shape[0] != m:
            raise ConfigurationError(
                f"got {m} feature vectors but {self._outputs.shape[0]} outputs."
            )
        if theta is None:
            theta = self._theta
        if theta is not None and np.shape(theta) != (n,):
            raise ConfigurationError(
                f"theta has shape {np.shape(theta)} but the features have {n} dimensions."
            )

    def gradient_buffer(self, grad: Optional[np.ndarray]) -> np.ndarray:
        """Return a zeroed gradient buffer of length n, allocating when None."""
        if grad is None:
            return np.zeros(self.n_features)
        if grad.shape != (self.n_features,):
            raise ConfigurationError(
                f"gradient buffer has shape {grad.shape}, expected ({self.n_features},)."
            )
        grad.fill(0.0)
        return grad

    def feature_vector(self, x: Any) -> np.ndarray:
        """Validate one feature vector for prediction against the stored theta."""
        if self._theta is None:
            raise ConfigurationError("theta is not set; assign an initial theta or train first.")
        x = np.asarray(x, dtype=np.float64)
        if x.shape != self._theta.shape:
            raise ConfigurationError(
                f"feature vector has shape {x.shape}, expected {self._theta.shape}."
            )
        return x

    def initial_theta(self) -> np.ndarray:
        """Return the starting point for training, zeros when theta is unset."""
        self.validate()
        if self._theta is None:
            return np.zeros(self.n_features)
        return self._theta.copy()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n_samples={self.n_samples}, "
            f"n_features={self.n_features}, learning_rate={self._learning_rate}, "
            f"hypothesis={self._hypothesis!r}, trained={self.trained})"
        )


__all__ = ["ModelState"]
