"""Functional interface over the model classes.

Example
-------
>>> from quasifit.api import cost, minimize, new_linear_model
>>> model = new_linear_model()
>>> model.state.features = [[1.0], [2.0], [3.0], [4.0]]
>>> model.state.outputs = [2.0, 4.0, 6.0, 8.0]
>>> result = minimize(model)
>>> round(float(model.theta[0]), 6), cost(model, model.theta) < 1e-12
(2.0, True)
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .config import ConvergenceSettings, default_convergence_settings
from .models import LinearRegression, LogisticRegression
from .models import minimize as _minimize
from .models.driver import Trainable
from .optimize import OptimizeResult


def new_linear_model() -> LinearRegression:
    """Linear regression with the dot-product hypothesis and learning rate 1."""
    return LinearRegression()


def new_logistic_model() -> LogisticRegression:
    """Logistic regression with the dot-product hypothesis, learning rate 1 and threshold 0.5."""
    return LogisticRegression()


def minimize(
    model: Trainable,
    settings: Optional[ConvergenceSettings] = None,
    method: str = "bfgs",
) -> OptimizeResult:
    """Train ``model`` in place and return the minimizer result."""
    return _minimize(model, settings, method)


def predict_regression(model: LinearRegression, features: Any) -> float:
    return model.predict(features)


def predict_classification(model: LogisticRegression, features: Any) -> bool:
    return model.predict(features)


def cost(model: Trainable, theta: Any) -> float:
    return model.cost(theta)


def gradient(model: Trainable, theta: Any, grad: Optional[np.ndarray] = None) -> np.ndarray:
    """Evaluate the model gradient at ``theta`` into ``grad`` and return it."""
    return model.gradient(theta, grad)


__all__ = [
    "cost",
    "default_convergence_settings",
    "gradient",
    "minimize",
    "new_linear_model",
    "new_logistic_model",
    "predict_classification",
    "predict_regression",
]
