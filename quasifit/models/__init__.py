"""Linear and logistic regression models trained by quasi-Newton minimization."""

from .driver import METHODS, build_problem, minimize, select_method
from .hypothesis import DotProductHypothesis, FunctionHypothesis, Hypothesis, as_hypothesis
from .linear import LinearRegression
from .logistic import DEFAULT_THRESHOLD, LogisticRegression, sigmoid
from .state import ModelState

__all__ = [
    "DEFAULT_THRESHOLD",
    "DotProductHypothesis",
    "FunctionHypothesis",
    "Hypothesis",
    "LinearRegression",
    "LogisticRegression",
    "METHODS",
    "ModelState",
    "as_hypothesis",
    "build_problem",
    "minimize",
    "select_method",
    "sigmoid",
]
