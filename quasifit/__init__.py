"""quasifit - linear and logistic regression trained with quasi-Newton methods."""

__version__ = "0.1.0"

from .api import (
    cost,
    gradient,
    minimize,
    new_linear_model,
    new_logistic_model,
    predict_classification,
    predict_regression,
)
from .config import ConvergenceSettings, default_convergence_settings
from .errors import ConfigurationError, NumericalDomainError, OptimizerError, QuasiFitError
from .logging import configure_logging, get_logger, set_log_level
from .models import (
    DotProductHypothesis,
    FunctionHypothesis,
    Hypothesis,
    LinearRegression,
    LogisticRegression,
    ModelState,
    sigmoid,
)
from .optimize import OptimizeResult, Problem, Status, bfgs, lbfgs

__all__ = [
    "__version__",
    # Models
    "DotProductHypothesis",
    "FunctionHypothesis",
    "Hypothesis",
    "LinearRegression",
    "LogisticRegression",
    "ModelState",
    "sigmoid",
    # Functional API
    "cost",
    "gradient",
    "minimize",
    "new_linear_model",
    "new_logistic_model",
    "predict_classification",
    "predict_regression",
    # Configuration
    "ConvergenceSettings",
    "default_convergence_settings",
    # Errors
    "ConfigurationError",
    "NumericalDomainError",
    "OptimizerError",
    "QuasiFitError",
    # Optimization
    "OptimizeResult",
    "Problem",
    "Status",
    "bfgs",
    "lbfgs",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
]
