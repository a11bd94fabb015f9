"""Deterministic quasi-Newton minimizers used to fit quasifit models.

Example
-------
>>> import numpy as np
>>> from quasifit.optimize import Problem, bfgs
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> def rosen_grad(x):
...     return np.array([
...         -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
...         200 * (x[1] - x[0] ** 2),
...     ])
>>> problem = Problem(fun=rosen, grad=rosen_grad, dim=2)
>>> res = bfgs(problem, np.array([-1.2, 1.0]))
>>> res.status.name
'GRADIENT_THRESHOLD'
"""

from .convergence import FunctionConverge
from .core import ATOL, RTOL, OptimizeResult, Problem, Status, check_convergence
from .line_search import LineSearchResult, backtracking_armijo, wolfe_line_search
from .quasi_newton import bfgs, lbfgs
from .utils import approx_grad

__all__ = [
    "ATOL",
    "FunctionConverge",
    "LineSearchResult",
    "OptimizeResult",
    "Problem",
    "RTOL",
    "Status",
    "approx_grad",
    "backtracking_armijo",
    "bfgs",
    "check_convergence",
    "lbfgs",
    "wolfe_line_search",
]
