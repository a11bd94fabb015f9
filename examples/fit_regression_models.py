"""
Example: Fitting linear and logistic regression with quasifit

Trains both models on small synthetic datasets with BFGS and prints the
learned parameters, the final cost and a few predictions.
"""

import logging

import numpy as np

from quasifit import (
    ConvergenceSettings,
    LinearRegression,
    LogisticRegression,
    OptimizerError,
    configure_logging,
)


def example_linear_regression():
    """Example: Recover y = 2x from noise-free data."""
    print("=" * 60)
    print("Example 1: Linear Regression")
    print("=" * 60)

    X = np.array([[1.0], [2.0], [3.0], [4.0]])
    y = np.array([2.0, 4.0, 6.0, 8.0])

    model = LinearRegression(features=X, outputs=y)
    result = model.minimize()
    print(f"Status: {result.status.name}")
    print(f"theta = {model.theta}")
    print(f"cost = {model.cost(model.theta):.3e}")
    print(f"Iterations: {result.nit}")
    print(f"predict([5.0]) = {model.predict([5.0]):.4f}")
    print()


def example_logistic_regression():
    """Example: Classify noisy 1-D data with an intercept column."""
    print("=" * 60)
    print("Example 2: Logistic Regression")
    print("=" * 60)

    rng = np.random.default_rng(0)
    x = rng.normal(size=200)
    y = (x + 0.8 * rng.normal(size=200) > 0.3).astype(float)
    X = np.column_stack([np.ones_like(x), x])

    model = LogisticRegression(features=X, outputs=y)
    result = model.minimize()
    print(f"Status: {result.status.name}")
    print(f"theta = {model.theta}")
    print(f"cost = {result.fun:.6f}")
    for value in (-1.0, 0.3, 1.5):
        features = [1.0, value]
        print(
            f"x = {value:+.1f}: P(y=1) = {model.predict_proba(features):.3f}, "
            f"class = {model.predict(features)}"
        )
    print()


def example_failure_handling():
    """Example: An exhausted iteration budget is reported, not fatal."""
    print("=" * 60)
    print("Example 3: Handling Optimizer Failures")
    print("=" * 60)

    model = LinearRegression(features=[[1.0], [2.0]], outputs=[3.0, 6.0])
    try:
        model.minimize(ConvergenceSettings(max_major_iterations=1))
    except OptimizerError as err:
        print(f"Caught: {err}")
        print(f"Model theta is unchanged: {model.theta}")
    print()


if __name__ == "__main__":
    configure_logging(level=logging.WARNING)
    example_linear_regression()
    example_logistic_regression()
    example_failure_handling()
    print("All examples completed.")
