import numpy as np
import pytest

import quasifit
from quasifit import (
    LinearRegression,
    LogisticRegression,
    cost,
    default_convergence_settings,
    gradient,
    minimize,
    new_linear_model,
    new_logistic_model,
    predict_classification,
    predict_regression,
)


def test_constructors_use_defaults():
    linear = new_linear_model()
    logistic = new_logistic_model()
    assert isinstance(linear, LinearRegression)
    assert isinstance(logistic, LogisticRegression)
    assert linear.state.learning_rate == 1.0
    assert logistic.state.learning_rate == 1.0
    assert logistic.threshold == 0.5


def test_linear_scenario_end_to_end(doubling_data):
    X, y = doubling_data
    model = new_linear_model()
    model.state.features = X
    model.state.outputs = y
    result = minimize(model, default_convergence_settings())
    assert result.success
    assert model.theta == pytest.approx([2.0], abs=1e-4)
    assert cost(model, model.theta) == pytest.approx(0.0, abs=1e-12)
    assert predict_regression(model, [5.0]) == pytest.approx(10.0, abs=1e-4)


def test_minimize_accepts_none_settings(doubling_data):
    X, y = doubling_data
    model = new_linear_model()
    model.state.features = X
    model.state.outputs = y
    assert minimize(model, None).success


def test_classification_end_to_end(overlapping_classes):
    X, y = overlapping_classes
    model = new_logistic_model()
    model.state.features = X
    model.state.outputs = y
    minimize(model, None)
    assert predict_classification(model, [1.0, 3.0]) is True
    assert predict_classification(model, [1.0, -3.0]) is False


def test_gradient_fills_caller_buffer(doubling_data):
    X, y = doubling_data
    model = new_linear_model()
    model.state.features = X
    model.state.outputs = y
    buffer = np.empty(1)
    out = gradient(model, np.array([0.0]), buffer)
    assert out is buffer
    # (1/m) * sum(x * (0 - 2x)) = -2 * 30 / 4
    assert buffer[0] == pytest.approx(-15.0)


def test_version():
    assert quasifit.__version__ == "0.1.0"
