"""Pytest configuration and shared fixtures for quasifit tests."""

import logging
import os

import numpy as np
import pytest

from quasifit.logging import configure_logging


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def doubling_data() -> tuple[np.ndarray, np.ndarray]:
    """Noise-free ``y = 2x`` with a single feature and no intercept."""
    X = np.array([[1.0], [2.0], [3.0], [4.0]])
    y = np.array([2.0, 4.0, 6.0, 8.0])
    return X, y


@pytest.fixture
def overlapping_classes() -> tuple[np.ndarray, np.ndarray]:
    """Non-separable binary data with an intercept column."""
    x = np.array([-2.0, -1.5, -1.0, -0.5, 0.0, 0.5, 1.0, 1.5, 2.0, 2.5])
    y = np.array([0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 1.0])
    X = np.column_stack([np.ones_like(x), x])
    return X, y


@pytest.fixture
def exam_scores(rng) -> tuple[np.ndarray, np.ndarray]:
    """100 unnormalized scores in [30, 100] with noisy pass/fail labels."""
    x = rng.uniform(30.0, 100.0, size=100)
    p = 1.0 / (1.0 + np.exp(-(-4.0 + 0.06 * x)))
    y = (rng.uniform(size=100) < p).astype(float)
    X = np.column_stack([np.ones_like(x), x])
    return X, y


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default log configuration after each test."""
    yield
    configure_logging(level=logging.WARNING)
