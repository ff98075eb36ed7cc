"""Configuration for tests.

This module provides shared fixtures for the ordinfo test suite.
"""

import os
import pytest
import numpy as np


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


@pytest.fixture(scope="session")
def test_mode():
    """Determine if we're in fast test mode based on environment variable."""
    return os.environ.get("ORDINFO_FAST_TESTS", "").lower() in ("1", "true", "yes")


@pytest.fixture
def test_params(test_mode):
    """Get test parameters based on test mode.

    In fast test mode, use smaller parameters for quicker execution.
    """
    if test_mode:
        return {"n_trials": 20, "series_length": 500}
    return {"n_trials": 200, "series_length": 5000}


@pytest.fixture
def binary_copy_series():
    """Binary series copying its previous value with probability 0.8.

    Returns (n_timepoints, n_columns) int array with 10 parallel series.
    """
    rng = np.random.RandomState(42)
    n_time, n_cols = 1000, 10
    x = np.zeros((n_time, n_cols), dtype=int)
    x[0] = rng.randint(0, 2, n_cols)
    for t in range(1, n_time):
        copy = rng.rand(n_cols) < 0.8
        x[t] = np.where(copy, x[t - 1], rng.randint(0, 2, n_cols))
    return x


@pytest.fixture
def labelled_ordinal_data():
    """Continuous 3D series whose largest dimension is given by a label."""
    rng = np.random.RandomState(0)
    labels = rng.randint(0, 3, 1000)
    data = rng.rand(1000, 3) * 0.1
    data[np.arange(1000), labels] += 1.0
    return data, labels
