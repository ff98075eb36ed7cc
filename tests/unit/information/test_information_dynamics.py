"""End-to-end checks combining calculators and significance testing."""

import numpy as np
import pytest
from ordinfo import (
    ActiveInfoCalculatorDiscrete,
    PredictiveInfoCalculatorDiscrete,
    SymbolicMutualInfoCalculator,
)


def test_storage_of_copy_process(binary_copy_series):
    """A copy process stores information, shuffling destroys it."""
    calc = ActiveInfoCalculatorDiscrete(2, 1)
    calc.initialise()
    calc.add_observations(binary_copy_series)

    # P(same) = 0.8 + 0.2 * 0.5 = 0.9 -> 1 - H(0.9) bits
    p = 0.9
    expected = 1 + p * np.log2(p) + (1 - p) * np.log2(1 - p)
    ai = calc.compute_average_local_of_observations()
    assert abs(ai - expected) < 0.02

    result = calc.compute_significance(50, seed=0)
    assert result.p_value == 0.0


def test_longer_history_adds_little_for_markov_process(binary_copy_series):
    """A first-order process gains almost nothing from longer histories."""
    values = []
    for k in [1, 2, 3]:
        calc = ActiveInfoCalculatorDiscrete(2, k)
        calc.initialise()
        calc.add_observations(binary_copy_series)
        values.append(calc.compute_average_local_of_observations())
    assert values[1] - values[0] < 0.01
    assert values[2] - values[1] < 0.01


def test_predictive_information_grows_with_k(binary_copy_series):
    """Predictive information is non-decreasing in block length for a Markov chain."""
    values = []
    for k in [1, 2]:
        calc = PredictiveInfoCalculatorDiscrete(2, k)
        calc.initialise()
        calc.add_observations(binary_copy_series)
        values.append(calc.compute_average_local_of_observations())
    assert values[1] >= values[0] - 0.01


def test_symbolic_mi_of_labelled_data(labelled_ordinal_data):
    """The label is fully recoverable from the ordinal pattern."""
    data, labels = labelled_ordinal_data
    calc = SymbolicMutualInfoCalculator()
    calc.initialise(3, 3)
    calc.set_observations(data, labels)

    counts = np.bincount(labels) / len(labels)
    entropy = -np.sum(counts * np.log2(counts))
    assert abs(calc.compute_average_local_of_observations() - entropy) < 1e-9


@pytest.mark.slow
def test_null_distribution_calibration(test_params):
    """Under independence, p-values are not concentrated near zero."""
    rng = np.random.RandomState(1)
    n = test_params["series_length"]
    p_values = []
    for _ in range(10):
        calc = SymbolicMutualInfoCalculator()
        calc.initialise(3, 2)
        calc.set_observations(rng.randn(n, 3), rng.randint(0, 2, n))
        result = calc.compute_significance(test_params["n_trials"], seed=rng.randint(1 << 30))
        p_values.append(result.p_value)
    assert np.mean(np.array(p_values) < 0.05) <= 0.3
