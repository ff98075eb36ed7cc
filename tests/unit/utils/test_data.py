"""
Tests for data utility functions.
"""

import pytest
import numpy as np
import scipy.sparse as ssp
from ordinfo.utils.data import (
    to_numpy_array,
    normalise_columns,
    check_positive,
    check_nonnegative,
    check_integer,
)


class TestToNumpyArray:
    """Test cases for to_numpy_array function."""

    def test_ndarray_passthrough(self):
        """Arrays are returned as-is."""
        data = np.arange(5)
        assert to_numpy_array(data) is data

    def test_list(self):
        np.testing.assert_array_equal(to_numpy_array([[1, 2], [3, 4]]), [[1, 2], [3, 4]])

    def test_sparse(self):
        """Sparse matrices are densified."""
        sparse = ssp.csr_matrix(np.eye(3))
        dense = to_numpy_array(sparse)
        assert isinstance(dense, np.ndarray)
        np.testing.assert_array_equal(dense, np.eye(3))


class TestNormaliseColumns:
    """Test cases for normalise_columns function."""

    def test_zero_mean_unit_variance(self):
        """Every column is standardised independently."""
        np.random.seed(42)
        data = np.random.randn(200, 3) * [1.0, 10.0, 0.1] + [0.0, 5.0, -3.0]
        result = normalise_columns(data)

        np.testing.assert_allclose(result.mean(axis=0), 0, atol=1e-10)
        np.testing.assert_allclose(result.std(axis=0), 1, atol=1e-10)

    def test_monotonic_within_column(self):
        """Ranks within a column are preserved."""
        np.random.seed(0)
        data = np.random.rand(50, 2)
        result = normalise_columns(data)
        for c in range(2):
            np.testing.assert_array_equal(np.argsort(data[:, c]), np.argsort(result[:, c]))

    def test_constant_column(self):
        """Zero-variance columns become zeros."""
        data = np.array([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]])
        result = normalise_columns(data)
        np.testing.assert_array_equal(result[:, 1], 0)

    def test_input_unchanged(self):
        data = np.array([[1.0, 2.0], [3.0, 4.0]])
        original = data.copy()
        normalise_columns(data)
        np.testing.assert_array_equal(data, original)

    def test_not_2d(self):
        with pytest.raises(ValueError, match="2-dimensional"):
            normalise_columns(np.arange(5.0))


class TestValidators:
    """Test cases for parameter validators."""

    def test_check_positive(self):
        check_positive(base=2, k=1, skipped=None)
        with pytest.raises(ValueError, match="base must be positive"):
            check_positive(base=0)
        with pytest.raises(ValueError, match="NaN"):
            check_positive(x=np.nan)
        with pytest.raises(ValueError, match="infinite"):
            check_positive(x=np.inf)
        with pytest.raises(TypeError, match="numeric"):
            check_positive(x="two")

    def test_check_nonnegative(self):
        check_nonnegative(time_diff=0, k=3)
        with pytest.raises(ValueError, match="time_diff must be non-negative"):
            check_nonnegative(time_diff=-1)
        with pytest.raises(TypeError):
            check_nonnegative(x=[1])

    def test_check_integer(self):
        check_integer(a=1, b=np.int64(3), c=None)
        with pytest.raises(TypeError, match="a must be an integer"):
            check_integer(a=1.0)
        with pytest.raises(TypeError):
            check_integer(flag=True)
