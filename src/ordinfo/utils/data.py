import numbers

import numpy as np
import scipy.sparse as ssp
from sklearn.preprocessing import StandardScaler


def to_numpy_array(data):
    """Coerce observations (list, ndarray or scipy sparse matrix) to an ndarray.

    ndarrays are returned without copying.
    """
    if ssp.issparse(data):
        return data.toarray()
    return np.asarray(data)


def normalise_columns(data):
    """Standardise every column of a 2D array to zero mean and unit variance.

    Each column is scaled independently, so the ordering of values across
    columns at a given row may change. Columns with zero variance are only
    centered (they become all zeros).

    Parameters
    ----------
    data : array-like of shape (n_samples, n_columns)
        Input matrix. Rows are samples (time steps), columns are variables.

    Returns
    -------
    ndarray of shape (n_samples, n_columns)
        New float array with standardised columns. The input is not modified.

    Raises
    ------
    ValueError
        If input data is not 2-dimensional.

    Notes
    -----
    Uses sklearn's StandardScaler internally (population variance). The
    transformation is monotonic within each column.

    Examples
    --------
    >>> data = np.array([[1.0, 10.0], [2.0, 20.0], [3.0, 30.0]])
    >>> normalise_columns(data)[:, 0]
    array([-1.22474487,  0.        ,  1.22474487])
    """
    data = np.asarray(data, dtype=float)
    if data.ndim != 2:
        raise ValueError(f"Input data must be 2-dimensional, got shape {data.shape}")

    scaler = StandardScaler()
    return scaler.fit_transform(data)


def _as_finite_float(name, value):
    try:
        val = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")
    if np.isnan(val):
        raise ValueError(f"{name} cannot be NaN")
    if np.isinf(val):
        raise ValueError(f"{name} cannot be infinite")
    return val


def check_nonnegative(**kwargs):
    """Validate lags and offsets: every non-None value must be a finite number >= 0.

    Raises
    ------
    ValueError
        If a value is negative, NaN or infinite.
    TypeError
        If a value cannot be converted to float.

    Examples
    --------
    >>> check_nonnegative(time_diff=0, local_offset=2)
    """
    for name, value in kwargs.items():
        if value is not None and _as_finite_float(name, value) < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def check_positive(**kwargs):
    """Validate sizes (alphabet base, block lengths, trial counts): values must be > 0.

    None values are skipped.

    Raises
    ------
    ValueError
        If a value is zero, negative, NaN or infinite.
    TypeError
        If a value cannot be converted to float.
    """
    for name, value in kwargs.items():
        if value is not None and _as_finite_float(name, value) <= 0:
            raise ValueError(f"{name} must be positive, got {value}")


def check_integer(**kwargs):
    """Check that all provided parameters are integers (bool excluded).

    Raises
    ------
    TypeError
        If any parameter value is not an integer.
    """
    for name, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
