"""
Ordinal-pattern symbolisation of multivariate continuous time series.

At every time step the values of the ``d`` dimensions are ranked, and the
resulting ordering of dimension indices is mapped to a dense symbol in
``[0, d!)`` through a :class:`~ordinfo.information.permutations.PermutationTable`.
"""

import numpy as np

from .permutations import PermutationTable
from ..utils.data import normalise_columns, to_numpy_array


def _check_continuous(data, dimensions=None):
    data = np.asarray(to_numpy_array(data), dtype=float)
    if data.ndim != 2:
        raise ValueError(
            f"Continuous observations must be 2D (n_timepoints, n_dimensions), got shape {data.shape}"
        )
    if dimensions is not None and data.shape[1] != dimensions:
        raise ValueError(
            f"Continuous observations have {data.shape[1]} columns, expected {dimensions}"
        )
    if np.any(np.isnan(data)):
        raise ValueError("Continuous observations contain NaN values")
    if np.any(np.isinf(data)):
        raise ValueError("Continuous observations contain infinite values")
    return data


def _rank_dimensions(data):
    # Stable sort: ties keep ascending dimension index
    return np.argsort(data, axis=1, kind="stable")


def ordinal_patterns(data):
    """Ordering of the dimensions at every time step.

    Parameters
    ----------
    data : array-like of shape (n_timepoints, n_dimensions)
        Continuous observations.

    Returns
    -------
    ndarray of shape (n_timepoints, n_dimensions)
        Row ``t`` lists dimension indices sorted by ascending value at ``t``.
        Equal values keep ascending dimension-index order (stable sort).

    Examples
    --------
    >>> ordinal_patterns([[0.3, 0.1, 0.2], [1.0, 1.0, 0.0]])
    array([[1, 2, 0],
           [2, 0, 1]])
    """
    data = _check_continuous(data)
    return _rank_dimensions(data)


def symbolize(data, table: PermutationTable, normalise=True):
    """Convert a multivariate continuous series into ordinal-pattern symbols.

    Parameters
    ----------
    data : array-like of shape (n_timepoints, n_dimensions)
        Continuous observations, one row per time step.
    table : PermutationTable
        Permutation table built for ``n_dimensions`` items.
    normalise : bool, default=True
        Standardise every column (zero mean, unit variance) over the whole
        series before ranking. Columns are scaled independently, which can
        change the ordering across dimensions at a given time step.

    Returns
    -------
    ndarray of shape (n_timepoints,)
        Permutation index of the ordering observed at each time step, in
        ``[0, table.n_permutations)``.

    Raises
    ------
    ValueError
        If data is not 2D, its column count differs from
        ``table.dimensions``, or it contains NaN or infinite values.
    PermutationEncodingError
        If a ranked row does not encode to a valid permutation id.

    Notes
    -----
    The output depends only on ``data``, ``table`` and ``normalise``; the
    same input always gives the same symbols.
    """
    data = _check_continuous(data, dimensions=table.dimensions)
    if normalise and len(data) > 0:
        data = normalise_columns(data)

    patterns = _rank_dimensions(data)
    return table.index_of(table.encode(patterns))
