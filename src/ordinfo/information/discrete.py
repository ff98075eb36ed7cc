"""
Plug-in estimators of information measures on discrete (integer) series.

Mutual information, predictive information and active information storage
all reduce to the mutual information between a block of "past" values and a
block of "future" values taken from sliding windows. They share one
accounting core, :class:`DiscreteInfoCalculator`, which counts
(past-block, future-block) state pairs in a joint histogram; the concrete
calculators only differ in how a window is laid out.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .errors import AlphabetCapacityError
from ..utils.data import (
    check_integer,
    check_nonnegative,
    check_positive,
    to_numpy_array,
)
from ..utils.jit import conditional_njit

# Largest joint histogram (past states x future states) a calculator may allocate
MAX_JOINT_STATES = 2 ** 26


@conditional_njit
def encode_blocks(states, base, offset, length, n_windows):
    """Encode sliding blocks of every column as base-``base`` integers.

    Parameters
    ----------
    states : ndarray of shape (n_timepoints, n_columns), int64
        Integer series, one column per parallel series.
    base : int
        Alphabet size of ``states``.
    offset : int
        Start of the block relative to the window start.
    length : int
        Number of consecutive values in a block.
    n_windows : int
        Number of windows per column; window ``w`` covers block
        ``states[w + offset : w + offset + length]``.

    Returns
    -------
    ndarray of shape (n_columns * n_windows,), int64
        Block states, column by column. The oldest value of a block is the
        most significant digit.
    """
    n_cols = states.shape[1]
    codes = np.empty(n_windows * n_cols, dtype=np.int64)
    i = 0
    for c in range(n_cols):
        for w in range(n_windows):
            code = 0
            for j in range(length):
                code = code * base + states[offset + w + j, c]
            codes[i] = code
            i += 1
    return codes


@conditional_njit
def accumulate_joint_counts(joint, past, future):
    """Add one count to ``joint[past[i], future[i]]`` for every i (in place)."""
    for i in range(past.size):
        joint[past[i], future[i]] += 1


def mi_from_counts(joint):
    """Mutual information in bits of a joint count table.

    Parameters
    ----------
    joint : ndarray of shape (n_x, n_y)
        Non-negative counts of (x, y) observations.

    Returns
    -------
    float
        ``sum p(x,y) log2(p(x,y) / (p(x) p(y)))`` over non-empty cells,
        computed from counts as ``log2(n c_xy / (c_x c_y))``. 0.0 for an
        empty table.
    """
    joint = np.asarray(joint)
    n = joint.sum()
    if n == 0:
        return 0.0

    x_counts = joint.sum(axis=1).astype(float)
    y_counts = joint.sum(axis=0).astype(float)
    rows, cols = np.nonzero(joint)
    c_xy = joint[rows, cols].astype(float)

    log_ratio = np.log2(c_xy * n / (x_counts[rows] * y_counts[cols]))
    return float(np.sum(c_xy / n * log_ratio))


class DiscreteInfoCalculator(ABC):
    """Histogram-based accounting core shared by all discrete measures.

    A window starting at time ``w`` contributes one observation: the past
    block ``x[w : w + past_length]`` paired with the future block
    ``y[w + future_offset : w + future_offset + future_length]``. The
    measure is the plug-in mutual information between past and future block
    states over all windows added since the last :meth:`initialise`.

    Parameters
    ----------
    base : int
        Alphabet size; every observed value must lie in ``[0, base)``.
    past_length : int
        Length of the past block.
    future_offset : int
        Start of the future block relative to the window start.
    future_length : int
        Length of the future block.
    local_offset : int
        Time index, relative to the window start, at which the window's
        local value is reported.
    logger : logging.Logger, optional
        Logger for debug messages. If None, a class-named logger is used.

    Raises
    ------
    TypeError
        If any size parameter is not an integer.
    ValueError
        If base, past_length or future_length are not positive, or
        future_offset is negative.
    AlphabetCapacityError
        If ``base**past_length * base**future_length`` exceeds MAX_JOINT_STATES.

    Warning
    -------
    Calculators are NOT thread-safe: adding observations and computing
    measures read and write the same count table. Serialize access or use
    one instance per thread.
    """

    def __init__(
        self,
        base: int,
        past_length: int,
        future_offset: int,
        future_length: int,
        local_offset: int,
        logger: Optional[logging.Logger] = None,
    ):
        check_integer(
            base=base,
            past_length=past_length,
            future_offset=future_offset,
            future_length=future_length,
            local_offset=local_offset,
        )
        check_positive(base=base, past_length=past_length, future_length=future_length)
        check_nonnegative(future_offset=future_offset, local_offset=local_offset)

        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.base = int(base)
        self.past_length = int(past_length)
        self.future_offset = int(future_offset)
        self.future_length = int(future_length)
        self.local_offset = int(local_offset)

        self.n_past_states = self.base ** self.past_length
        self.n_future_states = self.base ** self.future_length
        if self.n_past_states * self.n_future_states > MAX_JOINT_STATES:
            raise AlphabetCapacityError(
                f"Joint table of {self.n_past_states} x {self.n_future_states} states "
                f"exceeds the maximum of {MAX_JOINT_STATES} cells"
            )

        self._span = max(self.past_length, self.future_offset + self.future_length)
        self._joint = None
        self._n_observations = 0
        self._last_average = 0.0

    def initialise(self):
        """Discard all accumulated counts. Required before first use and before reuse."""
        self._joint = np.zeros((self.n_past_states, self.n_future_states), dtype=np.int64)
        self._n_observations = 0
        self._last_average = 0.0
        self.logger.debug(
            f"Initialised {self.n_past_states} x {self.n_future_states} joint table"
        )

    def _check_initialised(self):
        if self._joint is None:
            raise RuntimeError(
                f"{self.__class__.__name__}.initialise() must be called before use"
            )

    def _check_states(self, states, name="states"):
        """Coerce to a 2D int64 array (time x columns) of values in ``[0, base)``."""
        states = to_numpy_array(states)
        if states.ndim not in (1, 2):
            raise ValueError(f"{name} must be 1D or 2D, got shape {states.shape}")

        if states.size > 0 and not (
            np.issubdtype(states.dtype, np.integer) or states.dtype == bool
        ):
            if not np.issubdtype(states.dtype, np.number) or np.any(
                np.mod(states, 1) != 0
            ):
                raise ValueError(f"{name} must contain integer values")

        states = np.ascontiguousarray(states, dtype=np.int64)
        if states.size > 0 and (states.min() < 0 or states.max() >= self.base):
            raise ValueError(
                f"{name} values must lie in [0, {self.base}), "
                f"got range [{states.min()}, {states.max()}]"
            )
        if states.ndim == 1:
            states = states.reshape(-1, 1)
        return states

    def _n_windows(self, n_timepoints):
        return max(n_timepoints - self._span + 1, 0)

    def _block_states(self, source, dest):
        n_windows = self._n_windows(source.shape[0])
        past = encode_blocks(source, self.base, 0, self.past_length, n_windows)
        future = encode_blocks(
            dest, self.base, self.future_offset, self.future_length, n_windows
        )
        return past, future, n_windows

    def _add_windows(self, source, dest):
        self._check_initialised()
        past, future, n_windows = self._block_states(source, dest)
        if n_windows == 0:
            self.logger.warning(
                f"Series of length {source.shape[0]} is shorter than the window span "
                f"{self._span}; no observations added"
            )
            return
        accumulate_joint_counts(self._joint, past, future)
        self._n_observations += past.size
        self.logger.debug(
            f"Added {past.size} observations ({self._n_observations} in total)"
        )

    def _local_values(self, source, dest):
        self._check_initialised()
        if self._n_observations == 0:
            raise ValueError("No observations have been added yet")

        past, future, n_windows = self._block_states(source, dest)
        local = np.zeros(source.shape, dtype=float)
        if n_windows == 0:
            return local

        n = self._n_observations
        past_counts = self._joint.sum(axis=1).astype(float)
        future_counts = self._joint.sum(axis=0).astype(float)
        c_xy = self._joint[past, future].astype(float)
        with np.errstate(divide="ignore", invalid="ignore"):
            values = np.where(
                c_xy > 0,
                np.log2(c_xy * n / (past_counts[past] * future_counts[future])),
                -np.inf,
            )

        n_cols = source.shape[1]
        local[self.local_offset : self.local_offset + n_windows, :] = values.reshape(
            n_cols, n_windows
        ).T
        return local

    @abstractmethod
    def add_observations(self, *args):
        """Accumulate observations into the joint histogram."""

    @abstractmethod
    def compute_local_from_previous_observations(self, *args):
        """Local (per-window) values against the accumulated distribution."""

    def compute_average_local_of_observations(self):
        """Measure in bits over all observations added since :meth:`initialise`.

        Computed from the counts at call time. Plug-in estimates are biased,
        so small samples may give slightly negative or inflated values.
        """
        self._check_initialised()
        self._last_average = mi_from_counts(self._joint)
        self.logger.debug(
            f"Average over {self._n_observations} observations: {self._last_average:.6f} bits"
        )
        return self._last_average

    def compute_significance(self, n_trials_or_orderings, seed=None, enable_progressbar=False):
        """Surrogate distribution of the measure under shuffled past/future pairings.

        Parameters
        ----------
        n_trials_or_orderings : int or array-like of shape (n_trials, n_observations)
            Number of random surrogates, or explicit reorderings of the
            accumulated observations (each row a permutation of
            ``range(get_num_observations())``).
        seed : int, optional
            Random seed used when generating orderings.
        enable_progressbar : bool, default=False
            Whether to show a progress bar over trials.

        Returns
        -------
        EmpiricalMeasurementDistribution
            Surrogate values and the actual measure. The accumulated counts
            are left unchanged.

        See Also
        --------
        ~ordinfo.information.significance.compute_significance
        """
        # Import here to avoid circular dependency
        from .significance import compute_significance

        return compute_significance(
            self,
            n_trials_or_orderings,
            seed=seed,
            enable_progressbar=enable_progressbar,
            logger=self.logger,
        )

    @property
    def joint_counts(self):
        """Copy of the (past state x future state) count table."""
        self._check_initialised()
        return self._joint.copy()

    def get_last_average(self):
        """Value returned by the most recent average computation."""
        return self._last_average

    def get_num_observations(self):
        """Number of windows counted since the last :meth:`initialise`."""
        return self._n_observations


class MutualInfoCalculatorDiscrete(DiscreteInfoCalculator):
    """Mutual information between two discrete series.

    Computes ``I(X_t ; Y_{t+time_diff})`` over paired samples.

    Parameters
    ----------
    base : int
        Alphabet size shared by both variables.
    time_diff : int, default=0
        Lag of the second variable relative to the first.
    logger : logging.Logger, optional
        Logger for debug messages.

    Examples
    --------
    >>> calc = MutualInfoCalculatorDiscrete(2)
    >>> calc.initialise()
    >>> calc.add_observations([0, 1, 0, 1], [0, 1, 0, 1])
    >>> calc.compute_average_local_of_observations()
    1.0
    """

    def __init__(self, base, time_diff=0, logger=None):
        check_integer(time_diff=time_diff)
        check_nonnegative(time_diff=time_diff)
        super().__init__(
            base,
            past_length=1,
            future_offset=time_diff,
            future_length=1,
            local_offset=0,
            logger=logger,
        )
        self.time_diff = int(time_diff)

    def _check_pair(self, var1, var2):
        var1 = self._check_states(var1, name="var1")
        var2 = self._check_states(var2, name="var2")
        if var1.shape != var2.shape:
            raise ValueError(
                f"var1 and var2 must have the same shape, got {var1.shape} and {var2.shape}"
            )
        return var1, var2

    def add_observations(self, var1, var2):
        """Add paired observations.

        Parameters
        ----------
        var1, var2 : array-like of shape (n_timepoints,) or (n_timepoints, n_columns)
            Integer series. For 2D input each column is a separate pair of
            series; all pairs are pooled.
        """
        var1, var2 = self._check_pair(var1, var2)
        self._add_windows(var1, var2)

    def compute_local_from_previous_observations(self, var1, var2):
        """Local MI ``log2(p(x,y)/(p(x)p(y)))`` of each pair, reported at the time of var1.

        The last ``time_diff`` positions have no pair and are 0. Pairs never
        observed before give ``-inf``.
        """
        was_1d = np.ndim(to_numpy_array(var1)) == 1
        var1, var2 = self._check_pair(var1, var2)
        local = self._local_values(var1, var2)
        return local.ravel() if was_1d else local


class _BlockInfoCalculator(DiscreteInfoCalculator):
    """Calculator whose past and future blocks come from the same series."""

    def add_observations(self, states):
        """Add observations of one or more parallel series.

        Parameters
        ----------
        states : array-like of shape (n_timepoints,) or (n_timepoints, n_columns)
            Integer series; rows are time steps, columns are parallel series
            whose windows are pooled into one histogram.
        """
        states = self._check_states(states)
        self._add_windows(states, states)

    def compute_local_from_previous_observations(self, states):
        """Local values of every window, reported at the window's current time step.

        Positions without a complete window are 0.
        """
        was_1d = np.ndim(to_numpy_array(states)) == 1
        states = self._check_states(states)
        local = self._local_values(states, states)
        return local.ravel() if was_1d else local


class PredictiveInfoCalculatorDiscrete(_BlockInfoCalculator):
    """Predictive information (excess entropy estimate) at block length ``k``.

    ``PI_k = I(X_past^k ; X_future^k)``, where the past block ends at time
    ``t`` and the future block starts at ``t + 1``. With ``k=1`` this is the
    same estimate as :class:`ActiveInfoCalculatorDiscrete` with ``k=1``.

    Parameters
    ----------
    base : int
        Alphabet size of the series.
    k : int
        Past and future block length.
    logger : logging.Logger, optional
        Logger for debug messages.

    Examples
    --------
    >>> calc = PredictiveInfoCalculatorDiscrete(2, 1)
    >>> calc.initialise()
    >>> calc.add_observations([0, 1] * 50 + [0])
    >>> calc.compute_average_local_of_observations()
    1.0
    """

    def __init__(self, base, k, logger=None):
        check_integer(k=k)
        check_positive(k=k)
        super().__init__(
            base,
            past_length=k,
            future_offset=k,
            future_length=k,
            local_offset=k - 1,
            logger=logger,
        )
        self.k = int(k)


class ActiveInfoCalculatorDiscrete(_BlockInfoCalculator):
    """Active information storage at history length ``k``.

    ``AI_k = I(X_past^k ; X_t)``: information the ``k`` previous values
    carry about the current one.

    Parameters
    ----------
    base : int
        Alphabet size of the series.
    k : int
        History length.
    logger : logging.Logger, optional
        Logger for debug messages.
    """

    def __init__(self, base, k, logger=None):
        check_integer(k=k)
        check_positive(k=k)
        super().__init__(
            base,
            past_length=k,
            future_offset=k,
            future_length=1,
            local_offset=k,
            logger=logger,
        )
        self.k = int(k)
