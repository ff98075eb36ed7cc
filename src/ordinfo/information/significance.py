"""
Surrogate-based significance testing of the discrete information measures.

A surrogate keeps the observed past-block states and the observed
future-block states but re-pairs them with a permutation, which destroys
the dependency under test while preserving both marginal distributions.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import scipy.stats
import tqdm

from .discrete import accumulate_joint_counts, mi_from_counts
from ..utils.data import (
    check_integer,
    check_nonnegative,
    check_positive,
    to_numpy_array,
)


@dataclass
class EmpiricalMeasurementDistribution:
    """Measure values on surrogate data together with the actual measure.

    Attributes
    ----------
    distribution : ndarray of shape (n_trials,)
        Measure computed on each surrogate.
    actual_value : float
        Measure computed on the original observations.
    """

    distribution: np.ndarray
    actual_value: float
    n_trials: int = field(init=False)

    def __post_init__(self):
        self.distribution = np.asarray(self.distribution, dtype=float)
        self.n_trials = len(self.distribution)

    @property
    def mean(self):
        return float(np.mean(self.distribution))

    @property
    def std(self):
        return float(np.std(self.distribution))

    @property
    def p_value(self):
        """Fraction of surrogates whose value reaches the actual value."""
        return float(np.mean(self.distribution >= self.actual_value))

    @property
    def t_score(self):
        """Distance of the actual value from the surrogate mean in surrogate std units."""
        std = self.std
        if std > 0:
            return (self.actual_value - self.mean) / std
        return np.inf if self.actual_value != self.mean else 0.0

    def get_parametric_p_value(self, distr_type="gamma"):
        """p-value from a scipy.stats distribution fitted to the surrogates.

        Parameters
        ----------
        distr_type : str, default='gamma'
            Name of a continuous distribution in scipy.stats. For 'gamma'
            and 'lognorm' the location is fixed at zero.

        Returns
        -------
        float
            Survival function of the fitted distribution at the actual value.

        Raises
        ------
        ValueError
            If distr_type is not a scipy.stats distribution.
        """
        try:
            distr = getattr(scipy.stats, distr_type)
        except AttributeError:
            raise ValueError(f"Distribution '{distr_type}' not found in scipy.stats")

        if distr_type in ["gamma", "lognorm"]:
            params = distr.fit(self.distribution, floc=0)
        else:
            params = distr.fit(self.distribution)

        rv = distr(*params)
        return float(rv.sf(self.actual_value))


def generate_surrogate_orderings(n_observations, n_trials, seed=None):
    """Random reorderings of ``n_observations`` samples.

    Parameters
    ----------
    n_observations : int
        Number of observations to reorder.
    n_trials : int
        Number of orderings.
    seed : int, optional
        Random seed. Uses a local RandomState, the global numpy state is
        left untouched.

    Returns
    -------
    ndarray of shape (n_trials, n_observations)
        Each row is a permutation of ``range(n_observations)``.
    """
    check_integer(n_observations=n_observations, n_trials=n_trials)
    check_nonnegative(n_observations=n_observations)
    check_positive(n_trials=n_trials)

    rng = np.random.RandomState(seed)
    orderings = np.empty((n_trials, n_observations), dtype=np.int64)
    for i in range(n_trials):
        orderings[i] = rng.permutation(n_observations)
    return orderings


def _check_orderings(orderings, n_observations):
    orderings = to_numpy_array(orderings)
    if orderings.ndim != 2 or orderings.shape[1] != n_observations:
        raise ValueError(
            f"Orderings must have shape (n_trials, {n_observations}), got {orderings.shape}"
        )
    if orderings.shape[0] == 0:
        raise ValueError("At least one ordering is required")
    if not np.issubdtype(orderings.dtype, np.integer):
        raise ValueError("Orderings must contain integer indices")
    if not np.all(np.sort(orderings, axis=1) == np.arange(n_observations)):
        raise ValueError(
            f"Every ordering must be a permutation of range({n_observations})"
        )
    return orderings.astype(np.int64)


def compute_significance(
    calc,
    n_trials_or_orderings,
    seed=None,
    enable_progressbar=False,
    logger: Optional[logging.Logger] = None,
):
    """Build the null distribution of a discrete calculator's measure.

    Parameters
    ----------
    calc : DiscreteInfoCalculator
        Initialised calculator holding the observations to test.
    n_trials_or_orderings : int or array-like of shape (n_trials, n_observations)
        Number of random surrogates to draw, or explicit reorderings of the
        accumulated observations for reproducible tests.
    seed : int, optional
        Random seed for generated orderings. Ignored for explicit orderings.
    enable_progressbar : bool, default=False
        Whether to show a progress bar over trials.
    logger : logging.Logger, optional
        Logger for progress messages. If None, a module logger is used.

    Returns
    -------
    EmpiricalMeasurementDistribution
        Surrogate measures and the actual measure of ``calc``.

    Raises
    ------
    ValueError
        If the number of trials is not positive or an ordering is not a
        permutation of the observation indices.

    Notes
    -----
    The observed pairs are rebuilt from the calculator's count table (the
    measure does not depend on observation order), the future states are
    re-paired by each ordering and the measure is recomputed on a fresh
    table. The calculator's own counts are never modified, so its measure is
    the same before and after the call.
    """
    logger = logger or logging.getLogger(__name__)

    joint = calc.joint_counts
    n_observations = calc.get_num_observations()
    actual_value = calc.compute_average_local_of_observations()

    if isinstance(n_trials_or_orderings, (int, np.integer)) and not isinstance(
        n_trials_or_orderings, bool
    ):
        orderings = generate_surrogate_orderings(
            n_observations, int(n_trials_or_orderings), seed=seed
        )
    else:
        orderings = _check_orderings(n_trials_or_orderings, n_observations)

    rows, cols = np.nonzero(joint)
    counts = joint[rows, cols]
    past = np.repeat(rows, counts).astype(np.int64)
    future = np.repeat(cols, counts).astype(np.int64)

    logger.info(
        f"Computing {len(orderings)} surrogates over {n_observations} observations"
    )

    distribution = np.zeros(len(orderings))
    surrogate_joint = np.zeros_like(joint)
    trials = tqdm.tqdm(orderings, desc="Surrogates") if enable_progressbar else orderings
    for i, ordering in enumerate(trials):
        surrogate_joint[:] = 0
        accumulate_joint_counts(surrogate_joint, past, future[ordering])
        distribution[i] = mi_from_counts(surrogate_joint)

    result = EmpiricalMeasurementDistribution(distribution, actual_value)
    logger.debug(
        f"Actual {actual_value:.6f} bits, surrogate mean {result.mean:.6f}, "
        f"p-value {result.p_value:.4f}"
    )
    return result
