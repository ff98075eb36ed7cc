"""
Mutual information between a multivariate continuous series and a discrete one.

The continuous observations are reduced to ordinal-pattern symbols (the
ordering of the dimensions at each time step) and the mutual information
between those symbols and the discrete series is computed with the plug-in
discrete estimator.
"""

import logging
from typing import Optional

from .discrete import MutualInfoCalculatorDiscrete
from .ordinal import symbolize
from .permutations import DEFAULT_MAX_DIMENSIONS, PermutationTable
from ..utils.data import check_integer, check_positive, to_numpy_array

PROP_NORMALISE = "NORMALISE"


class SymbolicMutualInfoCalculator:
    """MI between ordinal patterns of continuous data and a discrete series.

    Usage follows the calculator life cycle: :meth:`initialise`, optionally
    :meth:`set_property`, one or more :meth:`set_observations` calls, then
    :meth:`compute_average_local_of_observations` and/or
    :meth:`compute_significance`.

    Parameters
    ----------
    max_dimensions : int, optional
        Largest number of continuous dimensions accepted by
        :meth:`initialise`. Default: DEFAULT_MAX_DIMENSIONS.
    logger : logging.Logger, optional
        Logger for debug messages. If None, a class-named logger is used.

    Attributes
    ----------
    dimensions : int or None
        Number of continuous dimensions, set by :meth:`initialise`.
    base : int or None
        Alphabet size used by the inner discrete calculator,
        ``max(dimensions!, base)``.
    normalise : bool
        Whether columns are standardised before symbolisation (default True).
    table : PermutationTable or None
        Permutation table built by :meth:`initialise`.

    Notes
    -----
    The inner estimator works with one square alphabet, so the ordinal
    symbols and the discrete values share an alphabet of size
    ``max(dimensions!, base)``. Unused symbols have zero counts and do not
    change the estimate.

    Warning
    -------
    This class is NOT thread-safe. The permutation table itself is read-only
    and can be shared.

    Examples
    --------
    >>> import numpy as np
    >>> calc = SymbolicMutualInfoCalculator()
    >>> calc.initialise(2, 2)
    >>> cont = np.array([[0.0, 1.0], [1.0, 0.0]] * 50)
    >>> disc = np.array([0, 1] * 50)
    >>> calc.set_observations(cont, disc)
    >>> calc.compute_average_local_of_observations()
    1.0
    """

    def __init__(
        self,
        max_dimensions: int = DEFAULT_MAX_DIMENSIONS,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.max_dimensions = max_dimensions
        self.normalise = True
        self.dimensions = None
        self.base = None
        self.table = None
        self._mi_calc = None

    def initialise(self, dimensions: int, base: int):
        """Build the permutation table and a fresh inner MI calculator.

        Parameters
        ----------
        dimensions : int
            Number of continuous dimensions (columns). Must be between 1 and
            ``max_dimensions``.
        base : int
            Alphabet size of the discrete observations.

        Raises
        ------
        ValueError
            If dimensions < 1 or base is not positive.
        AlphabetCapacityError
            If dimensions exceeds ``max_dimensions`` or the joint table of
            ``max(dimensions!, base)`` squared states is too large.

        Notes
        -----
        On error the calculator keeps its previous configuration and
        observations.
        """
        check_integer(base=base)
        check_positive(base=base)
        # Build everything first so a failed call leaves the previous state intact
        table = PermutationTable(
            dimensions, max_dimensions=self.max_dimensions, logger=self.logger
        )
        alphabet_base = max(table.n_permutations, int(base))
        mi_calc = MutualInfoCalculatorDiscrete(alphabet_base, logger=self.logger)
        mi_calc.initialise()

        self.table = table
        self.dimensions = table.dimensions
        self.base = alphabet_base
        self._mi_calc = mi_calc
        self.logger.debug(
            f"Initialised with {self.dimensions} dimensions "
            f"({self.table.n_permutations} ordinal patterns), alphabet base {self.base}"
        )

    def set_property(self, name: str, value: str):
        """Set a string-valued option.

        Recognised options:

        - ``"NORMALISE"``: ``"true"`` or ``"false"`` (case-insensitive).
          Whether each continuous column is standardised before ranking.
          Default ``"true"``.

        Unknown option names are ignored with a warning.

        Raises
        ------
        ValueError
            If the value of a recognised option cannot be parsed.
        """
        if name == PROP_NORMALISE:
            value_str = str(value).strip().lower()
            if value_str not in ("true", "false"):
                raise ValueError(
                    f"{PROP_NORMALISE} must be 'true' or 'false', got {value!r}"
                )
            self.normalise = value_str == "true"
        else:
            self.logger.warning(f"Ignoring unknown property {name!r}")

    def _check_initialised(self):
        if self._mi_calc is None:
            raise RuntimeError("initialise() must be called before use")

    def set_observations(self, continuous_observations, discrete_observations):
        """Add one batch of paired continuous and discrete observations.

        May be called several times; batches accumulate until the next
        :meth:`initialise`.

        Parameters
        ----------
        continuous_observations : array-like of shape (n_timepoints, dimensions)
            Continuous values, one row per time step.
        discrete_observations : array-like of shape (n_timepoints,)
            Integer values in ``[0, base)``.

        Raises
        ------
        ValueError
            If the continuous matrix has the wrong number of columns or
            non-finite values, the discrete series is not 1D, the lengths
            differ, or a discrete value is outside the alphabet.
        """
        self._check_initialised()
        continuous_observations = to_numpy_array(continuous_observations)
        discrete_observations = to_numpy_array(discrete_observations)
        if discrete_observations.ndim != 1:
            raise ValueError(
                f"Discrete observations must be 1D, got shape {discrete_observations.shape}"
            )
        if continuous_observations.ndim != 2:
            raise ValueError(
                "Continuous observations must be 2D (n_timepoints, n_dimensions), "
                f"got shape {continuous_observations.shape}"
            )
        if continuous_observations.shape[0] != discrete_observations.shape[0]:
            raise ValueError(
                f"Continuous observations have {continuous_observations.shape[0]} rows "
                f"but discrete observations have {discrete_observations.shape[0]} values"
            )

        symbols = symbolize(continuous_observations, self.table, normalise=self.normalise)
        self._mi_calc.add_observations(symbols, discrete_observations)

    def compute_average_local_of_observations(self):
        """MI in bits over all observations set since :meth:`initialise`."""
        self._check_initialised()
        return self._mi_calc.compute_average_local_of_observations()

    def compute_local_using_previous_observations(self, continuous_states, discrete_states):
        """Not supported for the symbolic estimator.

        Raises
        ------
        NotImplementedError
            Always.
        """
        raise NotImplementedError("Local method not implemented yet")

    def compute_significance(self, n_trials_or_orderings, seed=None, enable_progressbar=False):
        """Surrogate distribution of the MI under shuffled pairings.

        Parameters
        ----------
        n_trials_or_orderings : int or array-like of shape (n_trials, n_observations)
            Number of random surrogates, or explicit reorderings of the
            observations.
        seed : int, optional
            Random seed for generated orderings.
        enable_progressbar : bool, default=False
            Whether to show a progress bar over trials.

        Returns
        -------
        EmpiricalMeasurementDistribution
            Observed observations are not modified.
        """
        self._check_initialised()
        return self._mi_calc.compute_significance(
            n_trials_or_orderings, seed=seed, enable_progressbar=enable_progressbar
        )

    def get_last_average(self):
        self._check_initialised()
        return self._mi_calc.get_last_average()

    def get_num_observations(self):
        self._check_initialised()
        return self._mi_calc.get_num_observations()
