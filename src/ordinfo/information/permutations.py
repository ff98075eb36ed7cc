"""
Enumeration of ordinal patterns and their dense integer alphabet.

A permutation of ``d`` items is encoded as a base-``d`` number (its
permutation id, range ``[0, d**d)``). Only ``d!`` ids correspond to real
permutations; each of them is mapped to a dense permutation index in
``[0, d!)`` which is the symbol used by the discrete estimators.
"""

import itertools
import logging
from typing import Optional, Sequence

import numpy as np

from .errors import AlphabetCapacityError, PermutationEncodingError
from ..utils.data import check_integer

# d**d table entries: 6 -> 46656, 7 -> 823543, 8 -> 16777216
DEFAULT_MAX_DIMENSIONS = 6

INVALID_INDEX = -1


class PermutationTable:
    """All orderings of ``d`` items and the id -> index bijection between them.

    Parameters
    ----------
    dimensions : int
        Number of items ``d`` being ordered. Must be >= 1.
    max_dimensions : int, optional
        Largest ``d`` accepted. The id table has ``d**d`` entries, so this
        guards against intractable allocations. Default: DEFAULT_MAX_DIMENSIONS.
    logger : logging.Logger, optional
        Logger for debug messages. If None, a class-named logger is used.

    Attributes
    ----------
    dimensions : int
        Number of ordered items ``d``.
    permutations : ndarray of shape (d!, d)
        All distinct permutations of ``range(d)`` in lexicographic order.
        Row ``i`` is the permutation with index ``i``. Read-only.
    permutation_ids : ndarray of shape (d!,)
        Base-``d`` id of every permutation, in index order. Read-only.
    n_permutations : int
        ``d!``.
    table_size : int
        ``d**d``, the length of the id -> index table.

    Raises
    ------
    TypeError
        If dimensions is not an integer.
    ValueError
        If dimensions < 1.
    AlphabetCapacityError
        If dimensions > max_dimensions.

    Notes
    -----
    The table is built once and never modified afterwards, so a single
    instance can be shared between any number of readers.

    Examples
    --------
    >>> table = PermutationTable(3)
    >>> table.n_permutations
    6
    >>> table.permutation_id([2, 0, 1])
    19
    >>> table.lookup(19)
    4
    >>> table.lookup(0) is None
    True
    """

    def __init__(
        self,
        dimensions: int,
        max_dimensions: int = DEFAULT_MAX_DIMENSIONS,
        logger: Optional[logging.Logger] = None,
    ):
        check_integer(dimensions=dimensions, max_dimensions=max_dimensions)
        if dimensions < 1:
            raise ValueError(f"dimensions must be at least 1, got {dimensions}")
        if dimensions > max_dimensions:
            raise AlphabetCapacityError(
                f"dimensions={dimensions} needs a table of {dimensions}**{dimensions} "
                f"entries; the configured maximum is {max_dimensions} dimensions"
            )

        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.dimensions = int(dimensions)
        self.table_size = self.dimensions ** self.dimensions

        self.permutations = np.array(
            list(itertools.permutations(range(self.dimensions))), dtype=np.int64
        ).reshape(-1, self.dimensions)
        self.n_permutations = self.permutations.shape[0]
        self.permutation_ids = self.encode(self.permutations)

        self._id_to_index = np.full(self.table_size, INVALID_INDEX, dtype=np.int64)
        self._id_to_index[self.permutation_ids] = np.arange(self.n_permutations)

        self.permutations.setflags(write=False)
        self.permutation_ids.setflags(write=False)
        self._id_to_index.setflags(write=False)

        self.logger.debug(
            f"Built permutation table: d={self.dimensions}, "
            f"{self.n_permutations} permutations, {self.table_size} ids"
        )

    @classmethod
    def build(cls, dimensions, **kwargs):
        """Build the table for ``dimensions`` items (alias of the constructor)."""
        return cls(dimensions, **kwargs)

    def __len__(self):
        return self.n_permutations

    def __repr__(self):
        return f"PermutationTable(dimensions={self.dimensions})"

    @property
    def n_valid_entries(self):
        """Number of table entries that map to a permutation index."""
        return int(np.count_nonzero(self._id_to_index != INVALID_INDEX))

    def permutation_id(self, permutation: Sequence[int]) -> int:
        """Encode one permutation as a base-``d`` number.

        The digit at position ``c`` is the permutation's value at ``c``,
        most significant first. The sequence is not checked to be a valid
        permutation.
        """
        if len(permutation) != self.dimensions:
            raise ValueError(
                f"Permutation must have {self.dimensions} elements, got {len(permutation)}"
            )
        perm_id = 0
        for digit in permutation:
            perm_id = perm_id * self.dimensions + int(digit)
        return perm_id

    def encode(self, permutations):
        """Vectorised :meth:`permutation_id` over the rows of an ``(n, d)`` array."""
        permutations = np.asarray(permutations, dtype=np.int64)
        if permutations.ndim != 2 or permutations.shape[1] != self.dimensions:
            raise ValueError(
                f"Expected array of shape (n, {self.dimensions}), got {permutations.shape}"
            )
        weights = self.dimensions ** np.arange(self.dimensions - 1, -1, -1, dtype=np.int64)
        return permutations @ weights

    def lookup(self, permutation_id: int) -> Optional[int]:
        """Return the permutation index for ``permutation_id``.

        Returns
        -------
        int or None
            Dense index in ``[0, d!)``, or None if the id does not encode a
            permutation of ``range(d)`` (including ids outside ``[0, d**d)``).
        """
        if not 0 <= permutation_id < self.table_size:
            return None
        index = int(self._id_to_index[permutation_id])
        if index == INVALID_INDEX:
            return None
        return index

    def index_of(self, permutation_ids):
        """Map an array of permutation ids to permutation indices.

        Raises
        ------
        PermutationEncodingError
            If any id does not encode a permutation. This signals a defect in
            the code that produced the ids.
        """
        permutation_ids = np.asarray(permutation_ids, dtype=np.int64)
        in_range = (permutation_ids >= 0) & (permutation_ids < self.table_size)
        if not np.all(in_range):
            bad = permutation_ids[~in_range][0]
            raise PermutationEncodingError(
                f"Permutation id {bad} is outside [0, {self.table_size})"
            )

        indices = self._id_to_index[permutation_ids]
        invalid = indices == INVALID_INDEX
        if np.any(invalid):
            bad = permutation_ids[invalid][0]
            raise PermutationEncodingError(
                f"Permutation id {bad} does not correspond to any permutation of "
                f"{self.dimensions} items"
            )
        return indices

    def permutation(self, index: int):
        """Return the permutation (as a tuple) with dense index ``index``."""
        return tuple(int(v) for v in self.permutations[index])
