"""Exceptions raised by the information estimators."""


class PermutationEncodingError(RuntimeError):
    """A permutation id resolved to no permutation index.

    Raised when a value sequence that is not a true permutation of
    ``0..d-1`` reaches the id-to-index table. This is always a defect in
    enumeration or symbolisation, never a recoverable input condition.
    """


class AlphabetCapacityError(ValueError):
    """A lookup or count table would be too large to allocate."""
