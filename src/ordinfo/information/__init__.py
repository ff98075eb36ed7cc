"""
Information theory estimators for ordinfo.

This module provides plug-in estimators of mutual information, predictive
information and active information storage on discrete series, ordinal
pattern symbolisation of continuous multivariate series, and surrogate
significance testing.
"""

# Permutation alphabet
from .permutations import (
    PermutationTable,
    DEFAULT_MAX_DIMENSIONS,
)

# Ordinal symbolisation
from .ordinal import (
    ordinal_patterns,
    symbolize,
)

# Discrete estimators
from .discrete import (
    DiscreteInfoCalculator,
    MutualInfoCalculatorDiscrete,
    PredictiveInfoCalculatorDiscrete,
    ActiveInfoCalculatorDiscrete,
    mi_from_counts,
    MAX_JOINT_STATES,
)

# Significance testing
from .significance import (
    EmpiricalMeasurementDistribution,
    compute_significance,
    generate_surrogate_orderings,
)

# Continuous-discrete symbolic MI
from .symbolic import SymbolicMutualInfoCalculator

# Errors
from .errors import (
    PermutationEncodingError,
    AlphabetCapacityError,
)

__all__ = [
    # Permutations
    "PermutationTable",
    "DEFAULT_MAX_DIMENSIONS",
    # Ordinal
    "ordinal_patterns",
    "symbolize",
    # Discrete
    "DiscreteInfoCalculator",
    "MutualInfoCalculatorDiscrete",
    "PredictiveInfoCalculatorDiscrete",
    "ActiveInfoCalculatorDiscrete",
    "mi_from_counts",
    "MAX_JOINT_STATES",
    # Significance
    "EmpiricalMeasurementDistribution",
    "compute_significance",
    "generate_surrogate_orderings",
    # Symbolic
    "SymbolicMutualInfoCalculator",
    # Errors
    "PermutationEncodingError",
    "AlphabetCapacityError",
]
