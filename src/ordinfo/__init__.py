"""
ordinfo - Ordinal-pattern and discrete information dynamics

Plug-in estimators of mutual information, predictive information and active
information storage for discrete time series, ordinal-pattern symbolisation
of multivariate continuous series, and surrogate-based significance tests.
"""

__version__ = "0.1.0"

# Core modules
from . import information
from . import utils

# Key classes
from .information import (
    PermutationTable,
    SymbolicMutualInfoCalculator,
    MutualInfoCalculatorDiscrete,
    PredictiveInfoCalculatorDiscrete,
    ActiveInfoCalculatorDiscrete,
    EmpiricalMeasurementDistribution,
)

# Common functions
from .information import (
    symbolize,
    compute_significance,
)

__all__ = [
    # Version
    "__version__",
    # Modules
    "information",
    "utils",
    # Core classes
    "PermutationTable",
    "SymbolicMutualInfoCalculator",
    "MutualInfoCalculatorDiscrete",
    "PredictiveInfoCalculatorDiscrete",
    "ActiveInfoCalculatorDiscrete",
    "EmpiricalMeasurementDistribution",
    # Functions
    "symbolize",
    "compute_significance",
]
