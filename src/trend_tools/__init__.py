# src/trend_tools/__init__.py

"""
trend_tools
===========

Nonparametric trend testing across k ordered, independent groups.
Features:

- Jonckheere–Terpstra statistic from all pairwise Mann–Whitney U's, ties
  counted as half wins
- Large‐sample normal approximation for the one‐tailed (right) p-value
- Matrix (observation, label) and long‐format pandas DataFrame inputs
- Interchangeable JAX kernels: direct comparison, sorted counting, vmapped masks
"""

__version__ = "0.1.0"

# High-level API
from .api import jonckheere_terpstra, trend_test

# Result classes
from .results import PairResult, TrendTestResult

# Errors
from .exceptions import (
    TrendTestError,
    TrendInputError,
    InvalidObservations,
    InvalidGroupLabels,
    NonConsecutiveGroups,
    InvalidOrderingLength,
    InvalidOrderingValues,
    OrderingNotPermutation,
    DegenerateVariance,
)

__all__ = [
    "jonckheere_terpstra",
    "trend_test",
    "PairResult",
    "TrendTestResult",
    "TrendTestError",
    "TrendInputError",
    "InvalidObservations",
    "InvalidGroupLabels",
    "NonConsecutiveGroups",
    "InvalidOrderingLength",
    "InvalidOrderingValues",
    "OrderingNotPermutation",
    "DegenerateVariance",
]
