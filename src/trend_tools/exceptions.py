# src/trend_tools/exceptions.py

"""
Error taxonomy for the Jonckheere–Terpstra test.

Input errors derive from ``ValueError`` so existing ``except ValueError``
handlers keep working; ``DegenerateVariance`` is an arithmetic defect.
"""


class TrendTestError(Exception):
    """Base class for every error raised by trend_tools."""


class TrendInputError(TrendTestError, ValueError):
    """Malformed input rejected before any computation runs."""


class InvalidObservations(TrendInputError):
    """Data is not a non-empty, finite N-by-2 matrix."""


class InvalidGroupLabels(TrendInputError):
    """Group labels are not whole numbers."""


class NonConsecutiveGroups(TrendInputError):
    """Group labels are not exactly 1..k without gaps."""


class InvalidOrderingLength(TrendInputError):
    """Score length differs from the number of groups."""


class InvalidOrderingValues(TrendInputError):
    """Score contains values outside the integers 1..k."""


class OrderingNotPermutation(TrendInputError):
    """Score repeats a group, so it is not a permutation of 1..k."""


class DegenerateVariance(TrendTestError, ArithmeticError):
    """Null variance of the U-sum is not strictly positive (e.g. k = 1)."""
