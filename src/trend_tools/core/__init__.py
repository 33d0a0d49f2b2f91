"""
trend_tools.core
----------------
Core kernels for the Jonckheere–Terpstra trend test.

Submodules:
  - _data_prep      : input checks, DataFrame→JAX conversion, group partitioning
  - _nonparametric  : pairwise Mann–Whitney U kernels (direct, sorted, vectorized)
  - _trend          : null moments, normalised JT statistic, right‐tail p-value
"""

__all__ = [
    # submodules
    "_data_prep",
    "_nonparametric",
    "_trend",
]

# re-export key functions for convenient import
from ._data_prep       import _validate_and_dropna, _df_to_jax, _validate_inputs, \
                              _partition_groups
from ._nonparametric   import _mann_whitney_u, _mann_whitney_u_sorted, \
                              _pairwise_u_vectorized, _pairwise_u
from ._trend           import _jt_null_moments, _jt_statistic, _right_tail_pvalue
