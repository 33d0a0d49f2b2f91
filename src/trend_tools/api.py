# src/trend_tools/api.py

from dataclasses import replace
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd
import jax.numpy as jnp

from .core._data_prep import (
    _validate_and_dropna,
    _df_to_jax,
    _validate_inputs,
    _partition_groups,
)
from .core._nonparametric import _pairwise_u, _UMethod
from .core._trend import _jt_statistic, _right_tail_pvalue
from .results import PairResult, TrendTestResult
from .exceptions import InvalidObservations

_ArrayLike = Union[np.ndarray, jnp.ndarray, Sequence[Sequence[float]]]


def jonckheere_terpstra(
    x: _ArrayLike,
    score: Optional[Sequence[int]] = None,
    method: _UMethod = "direct",
    display: bool = False,
) -> TrendTestResult:
    """
    Jonckheere–Terpstra test for a monotonic trend across k ordered groups.

    :param x: N-by-2 matrix; column 0 holds observations, column 1 integer
              group labels which must be consecutive 1..k.
    :param score: order in which groups are compared, a permutation of 1..k.
                  None (or empty) uses the natural order 1..k.
    :param method: pairwise U kernel: "direct", "sorted" or "vectorized".
    :param display: print the pairwise and summary tables.
    :return: TrendTestResult with pairwise U's, Uxy_sum, JT and the
             right-tail p-value.
    :raises TrendInputError: if the data or score are malformed.
    :raises DegenerateVariance: if fewer than two groups are present.
    """
    # 1. validate
    try:
        x_jax = jnp.asarray(x, dtype=jnp.float64)
    except (TypeError, ValueError) as err:
        raise InvalidObservations(
            "Data must be a numeric N-by-2 matrix (observations, group labels)"
        ) from err
    values, labels, order = _validate_inputs(x_jax, score)
    # 2. partition into groups by position
    groups = _partition_groups(values, labels, order)
    sizes = jnp.array([g.size for g in groups])
    # 3. pairwise U statistics
    pairs, uxy = _pairwise_u(groups, method=method)
    pair_results = tuple(
        PairResult(
            comparison=f"{i + 1}-{j + 1}",
            nx=int(sizes[i]),
            ny=int(sizes[j]),
            uxy=float(u),
        )
        for (i, j), u in zip(pairs, uxy)
    )
    # 4. aggregate and p-value
    u_sum = float(jnp.sum(uxy))
    jt = _jt_statistic(u_sum, sizes)
    p_val = float(_right_tail_pvalue(jt))
    # 5. assemble result
    result = TrendTestResult(
        pairs=pair_results,
        uxy_sum=u_sum,
        jt=jt,
        p_value=p_val,
        tail="right",
        metadata={
            "k": len(groups),
            "n": int(jnp.sum(sizes)),
            "group_sizes": [int(s) for s in sizes],
            "score": [int(s) for s in order],
            "method": method,
        },
    )
    if display:
        print(result.summary())
    return result


def trend_test(
    df: pd.DataFrame,
    measure: str,
    group: str,
    score: Optional[Sequence[int]] = None,
    method: _UMethod = "direct",
    display: bool = False,
) -> TrendTestResult:
    """
    Jonckheere–Terpstra test on a long‐format DataFrame.

    :param df: long‐format DataFrame.
    :param measure: name of the outcome column.
    :param group: name of the grouping column; categorical columns are coded
                  1..k in category order, numeric columns must already hold
                  labels 1..k.
    :param score: optional permutation of 1..k giving the comparison order.
    :param method: pairwise U kernel: "direct", "sorted" or "vectorized".
    :param display: print the pairwise and summary tables.
    :return: TrendTestResult; metadata also records the columns used, the
             label mapping and the number of rows dropped.
    :raises ValueError: if a column is missing or inputs are invalid.
    """
    df_clean, n_dropped = _validate_and_dropna(df, [measure, group])
    x, metadata = _df_to_jax(df_clean, group_col=group, value_col=measure)
    result = jonckheere_terpstra(x, score=score, method=method, display=display)
    return replace(result, metadata={
        **result.metadata,
        **metadata,
        "measure": measure,
        "group": group,
        "n_dropped": n_dropped,
    })
