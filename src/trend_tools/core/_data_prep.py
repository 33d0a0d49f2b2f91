# src/trend_tools/core/_data_prep.py

import jax
jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp
import pandas as pd
import warnings
from typing import Tuple, List, Dict, Any, Optional, Sequence, Union

from ..exceptions import (
    TrendInputError,
    InvalidObservations,
    InvalidGroupLabels,
    NonConsecutiveGroups,
    InvalidOrderingLength,
    InvalidOrderingValues,
    OrderingNotPermutation,
)

_ScoreLike = Optional[Union[Sequence[int], jnp.ndarray]]


def _validate_and_dropna(
    df: pd.DataFrame,
    columns: List[str]
) -> Tuple[pd.DataFrame, int]:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found")

    initial_n = len(df)
    df_clean = df.dropna(subset=columns)
    n_dropped = initial_n - len(df_clean)
    if n_dropped > 0:
        warnings.warn(
            f"{n_dropped} rows removed due to missing values in columns {columns}",
            UserWarning
        )
    return df_clean, n_dropped


def _df_to_jax(
    df: pd.DataFrame,
    group_col: str,
    value_col: str,
) -> Tuple[jnp.ndarray, Dict[str, Any]]:
    """
    Convert a long‐format DataFrame into the N-by-2 (observation, label) matrix.

    Categorical and string/object group columns are coded 1..k in category
    order; numeric columns are taken as already holding integer labels.

    :param df: DataFrame already cleaned of NAs in the target columns.
    :param group_col: Name of the grouping column.
    :param value_col: Name of the numeric outcome column.
    :return: (x, metadata) where
      - x: float array of shape (N, 2), observations then labels
      - metadata: dict containing the mapping { category: label } (empty
        for numeric group columns)
    """
    for col in (group_col, value_col):
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found")

    mapping: Dict[Any, int] = {}
    column = df[group_col]
    if pd.api.types.is_numeric_dtype(column):
        labels = column.to_numpy(dtype=float)
    else:
        cat = pd.Categorical(column).remove_unused_categories()
        labels = cat.codes + 1
        mapping = {c: i + 1 for i, c in enumerate(cat.categories)}

    values = df[value_col].to_numpy(dtype=float)
    x = jnp.column_stack([jnp.asarray(values), jnp.asarray(labels, dtype=float)])
    return x, {"mapping": mapping}


# ────────────────────────────────────────────────────────────────────────────────
# Checks: each returns None on success, or the failure as an error instance
# ────────────────────────────────────────────────────────────────────────────────

def _check_observations(x: jnp.ndarray) -> Optional[TrendInputError]:
    if x.ndim != 2 or x.shape[1] != 2:
        return InvalidObservations(
            f"Data must be an N-by-2 matrix (observations, group labels); got shape {x.shape}"
        )
    if x.shape[0] == 0:
        return InvalidObservations("Data must contain at least one observation")
    if not bool(jnp.all(jnp.isfinite(x))):
        return InvalidObservations("Observations and group labels must be finite")
    return None


def _check_group_labels(labels: jnp.ndarray) -> Optional[TrendInputError]:
    if not bool(jnp.all(labels == jnp.trunc(labels))):
        return InvalidGroupLabels(
            "All elements of column 2 must be whole numbers (integer group labels)."
        )
    return None


def _check_consecutive(labels: jnp.ndarray) -> Optional[TrendInputError]:
    unique = jnp.unique(labels)
    k = unique.size
    if not (int(unique[0]) == 1 and int(unique[-1]) == k):
        return NonConsecutiveGroups(
            "Group labels in column 2 must be consecutive integers from 1 to k "
            f"without gaps; got {[int(u) for u in unique]}"
        )
    return None


def _check_score(score: jnp.ndarray, k: int) -> Optional[TrendInputError]:
    if score.size != k:
        return InvalidOrderingLength(
            f"Length of score ({score.size}) must match the number of groups (k={k})."
        )
    whole = jnp.all(jnp.isfinite(score)) & jnp.all(score == jnp.trunc(score))
    if not bool(whole & jnp.all((score >= 1) & (score <= k))):
        return InvalidOrderingValues("score must contain integers between 1 and k.")
    if jnp.unique(score).size != k:
        return OrderingNotPermutation(
            "score must be a permutation of 1:k (each group used exactly once)."
        )
    return None


def _validate_inputs(
    x: jnp.ndarray,
    score: _ScoreLike = None,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """
    Run every input check in order and raise the first failure.

    :param x: N-by-2 float array (observations, group labels).
    :param score: optional permutation of 1..k; None or empty means 1..k.
    :return: (values, labels, score) with integer labels and score.
    :raises TrendInputError: the subclass naming the failed precondition.
    """
    failure = _check_observations(x)
    if failure is None:
        failure = _check_group_labels(x[:, 1])
    if failure is None:
        failure = _check_consecutive(x[:, 1])
    if failure is not None:
        raise failure

    values = x[:, 0]
    labels = x[:, 1].astype(int)
    k = int(jnp.max(labels))

    if score is None:
        return values, labels, jnp.arange(1, k + 1)
    try:
        score_arr = jnp.ravel(jnp.asarray(score, dtype=jnp.float64))
    except (TypeError, ValueError) as err:
        raise InvalidOrderingValues("score must contain integers between 1 and k.") from err
    if score_arr.size == 0:
        return values, labels, jnp.arange(1, k + 1)

    failure = _check_score(score_arr, k)
    if failure is not None:
        raise failure
    return values, labels, score_arr.astype(int)


def _partition_groups(
    values: jnp.ndarray,
    labels: jnp.ndarray,
    score: jnp.ndarray,
) -> Tuple[jnp.ndarray, ...]:
    """
    Split observations into groups ordered by ``score``.

    Position I of the result holds the observations labelled ``score[I]``.
    Inputs are assumed to have passed ``_validate_inputs``.
    """
    return tuple(values[labels == int(g)] for g in score)
