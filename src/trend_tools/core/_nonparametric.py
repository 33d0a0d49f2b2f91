# src/trend_tools/core/_nonparametric.py

import jax
jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp
import numpy as np
from functools import partial
from itertools import combinations
from typing import Literal, Sequence, Tuple

_UMethod = Literal["direct", "sorted", "vectorized"]

# ────────────────────────────────────────────────────────────────────────────────
# Mann–Whitney kernels: U = #(y > x) + 0.5 * #(y == x) over all (x, y)
# ────────────────────────────────────────────────────────────────────────────────

@jax.jit
def _mann_whitney_u(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """
    One‐sided Mann–Whitney U of ``y`` over ``x`` by direct comparison.

    :param x: 1D observations of the earlier group.
    :param y: 1D observations of the later group.
    :return: scalar U in [0, x.size * y.size]; ties count 0.5.
    """
    wins = jnp.sum(y[None, :] > x[:, None])
    ties = jnp.sum(y[None, :] == x[:, None])
    return wins + 0.5 * ties


@jax.jit
def _mann_whitney_u_sorted(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """
    Same statistic as ``_mann_whitney_u``, counted by binary search on sorted ``y``.
    """
    y_sorted = jnp.sort(y)
    upto = jnp.searchsorted(y_sorted, x, side="right")   # y <= x
    below = jnp.searchsorted(y_sorted, x, side="left")   # y <  x
    wins = jnp.sum(y.size - upto)
    ties = jnp.sum(upto - below)
    return wins + 0.5 * ties


def _masked_pair_u(
    pair: jnp.ndarray,
    values: jnp.ndarray,
    positions: jnp.ndarray,
) -> jnp.ndarray:
    """
    U for one (I, J) position pair, using masks over the full sample.
    """
    in_x = positions == pair[0]
    in_y = positions == pair[1]
    both = in_x[:, None] & in_y[None, :]
    wins = jnp.sum(both & (values[None, :] > values[:, None]))
    ties = jnp.sum(both & (values[None, :] == values[:, None]))
    return wins + 0.5 * ties


@jax.jit
def _pairwise_u_vectorized(
    values: jnp.ndarray,
    positions: jnp.ndarray,
    pairs: jnp.ndarray,
) -> jnp.ndarray:
    """
    All pairwise U statistics in one vmapped kernel.

    Every pair sees N-by-N masks over the full sample: O(P·N²) memory.

    :param values: 1D observations.
    :param positions: 1D 0-based ordering position of each observation.
    :param pairs: (P, 2) int array of position pairs (I, J), I < J.
    :return: 1D array of length P.
    """
    pair_fn = partial(_masked_pair_u, values=values, positions=positions)
    return jax.vmap(pair_fn)(pairs)


# ────────────────────────────────────────────────────────────────────────────────
# Pairwise engine
# ────────────────────────────────────────────────────────────────────────────────

def _position_pairs(k: int) -> np.ndarray:
    """(P, 2) array of 0-based positions (I, J), I < J, in lexicographic order."""
    return np.array(list(combinations(range(k), 2)), dtype=int).reshape(-1, 2)


def _pairwise_u(
    groups: Sequence[jnp.ndarray],
    method: _UMethod = "direct",
) -> Tuple[np.ndarray, jnp.ndarray]:
    """
    Mann–Whitney U for every ordered pair of groups.

    :param groups: groups in comparison order (position 0 first).
    :param method: "direct" (broadcast comparison), "sorted" (binary search)
                   or "vectorized" (one vmapped mask kernel over all pairs).
                   "vectorized" materialises N-by-N masks for every pair, so
                   memory grows as P·N² (N=5000, k=10 is ~1 GB of booleans);
                   prefer "sorted" for large samples.
    :return: (pairs, uxy) where pairs is the (P, 2) array of 0-based
             positions and uxy the matching 1D array of U statistics.
    :raises ValueError: if method is unrecognized.
    """
    pairs = _position_pairs(len(groups))
    if pairs.shape[0] == 0:
        return pairs, jnp.zeros((0,))

    if method == "direct":
        kernel = _mann_whitney_u
    elif method == "sorted":
        kernel = _mann_whitney_u_sorted
    elif method == "vectorized":
        values = jnp.concatenate(groups)
        positions = jnp.repeat(jnp.arange(len(groups)), jnp.array([g.size for g in groups]))
        return pairs, _pairwise_u_vectorized(values, positions, jnp.asarray(pairs))
    else:
        raise ValueError(f"Unknown method: {method}")

    uxy = jnp.stack([kernel(groups[i], groups[j]) for i, j in pairs])
    return pairs, uxy
