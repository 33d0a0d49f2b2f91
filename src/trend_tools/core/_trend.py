# src/trend_tools/core/_trend.py

import jax
jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp
from jax.scipy.stats import norm
from typing import Tuple

from ..exceptions import DegenerateVariance


@jax.jit
def _jt_null_moments(sizes: jnp.ndarray) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Mean and variance of the U-sum under the null hypothesis of no trend.

    :param sizes: 1D array of group sizes n_g.
    :return: (mean_U, var_U) with
      mean_U = (N² - Σ n_g²) / 4
      var_U  = (N²(2N+3) - Σ n_g²(2n_g+3)) / 72
    """
    n_g = sizes.astype(jnp.float64)
    n = jnp.sum(n_g)
    n2 = n ** 2
    mean_u = (n2 - jnp.sum(n_g ** 2)) / 4.0
    var_u = (n2 * (2.0 * n + 3.0) - jnp.sum(n_g ** 2 * (2.0 * n_g + 3.0))) / 72.0
    return mean_u, var_u


def _jt_statistic(u_sum: float, sizes: jnp.ndarray) -> float:
    """
    Normalised Jonckheere–Terpstra statistic |(Ut - mean_U) / sqrt(var_U)|.

    The magnitude is reported, so a strong trend against the supplied
    ordering scores the same as one along it.

    :param u_sum: sum of all pairwise U statistics.
    :param sizes: 1D array of group sizes.
    :return: JT ≥ 0.
    :raises DegenerateVariance: if var_U is not a positive finite number.
    """
    mean_u, var_u = _jt_null_moments(jnp.asarray(sizes))
    var_u = float(var_u)
    if not (var_u > 0.0 and jnp.isfinite(var_u)):
        raise DegenerateVariance(
            f"Null variance of the U-sum is {var_u}; at least two non-empty groups are required"
        )
    return float(jnp.abs((u_sum - mean_u) / jnp.sqrt(var_u)))


@jax.jit
def _right_tail_pvalue(jt: jnp.ndarray) -> jnp.ndarray:
    """
    One‐tailed (right) p-value from the standard normal approximation.

    :param jt: JT statistic(s).
    :return: 1 - Φ(jt), in [0, 1].
    """
    return 1.0 - norm.cdf(jt)
