import numpy as np
import pytest

import jax.numpy as jnp
from scipy.stats import mannwhitneyu
from trend_tools.core._nonparametric import (
    _mann_whitney_u,
    _mann_whitney_u_sorted,
    _pairwise_u,
)

KERNELS = [_mann_whitney_u, _mann_whitney_u_sorted]


def _metastasis_groups(metastasis):
    return tuple(
        jnp.array(metastasis[metastasis[:, 1] == g, 0]) for g in range(1, 6)
    )


@pytest.mark.parametrize("kernel", KERNELS)
@pytest.mark.parametrize("sizes", [(10, 10), (5, 7), (1, 4)])
def test_u_against_scipy_with_ties(kernel, sizes):
    nx, ny = sizes
    rng = np.random.RandomState(0)
    # small integer range forces ties
    x = rng.randint(0, 5, size=nx).astype(float)
    y = rng.randint(0, 5, size=ny).astype(float)
    u = float(kernel(jnp.array(x), jnp.array(y)))
    # scipy's U for its first sample counts wins of that sample, ties 0.5
    u_ref = mannwhitneyu(y, x, alternative="two-sided").statistic
    assert u == pytest.approx(u_ref, abs=1e-12)


@pytest.mark.parametrize("kernel", KERNELS)
def test_u_perfect_separation(kernel):
    x = jnp.array([1.0, 2.0])
    y = jnp.array([3.0, 4.0, 5.0])
    assert float(kernel(x, y)) == 6.0
    assert float(kernel(y, x)) == 0.0


@pytest.mark.parametrize("kernel", KERNELS)
def test_u_all_equal_is_half_of_product(kernel):
    x = jnp.full(4, 5.0)
    y = jnp.full(3, 5.0)
    assert float(kernel(x, y)) == 6.0


@pytest.mark.parametrize("kernel", KERNELS)
def test_u_identical_multisets_is_half_of_product(kernel):
    x = jnp.array([1.0, 2.0, 2.0, 3.0, 7.0])
    assert float(kernel(x, x[::-1])) == pytest.approx(12.5, abs=1e-12)


def test_u_single_observation_groups():
    assert float(_mann_whitney_u(jnp.array([1.0]), jnp.array([2.0]))) == 1.0
    assert float(_mann_whitney_u(jnp.array([2.0]), jnp.array([2.0]))) == 0.5


def test_sorted_kernel_matches_direct():
    rng = np.random.RandomState(7)
    for _ in range(5):
        x = jnp.array(rng.randint(0, 20, size=rng.randint(1, 30)).astype(float))
        y = jnp.array(rng.randint(0, 20, size=rng.randint(1, 30)).astype(float))
        assert float(_mann_whitney_u_sorted(x, y)) == float(_mann_whitney_u(x, y))


@pytest.mark.parametrize("method", ["direct", "sorted", "vectorized"])
def test_pairwise_u_reference_scenario(metastasis, metastasis_uxy, method):
    pairs, uxy = _pairwise_u(_metastasis_groups(metastasis), method=method)
    labels = [f"{i + 1}-{j + 1}" for i, j in pairs]
    assert labels == list(metastasis_uxy)
    assert np.allclose(np.array(uxy), list(metastasis_uxy.values()), rtol=0, atol=1e-12)


@pytest.mark.parametrize("method", ["direct", "sorted", "vectorized"])
def test_pairwise_u_bounds(method):
    rng = np.random.RandomState(3)
    groups = tuple(
        jnp.array(rng.randint(0, 6, size=n).astype(float)) for n in (4, 1, 6, 3)
    )
    pairs, uxy = _pairwise_u(groups, method=method)
    for (i, j), u in zip(pairs, np.array(uxy)):
        assert 0.0 <= u <= groups[i].size * groups[j].size
        # ties only ever add half-integers
        assert (2 * u) == int(2 * u)


def test_pairwise_u_invariant_to_within_group_order(metastasis):
    groups = _metastasis_groups(metastasis)
    rng = np.random.RandomState(11)
    shuffled = tuple(jnp.array(rng.permutation(np.array(g))) for g in groups)
    _, u_ref = _pairwise_u(groups)
    _, u_shuf = _pairwise_u(shuffled)
    assert np.array_equal(np.array(u_ref), np.array(u_shuf))


def test_pairwise_u_single_group_has_no_pairs():
    pairs, uxy = _pairwise_u((jnp.array([1.0, 2.0]),))
    assert pairs.shape == (0, 2)
    assert uxy.size == 0


def test_pairwise_u_unknown_method():
    with pytest.raises(ValueError):
        _pairwise_u((jnp.array([1.0]), jnp.array([2.0])), method="exact")
