import numpy as np
import pytest

from newman_ziff import (
    find_cpu,
    seed_numba,
    simulate_thresholds,
    threshold_trial_cpu,
    threshold_trials_cpu,
    union_weighted_cpu,
    warm_up,
)


def test_array_union_find_matches_weighting_rule():
    parent = np.arange(4, dtype=np.int64)
    size = np.ones(4, dtype=np.int64)

    union_weighted_cpu(parent, size, 0, 1)
    assert find_cpu(parent, 0) == 1
    assert size[1] == 2

    union_weighted_cpu(parent, size, 1, 3)
    assert find_cpu(parent, 3) == 1
    assert size[1] == 3

    # already joined
    union_weighted_cpu(parent, size, 3, 0)
    assert size[1] == 3
    assert find_cpu(parent, 2) == 2


def test_single_site_percolates_immediately():
    assert threshold_trial_cpu(1) == 1.0
    assert list(simulate_thresholds(1, 3)) == [1.0, 1.0, 1.0]


def test_threshold_sanity_on_100_grid():
    results = simulate_thresholds(100, 100, seed=2024)
    mean = results.mean()
    sigma = results.std(ddof=1)
    assert 0.55 <= mean <= 0.63
    assert 0.0 <= sigma <= 0.1


def test_seed_reproduces_results():
    first = simulate_thresholds(25, 10, seed=5)
    second = simulate_thresholds(25, 10, seed=5)
    assert first.dtype == np.float64
    assert np.array_equal(first, second)


def test_results_are_whole_site_fractions():
    n = 8
    results = simulate_thresholds(n, 20, seed=3)
    opened = results * n * n
    assert np.allclose(opened, np.round(opened))
    assert np.all(results >= n / (n * n))
    assert np.all(results <= 1.0)


@pytest.mark.parametrize("n,trials", [(0, 1), (1, 0), (-5, 2)])
def test_non_positive_arguments(n, trials):
    with pytest.raises(ValueError):
        simulate_thresholds(n, trials)


@pytest.mark.parametrize("seed", [-1, 2**32])
def test_seed_out_of_range(seed):
    with pytest.raises(ValueError):
        simulate_thresholds(5, 5, seed=seed)


def test_warm_up_compiles_without_touching_the_rng():
    warm_up()
    assert threshold_trials_cpu.signatures
    assert seed_numba.signatures

    seed_numba(17)
    expected = threshold_trials_cpu(12, 4)
    seed_numba(17)
    warm_up()
    assert np.array_equal(threshold_trials_cpu(12, 4), expected)
