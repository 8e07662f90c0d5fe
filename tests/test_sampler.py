"""Tests for mc_frontier.core.sampler -- random budget-constrained weights."""

import numpy as np
import pytest

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.sampler import WeightSampler, normalize_weights, sample_weights

EPS = 1e-9


# ---------------------------------------------------------------------------
# Tests for the budget constraint
# ---------------------------------------------------------------------------

class TestBudgetConstraint:

    @pytest.mark.parametrize("allow_short", [False, True])
    @pytest.mark.parametrize("n", [1, 2, 5, 20])
    def test_weights_sum_to_one(self, n, allow_short):
        sampler = WeightSampler(seed=123)
        for _ in range(500):
            w = sampler.sample_weights(n, allow_short)
            assert len(w) == n
            assert abs(w.sum() - 1.0) < EPS * max(1.0, np.abs(w).sum())

    def test_long_only_weights_non_negative(self):
        sampler = WeightSampler(seed=5)
        for _ in range(1000):
            assert np.all(sampler.sample_weights(6, allow_short=False) >= 0)

    def test_single_asset_is_fully_invested(self):
        w = WeightSampler(seed=1).sample_weights(1)
        np.testing.assert_allclose(w, [1.0])

    def test_short_allows_negative_weights(self):
        sampler = WeightSampler(seed=11)
        draws = np.array([sampler.sample_weights(4, allow_short=True) for _ in range(500)])
        assert np.any(draws < 0)


# ---------------------------------------------------------------------------
# Tests for pre-normalization draw ranges
# ---------------------------------------------------------------------------

class TestRawDraws:

    def test_long_only_draws_in_unit_interval(self):
        sampler = WeightSampler(seed=3)
        draws = np.concatenate([sampler.raw_draws(10, False) for _ in range(2000)])
        assert draws.min() >= 0.0
        assert draws.max() < 1.0
        # Uniform(0,1) mean should be near 0.5
        assert draws.mean() == pytest.approx(0.5, abs=0.02)

    def test_short_draws_in_symmetric_interval(self):
        sampler = WeightSampler(seed=3)
        draws = np.concatenate([sampler.raw_draws(10, True) for _ in range(2000)])
        assert draws.min() >= -1.0
        assert draws.max() < 1.0
        assert draws.min() < -0.9
        assert draws.mean() == pytest.approx(0.0, abs=0.03)


# ---------------------------------------------------------------------------
# Tests for normalization and reproducibility
# ---------------------------------------------------------------------------

class TestNormalization:

    def test_zero_sum_is_treated_as_one(self):
        raw = np.array([0.5, -0.5])
        np.testing.assert_array_equal(normalize_weights(raw), raw)

    def test_normalize_scales_by_sum(self):
        np.testing.assert_allclose(normalize_weights([1.0, 3.0]), [0.25, 0.75])


class TestReproducibility:

    def test_same_seed_same_weights(self):
        a = WeightSampler(seed=99)
        b = WeightSampler(seed=99)
        for _ in range(10):
            np.testing.assert_array_equal(a.sample_weights(4), b.sample_weights(4))

    def test_accepts_existing_generator(self):
        rng = np.random.default_rng(0)
        w = sample_weights(3, rng=rng)
        expected = np.random.default_rng(0).random(3)
        np.testing.assert_allclose(w, expected / expected.sum())

    @pytest.mark.parametrize("n", [0, -2, 2.5])
    def test_invalid_asset_count_raises(self, n):
        with pytest.raises(InvalidInputError):
            WeightSampler(seed=0).sample_weights(n)
