"""Tests for mc_frontier.core.statistics -- mean, sample std, covariance, annualization."""

import numpy as np
import pandas as pd
import pytest

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.statistics import (
    TRADING_DAYS_PER_YEAR,
    annualized_statistics,
    as_return_array,
    covariance,
    mean,
    sample_std,
)


# ---------------------------------------------------------------------------
# Tests for mean and sample_std
# ---------------------------------------------------------------------------

class TestMeanAndStd:

    def test_mean_known_series(self):
        assert mean([0.01, 0.02, 0.015]) == pytest.approx(0.015)

    def test_sample_std_known_series(self):
        assert sample_std([0.01, 0.02, 0.015]) == pytest.approx(0.005)

    def test_sample_std_uses_n_minus_1(self):
        # Population std of [1, 3] is 1.0, sample std is sqrt(2)
        assert sample_std([1.0, 3.0]) == pytest.approx(np.sqrt(2.0))

    def test_mean_empty_raises(self):
        with pytest.raises(InvalidInputError, match="non-empty"):
            mean([])

    def test_sample_std_single_value_raises(self):
        with pytest.raises(InvalidInputError, match="at least 2"):
            sample_std([0.01])

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            mean([])


# ---------------------------------------------------------------------------
# Tests for as_return_array validation
# ---------------------------------------------------------------------------

class TestReturnMatrixValidation:

    def test_dataframe_keeps_tickers(self, two_asset_returns):
        data, tickers = as_return_array(two_asset_returns)
        assert tickers == ["A", "B"]
        assert data.shape == (3, 2)

    def test_explicit_tickers_override(self, two_asset_returns):
        _, tickers = as_return_array(two_asset_returns, ["X", "Y"])
        assert tickers == ["X", "Y"]

    def test_mapping_of_series(self):
        data, tickers = as_return_array({"A": [0.01, 0.02], "B": [0.03, 0.04]})
        assert tickers == ["A", "B"]
        np.testing.assert_allclose(data[:, 1], [0.03, 0.04])

    def test_default_tickers_for_arrays(self):
        _, tickers = as_return_array(np.zeros((5, 3)))
        assert tickers == ["Asset_1", "Asset_2", "Asset_3"]

    def test_one_dimensional_is_single_asset(self):
        data, _ = as_return_array([0.01, 0.02, 0.03])
        assert data.shape == (3, 1)

    def test_mismatched_lengths_raise(self):
        with pytest.raises(InvalidInputError, match="equal length"):
            as_return_array({"A": [0.01, 0.02, 0.03], "B": [0.01, 0.02]})

    def test_non_numeric_dataframe_column_names_the_column(self):
        df = pd.DataFrame({"Day": ["2024-01-01", "2024-01-02"], "A": [0.01, 0.02]})
        with pytest.raises(InvalidInputError, match=r"non-numeric columns \['Day'\]"):
            as_return_array(df)

    def test_zero_assets_raise(self):
        with pytest.raises(InvalidInputError, match="at least 1 asset"):
            as_return_array({})

    def test_single_period_raises(self):
        with pytest.raises(InvalidInputError, match="at least 2 periods"):
            as_return_array(pd.DataFrame({"A": [0.01], "B": [0.02]}))

    def test_ticker_count_mismatch_reports_shape(self, two_asset_returns):
        with pytest.raises(InvalidInputError, match="Expected 2 tickers for a 3x2"):
            as_return_array(two_asset_returns, ["ONLY"])

    def test_input_is_not_mutated(self, two_asset_returns):
        before = two_asset_returns.copy()
        data, _ = as_return_array(two_asset_returns)
        data[:] = 0.0
        pd.testing.assert_frame_equal(two_asset_returns, before)


# ---------------------------------------------------------------------------
# Tests for covariance
# ---------------------------------------------------------------------------

class TestCovariance:

    def test_matches_numpy_sample_covariance(self, daily_returns):
        expected = np.cov(daily_returns.values, rowvar=False, ddof=1)
        np.testing.assert_allclose(covariance(daily_returns), expected, rtol=1e-10)

    def test_exactly_symmetric(self, daily_returns):
        cov = covariance(daily_returns)
        n = cov.shape[0]
        for i in range(n):
            for j in range(n):
                assert cov[i, j] == cov[j, i]

    def test_diagonal_non_negative(self, daily_returns):
        assert np.all(np.diag(covariance(daily_returns)) >= 0)

    def test_two_asset_scenario(self, two_asset_returns):
        cov = covariance(two_asset_returns)
        assert cov[0, 0] == pytest.approx(0.005 ** 2)
        # A deviations: -0.005, 0.005, 0; B deviations: 0, -0.01, 0.01
        assert cov[0, 1] == pytest.approx((-0.005 * 0.01) / 2)

    def test_single_asset_shape(self):
        cov = covariance([0.01, 0.03, 0.02])
        assert cov.shape == (1, 1)
        assert cov[0, 0] == pytest.approx(0.0001)


# ---------------------------------------------------------------------------
# Tests for annualized_statistics
# ---------------------------------------------------------------------------

class TestAnnualization:

    def test_scales_by_trading_days(self, daily_returns):
        er, cov = annualized_statistics(daily_returns)
        np.testing.assert_allclose(er, daily_returns.mean().values * TRADING_DAYS_PER_YEAR)
        np.testing.assert_allclose(cov, covariance(daily_returns) * TRADING_DAYS_PER_YEAR)

    def test_custom_periods_per_year(self, two_asset_returns):
        er, _ = annualized_statistics(two_asset_returns, periods_per_year=12)
        assert er[0] == pytest.approx(0.015 * 12)
