"""Tests for mc_frontier.core.loader -- file loading, price detection, demo data."""

import numpy as np
import pandas as pd
import pytest

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.loader import DEMO_TICKERS, DataLoader, generate_demo_returns


# ---------------------------------------------------------------------------
# Tests for price vs return detection
# ---------------------------------------------------------------------------

class TestToReturnMatrix:

    def test_prices_converted_to_log_returns(self, price_frame):
        loader = DataLoader()
        returns = loader.to_return_matrix(price_frame)

        assert loader.data_type == "prices"
        assert list(returns.columns) == ["SPY", "TLT"]
        assert len(returns) == len(price_frame) - 1
        expected = np.log(price_frame["SPY"].values[1:] / price_frame["SPY"].values[:-1])
        np.testing.assert_allclose(returns["SPY"].values, expected)

    def test_returns_used_directly(self):
        df = pd.DataFrame({
            "Date": ["2024-01-01", "2024-01-02", "2024-01-03"],
            "A": [0.01, -0.02, 0.005],
            "B": [0.00, 0.01, -0.01],
        })
        loader = DataLoader()
        returns = loader.to_return_matrix(df)
        assert loader.data_type == "returns"
        np.testing.assert_allclose(returns["A"].values, [0.01, -0.02, 0.005])

    def test_nan_rows_dropped_across_assets(self):
        df = pd.DataFrame({
            "A": [0.01, np.nan, 0.02, 0.03],
            "B": [0.02, 0.01, np.nan, 0.01],
        })
        returns = DataLoader().to_return_matrix(df)
        assert len(returns) == 2
        assert not returns.isna().any().any()

    def test_non_positive_prices_dropped(self):
        df = pd.DataFrame({
            "A": [100.0, 101.0, 0.0, 103.0, 104.0, 105.0],
            "B": [50.0, 51.0, 52.0, 53.0, 54.0, 55.0],
        })
        returns = DataLoader().to_return_matrix(df)
        # Rows touching the zero price are lost: 5 returns minus 2
        assert len(returns) == 3
        assert np.all(np.isfinite(returns.values))

    def test_non_numeric_columns_ignored(self):
        df = pd.DataFrame({
            "Sector": ["x", "y", "z"],
            "A": [0.01, 0.02, 0.03],
        })
        loader = DataLoader()
        returns = loader.to_return_matrix(df)
        assert loader.asset_names == ["A"]
        assert list(returns.columns) == ["A"]

    def test_too_few_rows_raise(self):
        with pytest.raises(InvalidInputError, match="at least 2"):
            DataLoader().to_return_matrix(pd.DataFrame({"A": [100.0, 101.0]}))

    def test_no_numeric_columns_raise(self):
        with pytest.raises(InvalidInputError, match="No numeric"):
            DataLoader().to_return_matrix(pd.DataFrame({"Name": ["a", "b"]}))


# ---------------------------------------------------------------------------
# Tests for file loading
# ---------------------------------------------------------------------------

class TestLoadFile:

    def test_load_csv(self, price_frame, tmp_path):
        path = tmp_path / "prices.csv"
        price_frame.to_csv(path, index=False)
        loader = DataLoader()
        returns = loader.load_returns(path)
        assert loader.raw_data.shape == price_frame.shape
        assert list(returns.columns) == ["SPY", "TLT"]

    def test_load_excel(self, price_frame, tmp_path):
        path = tmp_path / "prices.xlsx"
        price_frame.to_excel(path, index=False, sheet_name="Prices")
        returns = DataLoader().load_returns(path, sheet_name="Prices")
        assert len(returns) == len(price_frame) - 1

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLoader().load_file(tmp_path / "nope.csv")

    def test_unsupported_suffix_raises(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{}")
        with pytest.raises(ValueError, match="Unsupported file type"):
            DataLoader().load_file(path)


# ---------------------------------------------------------------------------
# Tests for demo data
# ---------------------------------------------------------------------------

class TestDemoReturns:

    def test_shape_and_columns(self):
        df = generate_demo_returns()
        assert df.shape == (756, 3)
        assert list(df.columns) == DEMO_TICKERS

    def test_reproducible(self):
        pd.testing.assert_frame_equal(generate_demo_returns(seed=1), generate_demo_returns(seed=1))

    def test_annualized_moments_are_plausible(self):
        df = generate_demo_returns(n_periods=252 * 40, seed=3)
        annual_vol = df.std().values * np.sqrt(252)
        np.testing.assert_allclose(annual_vol, [0.12, 0.20, 0.08], rtol=0.05)
