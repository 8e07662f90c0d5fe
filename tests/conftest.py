"""Shared pytest fixtures for the mc_frontier test suite.

Provides synthetic return data with fixed random seeds for reproducibility.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


# ---------------------------------------------------------------------------
# 1. Small hand-checkable return matrix
# ---------------------------------------------------------------------------

@pytest.fixture
def two_asset_returns():
    """Two assets over three periods with known statistics."""
    return pd.DataFrame({
        "A": [0.01, 0.02, 0.015],
        "B": [0.02, 0.01, 0.03],
    })


# ---------------------------------------------------------------------------
# 2. Daily returns for several correlated assets
# ---------------------------------------------------------------------------

@pytest.fixture
def daily_returns():
    """252 daily returns for four correlated assets, seeded at 42."""
    rng = np.random.default_rng(42)
    n = 252
    tickers = ["AAPL", "MSFT", "XOM", "JNJ"]
    means = np.array([0.0006, 0.0005, 0.0003, 0.0002])
    stds = np.array([0.018, 0.016, 0.020, 0.010])

    corr = np.full((4, 4), 0.3)
    np.fill_diagonal(corr, 1.0)
    chol = np.linalg.cholesky(corr)

    raw = rng.standard_normal((n, 4)) @ chol.T
    returns = raw * stds + means

    dates = pd.bdate_range(start="2023-01-02", periods=n)
    return pd.DataFrame(returns, index=dates, columns=tickers)


# ---------------------------------------------------------------------------
# 3. Price levels (for loader tests)
# ---------------------------------------------------------------------------

@pytest.fixture
def price_frame():
    """Price history with a Date column, built from seeded log returns."""
    rng = np.random.default_rng(7)
    n = 60
    log_returns = rng.normal(0.0004, 0.012, size=(n, 2))
    prices = 100.0 * np.exp(np.cumsum(log_returns, axis=0))
    dates = pd.bdate_range(start="2024-01-01", periods=n)
    return pd.DataFrame({
        "Date": dates.strftime("%Y-%m-%d"),
        "SPY": prices[:, 0],
        "TLT": prices[:, 1],
    })
