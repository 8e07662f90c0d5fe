"""
Data Loader Module for the Monte Carlo Simulation
=================================================

This module turns a user-supplied file into a clean return matrix:
- CSV files (.csv)
- Excel files (.xlsx, .xls)
- Synthetic demo data

Expected layout: an optional date column followed by one column per asset,
holding either prices or periodic returns.

ASSUMPTION: If the mean absolute value exceeds 1.5, or any single value
does, the data is treated as prices and converted to log returns:

    r_t = ln(P_t / P_{t-1})

Non-positive prices cannot produce a log return and become NaN. Any row
with a NaN in any asset is dropped so all series stay aligned.

The simulation engine itself never re-runs this detection; it only sees
the cleaned return matrix produced here.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.statistics import TRADING_DAYS_PER_YEAR

logger = logging.getLogger(__name__)

PRICE_THRESHOLD = 1.5

DEMO_TICKERS = ['Asset A', 'Asset B', 'Asset C']
DEMO_ANNUAL_RETURNS = [0.08, 0.12, 0.05]
DEMO_ANNUAL_VOLATILITIES = [0.12, 0.20, 0.08]


class DataLoader:
    """
    Loads price or return data and produces an aligned return matrix.

    Attributes:
        raw_data (pd.DataFrame): Data as read from the last file
        returns_data (pd.DataFrame): Cleaned returns (rows = periods, cols = assets)
        asset_names (list): Asset column names
        data_type (str): 'prices' or 'returns', once detected

    Example:
        >>> loader = DataLoader()
        >>> returns = loader.to_return_matrix(loader.load_file("prices.csv"))
    """

    def __init__(self):
        self.raw_data = None
        self.returns_data = None
        self.asset_names = []
        self.data_type = None

    def load_file(self, file_path: Union[str, Path], sheet_name: Optional[str] = None) -> pd.DataFrame:
        """
        Load data from file.

        Args:
            file_path: Path to CSV or Excel file
            sheet_name: Sheet name for Excel files (default: first sheet)

        Returns:
            DataFrame with loaded data

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file type is not supported
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if path.suffix.lower() in ['.xlsx', '.xls']:
            df = pd.read_excel(path, sheet_name=sheet_name if sheet_name else 0)
        elif path.suffix.lower() == '.csv':
            df = pd.read_csv(path)
        else:
            raise ValueError(f"Unsupported file type: {path.suffix}")

        logger.info(f"Loaded {df.shape[0]} rows x {df.shape[1]} columns from {path.name}")
        self.raw_data = df
        return df

    def to_return_matrix(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Detect prices vs returns and produce an aligned return matrix.

        Args:
            df: DataFrame with an optional date column and one column per asset

        Returns:
            DataFrame of returns with NaN rows removed

        Raises:
            InvalidInputError: If no asset columns remain or fewer than 2 rows survive
        """
        date_cols = [c for c in df.columns if str(c).strip().lower() == 'date']
        if date_cols:
            df = df.drop(columns=date_cols)

        values = df.apply(pd.to_numeric, errors='coerce')
        values = values.loc[:, values.notna().any()]
        if values.shape[1] == 0:
            raise InvalidInputError("No numeric asset columns found in data")

        self.asset_names = [str(c) for c in values.columns]
        values.columns = self.asset_names

        finite = values.to_numpy(dtype=float)
        finite = np.abs(finite[np.isfinite(finite)])
        is_price = finite.size > 0 and (
            finite.mean() > PRICE_THRESHOLD or bool(np.any(finite > PRICE_THRESHOLD))
        )

        if is_price:
            self.data_type = 'prices'
            logger.info("Data Type Detected: PRICES - converting to log returns")
            prices = values.where(values > 0)
            returns_df = np.log(prices / prices.shift(1)).iloc[1:]
        else:
            self.data_type = 'returns'
            logger.info("Data Type Detected: RETURNS")
            returns_df = values

        returns_df = returns_df.replace([np.inf, -np.inf], np.nan).dropna()
        returns_df = returns_df.reset_index(drop=True)

        if len(returns_df) < 2:
            raise InvalidInputError(
                f"Need at least 2 aligned return rows after cleaning, got {len(returns_df)}"
            )

        logger.info(f"Detected {len(self.asset_names)} assets: {self.asset_names}")
        logger.info(f"Data points: {len(returns_df)} observations")

        self.returns_data = returns_df
        return returns_df

    def load_returns(self, file_path: Union[str, Path], sheet_name: Optional[str] = None) -> pd.DataFrame:
        """Load a file and return its cleaned return matrix."""
        return self.to_return_matrix(self.load_file(file_path, sheet_name))


def generate_demo_returns(n_periods: int = TRADING_DAYS_PER_YEAR * 3, seed: int = 42) -> pd.DataFrame:
    """
    Generate synthetic daily returns for three assets.

    Annual drifts of 8%, 12% and 5% with annual volatilities of 12%, 20% and
    8%, scaled to daily (mu / 252, sigma / sqrt(252)), over three years by
    default.

    Args:
        n_periods: Number of daily observations
        seed: Random seed for reproducibility

    Returns:
        DataFrame of returns with columns Asset A, Asset B, Asset C
    """
    rng = np.random.default_rng(seed)

    mu = np.array(DEMO_ANNUAL_RETURNS) / TRADING_DAYS_PER_YEAR
    sigma = np.array(DEMO_ANNUAL_VOLATILITIES) / np.sqrt(TRADING_DAYS_PER_YEAR)

    returns = mu + rng.standard_normal((n_periods, len(DEMO_TICKERS))) * sigma
    return pd.DataFrame(returns, columns=DEMO_TICKERS)
