"""
Return Statistics Module
========================

Sample statistics over aligned per-asset return series:
- Arithmetic mean
- Sample standard deviation (N-1 divisor)
- Sample covariance matrix (N-1 divisor)
- Annualized expected returns and covariance

Return matrices follow the usual layout: rows are time periods, columns are
assets. A pandas DataFrame keeps its column labels as tickers; a mapping of
ticker -> series is stacked column-wise.

Unlike the Excel-style population covariance, everything here uses the
unbiased sample estimator:

    Cov(i, j) = sum_k (x_i[k] - mean_i) * (x_j[k] - mean_j) / (m - 1)
"""

from typing import List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from mc_frontier.core.errors import InvalidInputError

TRADING_DAYS_PER_YEAR = 252

ReturnMatrixLike = Union[pd.DataFrame, np.ndarray, Mapping[str, Sequence[float]],
                         Sequence[Sequence[float]]]


def mean(series: Sequence[float]) -> float:
    """
    Arithmetic mean of a return series.

    Raises:
        InvalidInputError: If the series is empty
    """
    values = np.asarray(series, dtype=float).ravel()
    if values.size == 0:
        raise InvalidInputError("mean() requires a non-empty series, got 0 values")
    return float(np.mean(values))


def sample_std(series: Sequence[float]) -> float:
    """
    Unbiased standard deviation (divide by N-1).

    Raises:
        InvalidInputError: If the series has fewer than 2 values
    """
    values = np.asarray(series, dtype=float).ravel()
    if values.size < 2:
        raise InvalidInputError(
            f"sample_std() requires at least 2 values, got {values.size}"
        )
    return float(np.std(values, ddof=1))


def as_return_array(
    return_matrix: ReturnMatrixLike,
    tickers: Optional[Sequence[str]] = None
) -> Tuple[np.ndarray, List[str]]:
    """
    Validate a return matrix and convert it to a (periods x assets) array.

    Args:
        return_matrix: DataFrame (columns = tickers), mapping of ticker to
            series, or 2D array-like with rows = periods, cols = assets
        tickers: Optional asset identifiers; defaults to the DataFrame or
            mapping keys, else Asset_1, Asset_2, ...

    Returns:
        Tuple of (float array copy, list of tickers)

    Raises:
        InvalidInputError: On zero assets, fewer than 2 periods, mismatched
            series lengths, or a ticker count that does not match
    """
    if isinstance(return_matrix, pd.DataFrame):
        names = [str(c) for c in return_matrix.columns]
        try:
            data = return_matrix.to_numpy(dtype=float, copy=True)
        except (TypeError, ValueError) as e:
            bad = [str(c) for c in return_matrix.columns
                   if not pd.api.types.is_numeric_dtype(return_matrix[c])]
            raise InvalidInputError(f"Return matrix has non-numeric columns {bad}: {e}") from e
    elif isinstance(return_matrix, Mapping):
        names = [str(k) for k in return_matrix.keys()]
        columns = [np.asarray(v, dtype=float).ravel() for v in return_matrix.values()]
        lengths = {len(c) for c in columns}
        if len(lengths) > 1:
            detail = ", ".join(f"{n}={len(c)}" for n, c in zip(names, columns))
            raise InvalidInputError(
                f"Return series must have equal length, got {detail}"
            )
        data = np.column_stack(columns) if columns else np.empty((0, 0))
    else:
        names = None
        try:
            data = np.array(return_matrix, dtype=float)
        except ValueError as e:
            raise InvalidInputError(f"Return series must have equal length: {e}") from e
        if data.ndim == 1:
            data = data.reshape(-1, 1)

    if data.ndim != 2:
        raise InvalidInputError(
            f"Return matrix must be 2-dimensional (periods x assets), got shape {data.shape}"
        )

    n_periods, n_assets = data.shape
    if n_assets < 1:
        raise InvalidInputError("Return matrix must contain at least 1 asset, got 0")
    if n_periods < 2:
        raise InvalidInputError(
            f"Return matrix needs at least 2 periods per asset, got {n_periods}"
        )

    if tickers is not None:
        tickers = [str(t) for t in tickers]
        if len(tickers) != n_assets:
            raise InvalidInputError(
                f"Expected {n_assets} tickers for a {n_periods}x{n_assets} "
                f"return matrix, got {len(tickers)}"
            )
        names = tickers
    elif names is None:
        names = [f"Asset_{i+1}" for i in range(n_assets)]

    return data, names


def covariance(return_matrix: ReturnMatrixLike) -> np.ndarray:
    """
    Compute the sample covariance matrix of a return matrix.

    The upper triangle is computed from the demeaned returns and mirrored,
    so cov[i, j] == cov[j, i] holds exactly.

    Args:
        return_matrix: Returns with rows = periods, cols = assets

    Returns:
        Covariance matrix (n_assets x n_assets)
    """
    data, _ = as_return_array(return_matrix)
    n_periods = data.shape[0]

    demeaned = data - data.mean(axis=0)
    cov = np.dot(demeaned.T, demeaned) / (n_periods - 1)

    upper = np.triu(cov)
    return upper + np.triu(cov, k=1).T


def annualized_statistics(
    return_matrix: ReturnMatrixLike,
    periods_per_year: int = TRADING_DAYS_PER_YEAR
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Annualized expected returns and covariance matrix.

    Both the per-period means and the covariance entries are multiplied by
    periods_per_year (252 for daily data).

    Args:
        return_matrix: Returns with rows = periods, cols = assets
        periods_per_year: Annualization factor

    Returns:
        Tuple of (expected_returns, cov_matrix)
    """
    data, _ = as_return_array(return_matrix)
    expected_returns = data.mean(axis=0) * periods_per_year
    cov_matrix = covariance(data) * periods_per_year
    return expected_returns, cov_matrix
