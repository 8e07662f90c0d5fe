"""
Tabular export of simulated portfolios.

Each record becomes one row: ret, vol, sharpe, then one weight column per
asset. CSV files are written with 6 decimal places; non-finite Sharpe ratios
are written as inf / -inf / nan and read back as such.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.portfolio import PortfolioRecord

STAT_COLUMNS = ['ret', 'vol', 'sharpe']
EXPORT_PRECISION = 6


def records_to_frame(
    records: Sequence[PortfolioRecord],
    tickers: Sequence[str]
) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record.

    Args:
        records: Sampled portfolios
        tickers: Asset names, one per weight

    Returns:
        DataFrame with columns ret, vol, sharpe, <tickers...>
    """
    tickers = [str(t) for t in tickers]
    overlap = set(tickers) & set(STAT_COLUMNS)
    if overlap:
        raise InvalidInputError(f"Ticker names clash with statistic columns: {sorted(overlap)}")

    n = len(tickers)
    weights = np.empty((len(records), n))
    for row, record in enumerate(records):
        if len(record.weights) != n:
            raise InvalidInputError(
                f"Record {row} has {len(record.weights)} weights, expected {n}"
            )
        weights[row] = record.weights

    df = pd.DataFrame({
        'ret': [r.expected_return for r in records],
        'vol': [r.volatility for r in records],
        'sharpe': [r.sharpe for r in records],
    })
    return pd.concat([df, pd.DataFrame(weights, columns=tickers)], axis=1)


def export_records_csv(
    result_or_records,
    file_path: Union[str, Path],
    tickers: Optional[Sequence[str]] = None
) -> Path:
    """
    Write records to CSV.

    Args:
        result_or_records: A SimulationResult, or a sequence of PortfolioRecord
        file_path: Destination path
        tickers: Asset names (taken from the result when omitted)

    Returns:
        Path of the written file
    """
    if hasattr(result_or_records, 'records'):
        records = result_or_records.records
        if tickers is None:
            tickers = result_or_records.asset_names
    else:
        records = list(result_or_records)

    if tickers is None:
        n = len(records[0].weights) if records else 0
        tickers = [f"Asset_{i+1}" for i in range(n)]

    path = Path(file_path)
    df = records_to_frame(records, tickers)
    df.to_csv(path, index=False, float_format=f'%.{EXPORT_PRECISION}f')
    return path


def load_records_csv(file_path: Union[str, Path]) -> Tuple[List[PortfolioRecord], List[str]]:
    """
    Parse a CSV written by export_records_csv.

    Args:
        file_path: Path to the CSV file

    Returns:
        Tuple of (records, tickers)

    Raises:
        InvalidInputError: If the ret/vol/sharpe header is missing
    """
    df = pd.read_csv(file_path)

    if list(df.columns[:3]) != STAT_COLUMNS:
        raise InvalidInputError(
            f"Expected leading columns {STAT_COLUMNS}, got {list(df.columns[:3])}"
        )

    tickers = [str(c) for c in df.columns[3:]]
    values = df.to_numpy(dtype=float)

    records = [
        PortfolioRecord(
            weights=row[3:],
            expected_return=float(row[0]),
            volatility=float(row[1]),
            sharpe=float(row[2]),
        )
        for row in values
    ]
    return records, tickers
