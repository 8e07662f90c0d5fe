"""
Monte Carlo Simulation Driver
=============================

Runs the sampling approximation of the efficient frontier:

1. Annualize expected returns and covariance once per run (O(n^2 * m))
2. For each trial: sample weights, score them, record return/volatility/Sharpe
3. Pick the best-Sharpe and minimum-volatility portfolios in one linear scan
4. Bucket the records by return to approximate the frontier

Trials are independent. Given a seeded SimulationConfig the sequence of
records is fully reproducible.

Tie-breaking: both selections keep the first record encountered, so a later
record must be strictly better to replace the current pick. Records with a
non-finite Sharpe ratio (zero volatility) stay in the record set and can
still be the minimum-volatility portfolio; they are never eligible for
best-Sharpe.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import warnings

import numpy as np
import pandas as pd

from mc_frontier.core.errors import InvalidInputError, NumericDegenerateWarning
from mc_frontier.core.export import records_to_frame
from mc_frontier.core.frontier import DEFAULT_BUCKETS, extract_frontier, select_min_volatility
from mc_frontier.core.portfolio import PortfolioEvaluator, PortfolioRecord
from mc_frontier.core.sampler import WeightSampler
from mc_frontier.core.statistics import (
    TRADING_DAYS_PER_YEAR,
    ReturnMatrixLike,
    annualized_statistics,
    as_return_array,
)

logger = logging.getLogger(__name__)

DEFAULT_SIMULATIONS = 5000
DEFAULT_RISK_FREE_RATE = 0.02


def _check_count(name: str, value, minimum: int):
    # bool is an Integral subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidInputError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of one simulation run.

    Attributes:
        simulation_count: Number of random portfolios to draw (> 0)
        allow_short: If True, weights may be negative
        risk_free_rate: Annualized risk-free rate (0.02 = 2%)
        seed: Optional seed for reproducible sampling
        frontier_buckets: Number of return buckets for the frontier
        periods_per_year: Annualization factor for the return data
    """

    simulation_count: int = DEFAULT_SIMULATIONS
    allow_short: bool = False
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE
    seed: Optional[int] = None
    frontier_buckets: int = DEFAULT_BUCKETS
    periods_per_year: int = TRADING_DAYS_PER_YEAR

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check the run parameters before any work starts.

        Raises:
            InvalidInputError: If a count is not an integer or is out of range
        """
        _check_count("simulation_count", self.simulation_count, 1)
        _check_count("frontier_buckets", self.frontier_buckets, 1)
        _check_count("periods_per_year", self.periods_per_year, 1)


@dataclass
class SimulationResult:
    """
    Output of run_simulation.

    Attributes:
        records: One PortfolioRecord per trial, in sampling order
        best_sharpe: Record with the highest finite Sharpe ratio (None if none is finite)
        min_volatility: Record with the lowest volatility
        frontier: (volatility, return) points in ascending-return order
        expected_returns: Annualized expected return per asset
        cov_matrix: Annualized covariance matrix
        asset_names: Asset identifiers, in column order
        config: The configuration used for the run
        asset_stats: Per-asset mean, std, variance and Sharpe ratio
    """

    records: List[PortfolioRecord]
    best_sharpe: Optional[PortfolioRecord]
    min_volatility: PortfolioRecord
    frontier: List[Tuple[float, float]]
    expected_returns: np.ndarray
    cov_matrix: np.ndarray
    asset_names: List[str]
    config: SimulationConfig = field(default_factory=SimulationConfig)
    asset_stats: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def to_frame(self) -> pd.DataFrame:
        """Records as a table of ret, vol, sharpe and one column per asset."""
        return records_to_frame(self.records, self.asset_names)

    def allocation(self, record: PortfolioRecord) -> pd.Series:
        """Weights of a record as a Series indexed by asset name."""
        return pd.Series(record.weights, index=self.asset_names, name="weight")

    def summary_report(self) -> str:
        """
        Generate a text summary of the run.

        Returns:
            Formatted string report
        """
        lines = []
        lines.append("=" * 70)
        lines.append("MONTE CARLO PORTFOLIO SIMULATION SUMMARY")
        lines.append("=" * 70)
        lines.append(f"Simulations: {len(self.records)}")
        lines.append(f"Short selling: {'Allowed' if self.config.allow_short else 'Not allowed'}")
        lines.append(f"Risk-free rate: {self.config.risk_free_rate:.4f} "
                     f"({self.config.risk_free_rate*100:.2f}%)")

        lines.append("\n--- Individual Asset Statistics (annualized) ---")
        lines.append(f"{'Asset':<12} {'Mean':>12} {'Std Dev':>12} {'Sharpe':>10}")
        lines.append("-" * 49)
        for name, stats in self.asset_stats.items():
            lines.append(f"{name:<12} {stats['mean']:>12.6f} {stats['std']:>12.6f} "
                         f"{stats['sharpe']:>10.4f}")

        for title, record in (("Maximum Sharpe Ratio Portfolio", self.best_sharpe),
                              ("Minimum Volatility Portfolio", self.min_volatility)):
            lines.append(f"\n--- {title} ---")
            if record is None:
                lines.append("No portfolio with a finite Sharpe ratio")
                continue
            lines.append("Weights:")
            for name, w in zip(self.asset_names, record.weights):
                lines.append(f"  {name}: {w:.6f} ({w*100:.2f}%)")
            lines.append(f"Expected Return: {record.expected_return:.6f} "
                         f"({record.expected_return*100:.2f}%)")
            lines.append(f"Volatility: {record.volatility:.6f} ({record.volatility*100:.2f}%)")
            lines.append(f"Sharpe Ratio: {record.sharpe:.6f}")

        lines.append(f"\nFrontier points: {len(self.frontier)}")
        lines.append("\n" + "=" * 70)
        return "\n".join(lines)


def select_best_sharpe(records: Sequence[PortfolioRecord]) -> Optional[PortfolioRecord]:
    """
    Record with the maximum finite Sharpe ratio; first occurrence wins ties.

    Returns None when no record has a finite Sharpe ratio.
    """
    best = None
    for record in records:
        if not math.isfinite(record.sharpe):
            continue
        if best is None or record.sharpe > best.sharpe:
            best = record
    return best


def run_simulation(
    return_matrix: ReturnMatrixLike,
    tickers: Optional[Sequence[str]] = None,
    config: Optional[SimulationConfig] = None
) -> SimulationResult:
    """
    Run the Monte Carlo frontier simulation.

    Args:
        return_matrix: Periodic returns, rows = periods, cols = assets
        tickers: Asset identifiers (default: DataFrame columns or Asset_1, ...)
        config: Simulation parameters (default: SimulationConfig())

    Returns:
        SimulationResult with all records, the best-Sharpe and min-volatility
        portfolios, and the frontier curve

    Raises:
        InvalidInputError: If the config or the return matrix is malformed
    """
    if config is None:
        config = SimulationConfig()
    config.validate()

    data, names = as_return_array(return_matrix, tickers)
    expected_returns, cov_matrix = annualized_statistics(data, config.periods_per_year)

    evaluator = PortfolioEvaluator(expected_returns, cov_matrix, names, config.risk_free_rate)
    sampler = WeightSampler(config.seed)
    n_assets = evaluator.n_assets

    logger.info(
        f"Running {config.simulation_count} simulations over {n_assets} assets "
        f"({data.shape[0]} periods, short selling {'on' if config.allow_short else 'off'})"
    )

    records = []
    for _ in range(config.simulation_count):
        weights = sampler.sample_weights(n_assets, config.allow_short)
        records.append(evaluator.evaluate(weights))

    degenerate = sum(1 for r in records if r.volatility == 0)
    if degenerate:
        warnings.warn(
            f"{degenerate} of {len(records)} portfolios have zero volatility; "
            f"their Sharpe ratio is not finite and they are excluded from "
            f"best-Sharpe selection",
            NumericDegenerateWarning
        )

    best_sharpe = select_best_sharpe(records)
    min_volatility = select_min_volatility(records)
    if best_sharpe is None:
        logger.warning("No sampled portfolio has a finite Sharpe ratio")

    frontier = extract_frontier(records, config.frontier_buckets)
    logger.debug(f"Frontier extracted with {len(frontier)} points")

    return SimulationResult(
        records=records,
        best_sharpe=best_sharpe,
        min_volatility=min_volatility,
        frontier=frontier,
        expected_returns=expected_returns,
        cov_matrix=cov_matrix,
        asset_names=names,
        config=config,
        asset_stats=evaluator.get_asset_stats(),
    )
