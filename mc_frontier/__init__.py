"""
MC Frontier - Monte Carlo Efficient Frontier Approximation
==========================================================

Samples random portfolio weights, scores each portfolio from historical
return statistics, and approximates the efficient frontier by return
bucketing.

Usage:
    from mc_frontier import run_simulation, SimulationConfig, generate_demo_returns
    from mc_frontier.visualization import plot_simulation

Classes:
    SimulationConfig - Parameters of a simulation run
    SimulationResult - Records, best-Sharpe / min-volatility portfolios, frontier
    PortfolioEvaluator - Return, volatility and Sharpe of a weight vector
    WeightSampler - Random budget-constrained weights
    DataLoader - Price/return data loading from CSV/Excel

Functions:
    run_simulation - Run the Monte Carlo simulation
    extract_frontier - Return-bucketed minimum-volatility frontier
    export_records_csv / load_records_csv - Tabular export of records
    generate_demo_returns - Create synthetic test data
"""

from mc_frontier.core.errors import InvalidInputError, NumericDegenerateWarning
from mc_frontier.core.statistics import mean, sample_std, covariance, annualized_statistics
from mc_frontier.core.portfolio import PortfolioEvaluator, PortfolioRecord, portfolio_stats
from mc_frontier.core.sampler import WeightSampler, sample_weights
from mc_frontier.core.frontier import extract_frontier
from mc_frontier.core.simulation import SimulationConfig, SimulationResult, run_simulation
from mc_frontier.core.loader import DataLoader, generate_demo_returns
from mc_frontier.core.export import export_records_csv, load_records_csv

__version__ = "1.0.0"

__all__ = [
    "InvalidInputError",
    "NumericDegenerateWarning",
    "mean",
    "sample_std",
    "covariance",
    "annualized_statistics",
    "PortfolioEvaluator",
    "PortfolioRecord",
    "portfolio_stats",
    "WeightSampler",
    "sample_weights",
    "extract_frontier",
    "SimulationConfig",
    "SimulationResult",
    "run_simulation",
    "DataLoader",
    "generate_demo_returns",
    "export_records_csv",
    "load_records_csv",
]
