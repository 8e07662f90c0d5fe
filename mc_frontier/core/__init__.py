"""Core computational modules for the Monte Carlo frontier simulation."""

from mc_frontier.core.errors import InvalidInputError, NumericDegenerateWarning
from mc_frontier.core.statistics import mean, sample_std, covariance, annualized_statistics
from mc_frontier.core.portfolio import PortfolioEvaluator, PortfolioRecord, portfolio_stats, sharpe_ratio
from mc_frontier.core.sampler import WeightSampler, sample_weights
from mc_frontier.core.frontier import extract_frontier
from mc_frontier.core.simulation import SimulationConfig, SimulationResult, run_simulation
from mc_frontier.core.loader import DataLoader, generate_demo_returns
from mc_frontier.core.export import export_records_csv, load_records_csv, records_to_frame

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
    "sharpe_ratio",
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
    "records_to_frame",
]
