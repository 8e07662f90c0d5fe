"""
Main Runner Script for the Monte Carlo Frontier Simulation
==========================================================

This script runs the full simulation workflow:
1. Loading price or return data (CSV/Excel), or generating demo data
2. Sampling random portfolios and scoring them
3. Reporting the maximum Sharpe and minimum volatility portfolios
4. Visualizing the sampled portfolios and the approximate frontier
5. Exporting the sampled portfolios to CSV

Usage:
    mcf-simulate                          # Run with demo data
    mcf-simulate --file prices.csv        # Run with a CSV of prices or returns
    mcf-simulate --sims 20000 --seed 1    # Larger, reproducible run
    mcf-simulate --allow-short            # Permit negative weights
    mcf-simulate --export sims.csv        # Save every sampled portfolio
"""

import sys
import argparse
import logging
from datetime import datetime
from typing import List, Optional
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from mc_frontier.core.export import export_records_csv
from mc_frontier.core.frontier import DEFAULT_BUCKETS
from mc_frontier.core.loader import DataLoader, generate_demo_returns
from mc_frontier.core.simulation import (
    DEFAULT_RISK_FREE_RATE,
    DEFAULT_SIMULATIONS,
    SimulationConfig,
    SimulationResult,
    run_simulation,
)
from mc_frontier.visualization import plot_portfolio_weights, plot_simulation


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logger(script_name: str = "mc_frontier", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Sets up a logger that writes to both file and console.

    Args:
        script_name: Name of the script (used in log filename)
        log_dir: Directory for log files (default: <package root>/logs)

    Returns:
        Configured logger instance
    """
    if log_dir is None:
        log_dir = Path(__file__).parent.parent.parent / "logs"
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y_%m_%d_%H%M")
    log_filename = log_dir / f"log_{script_name}_{timestamp}.txt"

    logger = logging.getLogger(script_name)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    # Clear existing handlers (prevent duplicates)
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_filename, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_output_dir() -> Path:
    """Get the output directory path."""
    package_root = Path(__file__).parent.parent.parent
    output_dir = package_root / "output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


# =============================================================================
# ANALYSIS
# =============================================================================

def run_analysis(
    returns: pd.DataFrame,
    config: SimulationConfig,
    save_plots: bool = True,
    export_path: Optional[str] = None,
    output_dir: Optional[Path] = None,
    logger: Optional[logging.Logger] = None
) -> SimulationResult:
    """
    Run the simulation and produce reports, plots and exports.

    Args:
        returns: Cleaned return matrix (rows = periods, cols = assets)
        config: Simulation parameters
        save_plots: If True, save plots to output_dir
        export_path: If provided, write all sampled portfolios to this CSV
        output_dir: Directory for plot files (default: <package root>/output)
        logger: Logger instance

    Returns:
        SimulationResult
    """
    if logger is None:
        logger = setup_logger()

    logger.info("=" * 70)
    logger.info("  MONTE CARLO EFFICIENT FRONTIER SIMULATION")
    logger.info("=" * 70)
    logger.info(f"  Assets: {', '.join(str(c) for c in returns.columns)}")
    logger.info(f"  Observations: {len(returns)}")
    logger.info(f"  Simulations: {config.simulation_count}")
    logger.info(f"  Risk-free rate: {config.risk_free_rate:.4f} ({config.risk_free_rate*100:.2f}%)")
    logger.info(f"  Short selling: {'Allowed' if config.allow_short else 'Not allowed'}")
    logger.info("=" * 70)

    result = run_simulation(returns, config=config)

    for line in result.summary_report().splitlines():
        logger.info(line)

    if export_path:
        path = export_records_csv(result, export_path)
        logger.info(f"Exported {len(result.records)} portfolios to: {path}")

    if save_plots:
        if output_dir is None:
            output_dir = get_output_dir()
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        plot_simulation(result, save_path=str(output_dir / "simulated_frontier.png"))
        logger.info("Saved: simulated_frontier.png")

        if result.best_sharpe is not None:
            plot_portfolio_weights(
                result.best_sharpe.weights, result.asset_names,
                title="Maximum Sharpe Ratio Portfolio Weights",
                save_path=str(output_dir / "max_sharpe_weights.png")
            )
            logger.info("Saved: max_sharpe_weights.png")

        plot_portfolio_weights(
            result.min_volatility.weights, result.asset_names,
            title="Minimum Volatility Portfolio Weights",
            save_path=str(output_dir / "min_volatility_weights.png")
        )
        logger.info("Saved: min_volatility_weights.png")

    return result


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Command-line options for mcf-simulate."""
    parser = argparse.ArgumentParser(
        description='Monte Carlo Efficient Frontier Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcf-simulate                                  # Run with demo data
  mcf-simulate --file prices.csv                # Analyze a CSV of prices or returns
  mcf-simulate --file data.xlsx --sheet Prices
  mcf-simulate --allow-short --sims 20000       # Permit negative weights
        """
    )

    parser.add_argument('--file', '-f', type=str,
                        help='Path to CSV or Excel file with prices or returns')
    parser.add_argument('--sheet', '-s', type=str, default=None,
                        help='Sheet name for Excel files (default: first sheet)')
    parser.add_argument('--sims', '-n', type=int, default=DEFAULT_SIMULATIONS,
                        help=f'Number of simulated portfolios (default: {DEFAULT_SIMULATIONS})')
    parser.add_argument('--rf-rate', '-r', type=float, default=DEFAULT_RISK_FREE_RATE,
                        help='Annual risk-free rate (default: 0.02 = 2%%)')
    parser.add_argument('--allow-short', action='store_true',
                        help='Allow short selling (negative weights)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible sampling')
    parser.add_argument('--buckets', type=int, default=DEFAULT_BUCKETS,
                        help=f'Return buckets for the frontier (default: {DEFAULT_BUCKETS})')
    parser.add_argument('--export', '-e', type=str, default=None,
                        help='Write all sampled portfolios to this CSV file')
    parser.add_argument('--output-dir', '-o', type=str, default=None,
                        help='Directory for plots and logs')
    parser.add_argument('--no-plots', action='store_true',
                        help='Disable plot generation')
    parser.add_argument('--show-plots', action='store_true',
                        help='Show plots interactively (default: just save)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulation script."""
    args = build_parser().parse_args(argv)

    output_dir = Path(args.output_dir) if args.output_dir else None
    logger = setup_logger("mc_simulation", output_dir / "logs" if output_dir else None)

    try:
        if args.file:
            logger.info(f"Loading data from: {args.file}")
            returns = DataLoader().load_returns(args.file, args.sheet)
        else:
            logger.info("No file specified. Using demo data...")
            returns = generate_demo_returns()

        config = SimulationConfig(
            simulation_count=args.sims,
            allow_short=args.allow_short,
            risk_free_rate=args.rf_rate,
            seed=args.seed,
            frontier_buckets=args.buckets,
        )

        run_analysis(
            returns,
            config,
            save_plots=not args.no_plots,
            export_path=args.export,
            output_dir=output_dir,
            logger=logger
        )

        if args.show_plots and not args.no_plots:
            plt.show()
        plt.close('all')

        logger.info("Simulation completed successfully!")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        import traceback
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
