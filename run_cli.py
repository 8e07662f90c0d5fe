"""
CLI entry point for the Monte Carlo frontier simulation.

Usage:
    python run_cli.py                        # Run with demo data
    python run_cli.py --file prices.csv      # Run with a CSV of prices or returns
    python run_cli.py --allow-short          # Permit negative weights
    python run_cli.py --export sims.csv      # Save every sampled portfolio

For installed package, use: mcf-simulate
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from mc_frontier.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
