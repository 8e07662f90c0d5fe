"""Visualization modules for simulation results."""

from mc_frontier.visualization.plots import (
    plot_simulation,
    plot_portfolio_weights
)

__all__ = [
    "plot_simulation",
    "plot_portfolio_weights",
]
