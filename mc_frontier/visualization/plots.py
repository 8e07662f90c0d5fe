"""
Plotting Module for the Monte Carlo Simulation
==============================================

Visualizations of a SimulationResult:
- Every sampled portfolio on the risk-return plane, colored by Sharpe ratio
- The bucketed efficient frontier curve
- Maximum Sharpe and minimum volatility portfolios
- Individual asset positions
- Weight bar charts
"""

import math
from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from mc_frontier.core.simulation import SimulationResult


def plot_simulation(
    result: SimulationResult,
    show_assets: bool = True,
    show_frontier: bool = True,
    figsize: Tuple[int, int] = (12, 8),
    save_path: Optional[str] = None,
    title: str = "Monte Carlo Portfolios and Efficient Frontier"
) -> Figure:
    """
    Scatter plot of all simulated portfolios.

    Args:
        result: Output of run_simulation
        show_assets: If True, show individual assets
        show_frontier: If True, draw the bucketed frontier curve
        figsize: Figure size (width, height)
        save_path: If provided, save the figure to this path
        title: Plot title

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    vols = np.array([r.volatility for r in result.records])
    rets = np.array([r.expected_return for r in result.records])
    sharpes = np.array([r.sharpe for r in result.records])
    finite = np.isfinite(sharpes)

    if finite.any():
        scatter = ax.scatter(vols[finite] * 100, rets[finite] * 100, c=sharpes[finite],
                             cmap='viridis', s=8, alpha=0.6, zorder=1)
        fig.colorbar(scatter, ax=ax, label='Sharpe Ratio')
    if not finite.all():
        # Zero-volatility portfolios have no finite Sharpe to color by
        ax.scatter(vols[~finite] * 100, rets[~finite] * 100,
                   c='grey', s=8, alpha=0.6, zorder=1, label='Undefined Sharpe')

    if show_frontier and result.frontier:
        f_vols, f_rets = zip(*result.frontier)
        ax.plot(np.array(f_vols) * 100, np.array(f_rets) * 100,
                'r-', linewidth=2, label='Efficient Frontier (approx.)', zorder=3)

    if show_assets:
        asset_stds = np.sqrt(np.clip(np.diag(result.cov_matrix), 0, None))
        ax.scatter(asset_stds * 100, result.expected_returns * 100,
                   c='red', s=100, marker='o', edgecolors='black',
                   label='Individual Assets', zorder=5)
        for i, name in enumerate(result.asset_names):
            ax.annotate(name,
                        (asset_stds[i] * 100, result.expected_returns[i] * 100),
                        xytext=(5, 5), textcoords='offset points',
                        fontsize=9, fontweight='bold')

    best = result.best_sharpe
    if best is not None:
        ax.scatter([best.volatility * 100], [best.expected_return * 100],
                   c='gold', s=200, marker='D', edgecolors='black',
                   label=f"Max Sharpe ({best.sharpe:.3f})", zorder=6)

    low = result.min_volatility
    ax.scatter([low.volatility * 100], [low.expected_return * 100],
               c='purple', s=200, marker='*', edgecolors='black',
               label=f"Min Volatility (σ={low.volatility*100:.2f}%)", zorder=6)

    ax.set_xlabel('Volatility (Annualized) %', fontsize=12)
    ax.set_ylabel('Expected Return (Annualized) %', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='upper left', fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_portfolio_weights(
    weights: np.ndarray,
    asset_names: List[str],
    title: str = "Portfolio Weights",
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Create a bar chart of portfolio weights.

    Args:
        weights: Array of portfolio weights
        asset_names: List of asset names
        title: Plot title
        figsize: Figure size
        save_path: Optional path to save figure

    Returns:
        matplotlib Figure object
    """
    weights = np.asarray(weights, dtype=float)
    fig, ax = plt.subplots(figsize=figsize)

    colors = ['green' if w >= 0 else 'red' for w in weights]
    bars = ax.bar(asset_names, weights * 100, color=colors, edgecolor='black')

    for bar, w in zip(bars, weights):
        height = bar.get_height()
        if not math.isfinite(height):
            continue
        ax.annotate(f'{w*100:.1f}%',
                    xy=(bar.get_x() + bar.get_width() / 2, height),
                    xytext=(0, 3 if height >= 0 else -15),
                    textcoords='offset points',
                    ha='center', va='bottom' if height >= 0 else 'top',
                    fontsize=10, fontweight='bold')

    ax.axhline(y=0, color='black', linestyle='-', linewidth=0.5)
    ax.set_xlabel('Assets', fontsize=12)
    ax.set_ylabel('Weight %', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
