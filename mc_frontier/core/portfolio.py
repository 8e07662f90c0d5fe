"""
Portfolio Evaluator - Risk/Return of a Weight Vector
=====================================================

This module scores a single portfolio against annualized asset statistics:
- Expected return (dot product of weights and expected returns)
- Volatility (square root of the quadratic form w^T * Sigma * w)
- Sharpe ratio against a risk-free rate

Theory Background:
------------------
For weights w, expected returns mu and covariance Sigma:

    mu_p    = w^T * mu
    sigma_p = sqrt(w^T * Sigma * w)
    Sharpe  = (mu_p - rf) / sigma_p

A valid covariance matrix is positive semi-definite, so the quadratic form
is never negative in exact arithmetic. Floating point can push it a hair
below zero for near-riskless combinations; those values are clamped to 0
before the square root.

A zero-volatility portfolio has no finite Sharpe ratio. It is reported as
+/-inf (or nan when the excess return is also 0), never as an exception.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import warnings

import numpy as np

from mc_frontier.core.errors import InvalidInputError


@dataclass(frozen=True, eq=False)
class PortfolioRecord:
    """
    One sampled portfolio and its statistics.

    Attributes:
        weights: Read-only weight vector (sums to 1)
        expected_return: Annualized expected return
        volatility: Annualized standard deviation (>= 0)
        sharpe: (expected_return - rf) / volatility; non-finite if volatility is 0
    """

    weights: np.ndarray
    expected_return: float
    volatility: float
    sharpe: float

    def __post_init__(self):
        weights = np.array(self.weights, dtype=float)
        weights.setflags(write=False)
        object.__setattr__(self, 'weights', weights)

    def as_dict(self) -> Dict[str, float]:
        """Return the scalar statistics as a dictionary."""
        return {
            'return': self.expected_return,
            'volatility': self.volatility,
            'sharpe': self.sharpe,
        }


def portfolio_stats(
    weights: Sequence[float],
    expected_returns: Sequence[float],
    cov_matrix: Sequence[Sequence[float]]
) -> Tuple[float, float]:
    """
    Calculate expected return and volatility of a portfolio.

    Formula:
        return     = sum(w_i * mu_i)
        volatility = sqrt(max(sum_i sum_j w_i * w_j * cov[i][j], 0))

    Args:
        weights: Portfolio weights
        expected_returns: Annualized expected return per asset
        cov_matrix: Annualized covariance matrix (n x n)

    Returns:
        Tuple of (return, volatility)

    Raises:
        InvalidInputError: If the shapes don't line up
    """
    w = np.asarray(weights, dtype=float).ravel()
    mu = np.asarray(expected_returns, dtype=float).ravel()
    cov = np.asarray(cov_matrix, dtype=float)

    n = len(w)
    if len(mu) != n or cov.shape != (n, n):
        raise InvalidInputError(
            f"Shape mismatch: {n} weights, {len(mu)} expected returns, "
            f"covariance {cov.shape} (expected ({n}, {n}))"
        )

    ret = float(np.dot(w, mu))
    variance = float(np.dot(w, np.dot(cov, w)))
    return ret, math.sqrt(max(variance, 0.0))


def sharpe_ratio(expected_return: float, volatility: float, risk_free_rate: float) -> float:
    """
    Calculate the Sharpe ratio, (return - rf) / volatility.

    Returns +inf, -inf or nan when volatility is 0 instead of raising.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(expected_return - risk_free_rate) / np.float64(volatility))


class PortfolioEvaluator:
    """
    Scores weight vectors against fixed annualized asset statistics.

    Attributes:
        expected_returns (np.ndarray): Annualized expected return per asset
        cov_matrix (np.ndarray): Annualized covariance matrix
        asset_names (List[str]): Names of the assets
        n_assets (int): Number of assets
        rf_rate (float): Annualized risk-free rate (default: 0.02)

    Example:
        >>> evaluator = PortfolioEvaluator([0.1], [[0.04]], rf_rate=0.02)
        >>> record = evaluator.evaluate([1.0])
        >>> round(record.volatility, 6), round(record.sharpe, 6)
        (0.2, 0.4)
    """

    def __init__(
        self,
        expected_returns: Sequence[float],
        cov_matrix: Sequence[Sequence[float]],
        asset_names: Optional[List[str]] = None,
        rf_rate: float = 0.02
    ):
        """
        Initialize the evaluator.

        Args:
            expected_returns: Vector of annualized expected returns
            cov_matrix: Annualized covariance matrix (n x n)
            asset_names: Optional list of asset names (default: Asset_1, Asset_2, ...)
            rf_rate: Annualized risk-free rate

        Raises:
            InvalidInputError: If dimensions don't match
        """
        self.expected_returns = np.array(expected_returns, dtype=float).flatten()
        self.cov_matrix = np.array(cov_matrix, dtype=float)
        self.n_assets = len(self.expected_returns)
        self.rf_rate = rf_rate

        self._validate_inputs()

        if asset_names is None:
            self.asset_names = [f"Asset_{i+1}" for i in range(self.n_assets)]
        else:
            self.asset_names = list(asset_names)
            if len(self.asset_names) != self.n_assets:
                raise InvalidInputError(
                    f"Got {len(self.asset_names)} asset names for {self.n_assets} assets"
                )

    def _validate_inputs(self):
        """Validate that inputs are properly formatted."""
        if self.n_assets < 1:
            raise InvalidInputError("At least 1 asset is required, got 0")

        if self.cov_matrix.shape != (self.n_assets, self.n_assets):
            raise InvalidInputError(
                f"Covariance matrix shape {self.cov_matrix.shape} doesn't match "
                f"number of assets {self.n_assets}"
            )

        if not np.allclose(self.cov_matrix, self.cov_matrix.T):
            warnings.warn("Covariance matrix is not symmetric. Symmetrizing...")
            self.cov_matrix = (self.cov_matrix + self.cov_matrix.T) / 2

        if np.any(np.diag(self.cov_matrix) < 0):
            warnings.warn("Covariance matrix has negative variances. "
                          "Results may be unreliable.")

    def _check_weights(self, weights) -> np.ndarray:
        w = np.asarray(weights, dtype=float).ravel()
        if len(w) != self.n_assets:
            raise InvalidInputError(
                f"Expected {self.n_assets} weights, got {len(w)}"
            )
        return w

    def portfolio_return(self, weights: np.ndarray) -> float:
        """
        Calculate expected portfolio return.

        Formula: mu_p = w^T * mu = sum(w_i * mu_i)
        """
        return float(np.dot(self._check_weights(weights), self.expected_returns))

    def portfolio_variance(self, weights: np.ndarray) -> float:
        """
        Calculate portfolio variance using the quadratic form, clamped at 0.

        Formula: sigma_p^2 = w^T * Sigma * w
        """
        w = self._check_weights(weights)
        return max(float(np.dot(w, np.dot(self.cov_matrix, w))), 0.0)

    def portfolio_std(self, weights: np.ndarray) -> float:
        """Portfolio volatility, sqrt(w^T * Sigma * w)."""
        return math.sqrt(self.portfolio_variance(weights))

    def portfolio_sharpe(self, weights: np.ndarray) -> float:
        """
        Calculate portfolio Sharpe ratio.

        Formula: Sharpe = (mu_p - rf) / sigma_p

        Non-finite when sigma_p is 0.
        """
        return sharpe_ratio(self.portfolio_return(weights),
                            self.portfolio_std(weights), self.rf_rate)

    def evaluate(self, weights: np.ndarray) -> PortfolioRecord:
        """
        Score a weight vector.

        Args:
            weights: Portfolio weights

        Returns:
            PortfolioRecord with return, volatility and Sharpe ratio
        """
        w = self._check_weights(weights)
        ret, vol = portfolio_stats(w, self.expected_returns, self.cov_matrix)
        return PortfolioRecord(
            weights=w,
            expected_return=ret,
            volatility=vol,
            sharpe=sharpe_ratio(ret, vol, self.rf_rate)
        )

    def get_asset_stats(self) -> Dict[str, Dict[str, float]]:
        """
        Get individual asset statistics.

        Returns:
            Dictionary mapping asset names to their stats
        """
        stats = {}
        unit = np.eye(self.n_assets)
        for i, name in enumerate(self.asset_names):
            variance = self.cov_matrix[i, i]
            std = self.portfolio_std(unit[i])
            stats[name] = {
                'mean': float(self.expected_returns[i]),
                'std': std,
                'variance': float(variance),
                'sharpe': self.portfolio_sharpe(unit[i])
            }
        return stats
