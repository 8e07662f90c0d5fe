"""
Random Weight Sampler
=====================

Draws budget-constrained portfolio weights for the Monte Carlo simulation.

Each weight starts as an independent uniform draw on [0, 1). With shorting
allowed the draw is remapped to [-1, 1) via v -> (v - 0.5) * 2. The vector
is then divided by its own sum so the weights add up to 1.

Long-only restricts only the draw range: since every draw is non-negative
and the sum is positive, normalization keeps each weight >= 0. Nothing else
is enforced; no upper bound, no projection, no optimization.

With shorting, the sum of the draws can land close to zero and produce very
large (leveraged) weights. That mirrors plain random sampling and is left
as is.
"""

from typing import Optional, Union

import numpy as np

from mc_frontier.core.errors import InvalidInputError

SeedLike = Union[None, int, np.random.Generator]


def _check_n_assets(n: int):
    if int(n) != n or n < 1:
        raise InvalidInputError(f"Number of assets must be a positive integer, got {n!r}")


def normalize_weights(raw: np.ndarray) -> np.ndarray:
    """
    Scale weights so they sum to 1.

    A zero sum is treated as 1 to avoid dividing by zero.
    """
    raw = np.asarray(raw, dtype=float)
    total = raw.sum()
    if total == 0:
        total = 1.0
    return raw / total


class WeightSampler:
    """
    Samples random weight vectors from a numpy Generator.

    Passing the same integer seed reproduces the same sequence of vectors.

    Attributes:
        rng (np.random.Generator): Source of uniform draws

    Example:
        >>> sampler = WeightSampler(seed=7)
        >>> w = sampler.sample_weights(4, allow_short=False)
        >>> bool(abs(w.sum() - 1.0) < 1e-9)
        True
    """

    def __init__(self, seed: SeedLike = None):
        """
        Args:
            seed: Integer seed, an existing Generator, or None for OS entropy
        """
        if isinstance(seed, np.random.Generator):
            self.rng = seed
        else:
            self.rng = np.random.default_rng(seed)

    def raw_draws(self, n: int, allow_short: bool = False) -> np.ndarray:
        """
        Draw the pre-normalization values.

        Args:
            n: Number of assets
            allow_short: If True, remap draws from [0, 1) to [-1, 1)

        Returns:
            Array of n draws
        """
        _check_n_assets(n)
        draws = self.rng.random(n)
        if allow_short:
            draws = (draws - 0.5) * 2
        return draws

    def sample_weights(self, n: int, allow_short: bool = False) -> np.ndarray:
        """
        Draw one weight vector satisfying the budget constraint (sum = 1).

        Args:
            n: Number of assets
            allow_short: If True, weights may be negative

        Returns:
            Weight vector of length n
        """
        return normalize_weights(self.raw_draws(n, allow_short))


def sample_weights(n: int, allow_short: bool = False,
                   rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw one random weight vector.

    Args:
        n: Number of assets
        allow_short: If True, weights may be negative
        rng: Optional Generator (default: a fresh unseeded one)

    Returns:
        Weight vector of length n summing to 1
    """
    return WeightSampler(rng).sample_weights(n, allow_short)
