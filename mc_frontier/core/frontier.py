"""
Frontier Extraction by Return Bucketing
=======================================

Approximates the efficient frontier from a cloud of sampled portfolios
without solving a quadratic program:

1. Sort the records by expected return (stable, ties keep their order).
2. Split the sorted sequence into B contiguous buckets. Bucket i covers
   indices floor(i*N/B) .. floor((i+1)*N/B) - 1.
3. Keep the minimum-volatility record of each non-empty bucket.

The resulting (volatility, return) points trace the lower-left edge of the
return/volatility scatter. Buckets are empty only when N < B; those emit no
point.
"""

from typing import List, Sequence, Tuple

from mc_frontier.core.errors import InvalidInputError
from mc_frontier.core.portfolio import PortfolioRecord

DEFAULT_BUCKETS = 60


def select_min_volatility(records: Sequence[PortfolioRecord]) -> PortfolioRecord:
    """
    Record with the minimum volatility; first occurrence wins ties.

    Raises:
        InvalidInputError: If records is empty
    """
    if len(records) == 0:
        raise InvalidInputError("Cannot select a minimum-volatility portfolio from 0 records")
    best = records[0]
    for record in records[1:]:
        if record.volatility < best.volatility:
            best = record
    return best


def extract_frontier(
    records: Sequence[PortfolioRecord],
    n_buckets: int = DEFAULT_BUCKETS
) -> List[Tuple[float, float]]:
    """
    Extract the approximate efficient frontier from sampled portfolios.

    Args:
        records: Sampled portfolios
        n_buckets: Number of return buckets (default: 60)

    Returns:
        List of (volatility, return) pairs in ascending-return order

    Raises:
        InvalidInputError: If records is empty or n_buckets < 1
    """
    n = len(records)
    if n < 1:
        raise InvalidInputError("Cannot extract a frontier from 0 records")
    if n_buckets < 1:
        raise InvalidInputError(f"Bucket count must be >= 1, got {n_buckets}")

    ordered = sorted(records, key=lambda r: r.expected_return)

    frontier = []
    for i in range(n_buckets):
        lo = (i * n) // n_buckets
        hi = ((i + 1) * n) // n_buckets - 1
        if hi < lo:
            continue
        best = select_min_volatility(ordered[lo:hi + 1])
        frontier.append((best.volatility, best.expected_return))

    return frontier
