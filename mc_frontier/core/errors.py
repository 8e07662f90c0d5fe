"""Exception and warning types raised by the simulation engine."""


class InvalidInputError(ValueError):
    """
    Raised when inputs violate the shape or count invariants of the engine.

    Examples: empty or mismatched return series, zero assets, fewer than two
    periods, a non-positive simulation count, or an empty record set passed
    to the frontier extractor.
    """


class NumericDegenerateWarning(RuntimeWarning):
    """Issued when a sampled portfolio has zero volatility (non-finite Sharpe)."""
