"""
Quantile binning of a continuous risk score.

Breakpoints are probabilities in [0, 1]; each consecutive pair defines one bin.
Score cutoffs use linear interpolation between order statistics (Hyndman &
Fan type 7, the default of R's ``quantile`` and NumPy's ``method="linear"``).

References:
    - Hyndman & Fan (1996). Sample quantiles in statistical packages.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from pgs_or.metrics.errors import InvalidArgumentError

# Deciles. A tuple so the default can never be mutated between calls.
DEFAULT_BREAKPOINTS: tuple[float, ...] = (
    0.0,
    0.1,
    0.2,
    0.3,
    0.4,
    0.5,
    0.6,
    0.7,
    0.8,
    0.9,
    1.0,
)


def validate_breakpoints(breakpoints: Sequence[float]) -> np.ndarray:
    """
    Validate quantile breakpoints and return them as a float array.

    Args:
        breakpoints: Probabilities defining bin edges

    Returns:
        1-D float array of breakpoints

    Raises:
        InvalidArgumentError: If fewer than 2 breakpoints are given, any value
            is non-finite or outside [0, 1], or values are not strictly increasing
    """
    try:
        bp = np.asarray(breakpoints, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Breakpoints must be numeric: {e}") from e

    if bp.ndim != 1:
        raise InvalidArgumentError(f"Breakpoints must be 1-D, got shape {bp.shape}")
    if len(bp) < 2:
        raise InvalidArgumentError(
            f"At least 2 breakpoints are required to define a bin, got {len(bp)}"
        )
    if not np.all(np.isfinite(bp)):
        raise InvalidArgumentError(f"Breakpoints must be finite, got {bp.tolist()}")
    if np.any(bp < 0.0) or np.any(bp > 1.0):
        raise InvalidArgumentError(f"Breakpoints must lie in [0, 1], got {bp.tolist()}")
    if np.any(np.diff(bp) <= 0):
        raise InvalidArgumentError(
            f"Breakpoints must be strictly increasing (no duplicates), got {bp.tolist()}"
        )
    return bp


def quantile_cutoffs(scores: np.ndarray, probs: Sequence[float]) -> np.ndarray:
    """Empirical type-7 quantiles of ``scores`` at each probability in ``probs``."""
    return np.quantile(
        np.asarray(scores, dtype=float), np.asarray(probs, dtype=float), method="linear"
    )


def build_bin_table(scores: np.ndarray, breakpoints: Sequence[float]) -> pd.DataFrame:
    """
    Build the bin table: one row per consecutive breakpoint pair.

    Args:
        scores: Risk scores, shape (n_samples,)
        breakpoints: Validated, strictly increasing probabilities

    Returns:
        DataFrame with columns:
            - quantile: bin index (1..k)
            - lower_bound, upper_bound: bin probabilities
            - cutoff1, cutoff2: score quantiles at lower_bound / upper_bound

    Examples:
        >>> bins = build_bin_table(np.arange(1, 6), [0.0, 0.5, 1.0])
        >>> bins["cutoff2"].tolist()
        [3.0, 5.0]
    """
    bp = np.asarray(breakpoints, dtype=float)
    lower = bp[:-1]
    upper = bp[1:]

    return pd.DataFrame(
        {
            "quantile": np.arange(1, len(bp), dtype=int),
            "lower_bound": lower,
            "upper_bound": upper,
            "cutoff1": quantile_cutoffs(scores, lower),
            "cutoff2": quantile_cutoffs(scores, upper),
        }
    )
