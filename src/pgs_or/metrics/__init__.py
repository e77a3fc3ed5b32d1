"""Quantile binning, contingency tables and odds ratio estimation."""

from pgs_or.metrics.contingency import (
    baseline_mask,
    bin_mask,
    contingency_table,
    has_zero_cell,
)
from pgs_or.metrics.errors import (
    DegenerateBinWarning,
    EstimatorFailureError,
    InvalidArgumentError,
)
from pgs_or.metrics.odds_ratio import (
    VALID_ESTIMATORS,
    VALID_PVALUE_METHODS,
    OddsRatioEstimate,
    estimate_odds_ratio,
    midp_exact_pvalue,
    midp_odds_ratio,
    validate_estimator_options,
)
from pgs_or.metrics.quantiles import (
    DEFAULT_BREAKPOINTS,
    build_bin_table,
    quantile_cutoffs,
    validate_breakpoints,
)

__all__ = [
    # Quantile binning
    "DEFAULT_BREAKPOINTS",
    "build_bin_table",
    "quantile_cutoffs",
    "validate_breakpoints",
    # Contingency tables
    "baseline_mask",
    "bin_mask",
    "contingency_table",
    "has_zero_cell",
    # Odds ratio estimation
    "VALID_ESTIMATORS",
    "VALID_PVALUE_METHODS",
    "OddsRatioEstimate",
    "estimate_odds_ratio",
    "midp_exact_pvalue",
    "midp_odds_ratio",
    "validate_estimator_options",
    # Errors
    "InvalidArgumentError",
    "EstimatorFailureError",
    "DegenerateBinWarning",
]
