"""Odds-ratio-by-quantile evaluation and result persistence."""

from pgs_or.evaluation.or_by_quantile import (
    COUNT_COLUMNS,
    RESULT_COLUMNS,
    ORByQuantileResult,
    compute_or_by_quantile,
)
from pgs_or.evaluation.reports import OutputDirectories, ResultsWriter

__all__ = [
    "COUNT_COLUMNS",
    "RESULT_COLUMNS",
    "ORByQuantileResult",
    "compute_or_by_quantile",
    "OutputDirectories",
    "ResultsWriter",
]
