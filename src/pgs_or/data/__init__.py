"""Data loading and simulation."""

from pgs_or.data.io import (
    coerce_numeric_columns,
    infer_separator,
    read_score_table,
    validate_required_columns,
)
from pgs_or.data.simulate import simulate_pgs_cohort

__all__ = [
    "coerce_numeric_columns",
    "infer_separator",
    "read_score_table",
    "validate_required_columns",
    "simulate_pgs_cohort",
]
