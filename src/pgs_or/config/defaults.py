"""
Default configuration values.

Single source of truth for the values the loader starts from before a YAML
file and CLI overrides are applied.
"""

from typing import Any

from pgs_or.metrics.quantiles import DEFAULT_BREAKPOINTS

DEFAULT_INPUT_CONFIG: dict[str, Any] = {
    "infile": None,
    "score_col": "pgs",
    "outcome_col": "outcome",
    "sep": None,
    "drop_missing": True,
}

DEFAULT_ESTIMATOR_CONFIG: dict[str, Any] = {
    "kind": "conditional",
    "confidence_level": 0.95,
    "pvalue_method": "chi_square",
}

DEFAULT_OUTPUT_CONFIG: dict[str, Any] = {
    "outdir": "results",
    "save_plot": True,
    "plot_format": "png",
    "plot_dpi": 150,
    "plot_title": None,
}

DEFAULT_STRICTNESS_CONFIG: dict[str, Any] = {
    "level": "warn",
    "check_breakpoint_span": True,
    "min_expected_bin_size": 10,
}

DEFAULT_OR_CONFIG: dict[str, Any] = {
    "breakpoints": list(DEFAULT_BREAKPOINTS),
    "create_plot": True,
}
