"""Plotting utilities for odds ratios by score quantile."""

from pgs_or.plotting.odds_ratio import apply_plot_metadata, plot_or_by_quantile

__all__ = [
    "apply_plot_metadata",
    "plot_or_by_quantile",
]
