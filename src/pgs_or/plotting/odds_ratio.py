"""
Odds-ratio-by-quantile plotting.

Draws one open-circle marker per quantile bin at its odds ratio, with a
vertical line spanning the confidence interval and a dashed reference line
at OR = 1.
"""

from collections.abc import Sequence
from pathlib import Path

import numpy as np
import pandas as pd
from matplotlib.figure import Figure


# Footer sizing, as fractions of figure height
FOOTER_BASE_MARGIN = 0.12
FOOTER_LINE_HEIGHT = 0.022
FOOTER_MAX_MARGIN = 0.30


def apply_plot_metadata(fig: Figure, meta_lines: Sequence[str] | None = None) -> float:
    """
    Add run details as a small centred footer and size the bottom margin for it.

    Blank entries are skipped. The return value is meant for
    ``fig.subplots_adjust(bottom=...)`` and grows by one line height per
    footer line up to FOOTER_MAX_MARGIN.
    """
    footer = [str(line) for line in meta_lines or () if line]
    if footer:
        fig.text(0.5, 0.005, "\n".join(footer), ha="center", va="bottom", fontsize=8)
    return min(FOOTER_BASE_MARGIN + FOOTER_LINE_HEIGHT * len(footer), FOOTER_MAX_MARGIN)


def plot_or_by_quantile(
    results: pd.DataFrame,
    out_path: str | Path | None = None,
    title: str | None = None,
    meta_lines: Sequence[str] | None = None,
    dpi: int = 150,
) -> Figure:
    """
    Plot odds ratios per quantile bin with confidence intervals.

    Args:
        results: DataFrame with columns quantile, OR, OR_ci1, OR_ci2. Rows with
            a missing OR are left without a marker.
        out_path: Optional path to save the figure to
        title: Optional plot title
        meta_lines: Optional metadata lines to display at bottom
        dpi: Resolution used when saving

    Returns:
        A standalone matplotlib Figure, not registered with pyplot, so it
        is released like any other object once the caller drops it.
    """
    missing = {"quantile", "OR", "OR_ci1", "OR_ci2"} - set(results.columns)
    if missing:
        raise ValueError(f"results is missing required columns: {sorted(missing)}")

    x = results["quantile"].to_numpy(dtype=float)
    est = results["OR"].to_numpy(dtype=float)
    lo = results["OR_ci1"].to_numpy(dtype=float)
    hi = results["OR_ci2"].to_numpy(dtype=float)

    fig = Figure(figsize=(8, 5))
    ax = fig.add_subplot()

    has_ci = np.isfinite(est) & np.isfinite(lo) & np.isfinite(hi)
    ax.vlines(x[has_ci], lo[has_ci], hi[has_ci], color="black", linewidth=1.5)

    has_est = np.isfinite(est)
    ax.scatter(
        x[has_est],
        est[has_est],
        s=50,
        marker="o",
        facecolors="white",
        edgecolors="black",
        linewidths=1.2,
        zorder=3,
    )

    ax.axhline(y=1.0, color="gray", linestyle="--", linewidth=0.8, alpha=0.7)

    ax.set_xticks(x)
    ax.set_xticklabels([str(int(q)) for q in x])
    if len(x):
        ax.set_xlim(x.min() - 0.5, x.max() + 0.5)
    ax.set_xlabel("Quantiles", fontsize=12)
    ax.set_ylabel("Odds Ratio", fontsize=12)
    if title:
        ax.set_title(title, fontsize=13)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    bottom_margin = apply_plot_metadata(fig, meta_lines)
    fig.subplots_adjust(bottom=bottom_margin)

    if out_path is not None:
        out_path = Path(out_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight")

    return fig
