"""
Odds ratios of a binary outcome across quantile bins of a risk score.

Every bin above the lowest is compared against the same baseline group (all
individuals at or below the upper cutoff of the lowest bin). For each bin a
2x2 table (baseline/test x control/case) is built and passed to the odds
ratio estimator. Bins whose table has an empty cell are reported as
degenerate and left undefined; the remaining bins are still computed.

Group membership:
    baseline: score <= R, where R = cutoff2 of bin 1 (computed once)
    test i:   cutoff1_i < score <= cutoff2_i
"""

import logging
import warnings
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from matplotlib.figure import Figure

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
    EstimatorKind,
    PValueMethod,
    estimate_odds_ratio,
    validate_estimator_options,
)
from pgs_or.metrics.quantiles import (
    DEFAULT_BREAKPOINTS,
    build_bin_table,
    validate_breakpoints,
)
from pgs_or.plotting.odds_ratio import plot_or_by_quantile

logger = logging.getLogger(__name__)

RESULT_COLUMNS: list[str] = ["quantile", "OR", "OR_ci1", "OR_ci2", "pval"]
COUNT_COLUMNS: list[str] = [
    "n_baseline_controls",
    "n_baseline_cases",
    "n_test_controls",
    "n_test_cases",
]


@dataclass(frozen=True)
class ORByQuantileResult:
    """
    Output of compute_or_by_quantile().

    Attributes:
        results: One row per bin with columns quantile, OR, OR_ci1, OR_ci2, pval.
            Row 1 is the baseline (OR = 1, no interval or p-value). Undefined
            statistics are NaN.
        quantiles: The breakpoints used, echoed unchanged
        plot: Figure of OR by bin, or None if no plot was requested
        bins: Full bin table (probability bounds, score cutoffs, contingency
            counts, status, statistics)
        diagnostics: One message per bin whose statistics could not be estimated
    """

    results: pd.DataFrame
    quantiles: list[float]
    plot: Figure | None = None
    bins: pd.DataFrame = field(default_factory=pd.DataFrame)
    diagnostics: list[str] = field(default_factory=list)

    @property
    def n_bins(self) -> int:
        return len(self.results)

    @property
    def degenerate_bins(self) -> list[int]:
        """Bin indices whose statistics are undefined (excluding the baseline)."""
        if self.bins.empty:
            return []
        mask = ~self.bins["status"].isin(["baseline", "ok"])
        return self.bins.loc[mask, "quantile"].astype(int).tolist()


def _validate_inputs(scores, outcome) -> tuple[np.ndarray, np.ndarray]:
    """Coerce scores/outcome to arrays and check shape, finiteness and labels."""
    try:
        s = np.asarray(scores, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"scores must be numeric: {e}") from e

    try:
        y_raw = np.asarray(outcome, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"outcome must be binary 0/1: {e}") from e

    if s.ndim != 1 or y_raw.ndim != 1:
        raise InvalidArgumentError(
            f"scores and outcome must be 1-D, got shapes {s.shape} and {y_raw.shape}"
        )
    if len(s) != len(y_raw):
        raise InvalidArgumentError(
            f"Length mismatch: scores has {len(s)} elements, outcome has {len(y_raw)} elements"
        )
    if len(s) == 0:
        raise InvalidArgumentError("scores and outcome must not be empty")
    if not np.all(np.isfinite(s)):
        n_bad = int(np.sum(~np.isfinite(s)))
        raise InvalidArgumentError(f"scores contain {n_bad} missing or non-finite values")

    labels = np.unique(y_raw)
    if not np.all(np.isin(labels, [0.0, 1.0])):
        raise InvalidArgumentError(
            f"outcome must contain only 0 (control) and 1 (case), found {labels.tolist()}"
        )

    return s, y_raw.astype(int)


def _warn_degenerate(message: str, diagnostics: list[str]) -> None:
    diagnostics.append(message)
    logger.warning(message)
    warnings.warn(message, DegenerateBinWarning, stacklevel=3)


def compute_or_by_quantile(
    scores: Sequence[float] | np.ndarray,
    outcome: Sequence[int] | np.ndarray,
    breakpoints: Sequence[float] = DEFAULT_BREAKPOINTS,
    create_plot: bool = True,
    *,
    estimator: EstimatorKind = "conditional",
    confidence_level: float = 0.95,
    pvalue_method: PValueMethod = "chi_square",
    plot_title: str | None = None,
) -> ORByQuantileResult:
    """
    Compute odds ratios of an outcome for each score quantile bin vs. the lowest bin.

    Args:
        scores: Risk score per individual, shape (n_samples,)
        outcome: Binary outcome per individual (1 = case, 0 = control)
        breakpoints: Strictly increasing probabilities in [0, 1] defining the
            bins (default: deciles)
        create_plot: If True, build a figure of OR by bin (default: True)
        estimator: "conditional" (conditional MLE, exact CI; default) or
            "sample" (sample OR, Wald CI)
        confidence_level: Confidence level of the intervals (default: 0.95)
        pvalue_method: "chi_square" (default), "fisher" or "midp"
        plot_title: Optional title for the figure

    Returns:
        ORByQuantileResult with one row per bin

    Raises:
        InvalidArgumentError: On mismatched or empty inputs, non-finite scores,
            non-binary outcomes, invalid breakpoints or estimator options

    Warns:
        DegenerateBinWarning for each bin whose contingency table has a zero
        cell or whose estimation failed. Such bins are returned with NaN
        statistics.

    Examples:
        >>> rng = np.random.default_rng(0)
        >>> pgs = rng.normal(0, 4, size=2000)
        >>> y = rng.binomial(1, 1 / (1 + np.exp(-(0.3 * pgs - 0.85))))
        >>> res = compute_or_by_quantile(pgs, y, [0, 0.5, 1], create_plot=False)
        >>> res.results["quantile"].tolist()
        [1, 2]
    """
    s, y = _validate_inputs(scores, outcome)
    bp = validate_breakpoints(breakpoints)
    validate_estimator_options(estimator, confidence_level, pvalue_method)

    bins = build_bin_table(s, bp)
    k = len(bins)
    logger.debug(
        f"Computing OR for {k} bins over {len(s):,} individuals ({int(y.sum()):,} cases)"
    )

    bins["OR"] = np.nan
    bins["OR_ci1"] = np.nan
    bins["OR_ci2"] = np.nan
    bins["pval"] = np.nan
    for col in COUNT_COLUMNS:
        bins[col] = pd.array([pd.NA] * k, dtype="Int64")
    bins["status"] = "ok"

    bins.loc[0, "OR"] = 1.0
    bins.loc[0, "status"] = "baseline"

    ref_cutoff = float(bins.loc[0, "cutoff2"])
    in_baseline = baseline_mask(s, ref_cutoff)

    diagnostics: list[str] = []
    for i in range(1, k):
        q = int(bins.loc[i, "quantile"])
        in_test = bin_mask(s, bins.loc[i, "cutoff1"], bins.loc[i, "cutoff2"])
        table = contingency_table(in_baseline, in_test, y)
        bins.loc[i, COUNT_COLUMNS] = table.ravel().tolist()

        if has_zero_cell(table):
            bins.loc[i, "status"] = "zero_cell"
            _warn_degenerate(
                f"Cannot compute OR for quantile {q} with 0 observations in a cell "
                f"(baseline controls/cases={table[0, 0]}/{table[0, 1]}, "
                f"test controls/cases={table[1, 0]}/{table[1, 1]})",
                diagnostics,
            )
            continue

        try:
            est = estimate_odds_ratio(
                table,
                kind=estimator,
                confidence_level=confidence_level,
                pvalue_method=pvalue_method,
            )
        except EstimatorFailureError as e:
            bins.loc[i, "status"] = "estimator_failure"
            _warn_degenerate(f"Cannot compute OR for quantile {q}: {e}", diagnostics)
            continue

        bins.loc[i, ["OR", "OR_ci1", "OR_ci2", "pval"]] = [
            est.estimate,
            est.ci_low,
            est.ci_high,
            est.pvalue,
        ]

    results = bins[RESULT_COLUMNS].reset_index(drop=True)

    plot = None
    if create_plot:
        meta_lines = [
            f"n={len(s):,} (cases={int(y.sum()):,}), bins={k}",
            f"estimator={estimator}, CI={confidence_level:.0%}, p-value={pvalue_method}",
        ]
        plot = plot_or_by_quantile(results, title=plot_title, meta_lines=meta_lines)

    return ORByQuantileResult(
        results=results,
        quantiles=bp.tolist(),
        plot=plot,
        bins=bins,
        diagnostics=diagnostics,
    )
