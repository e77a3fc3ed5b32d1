"""
Odds ratio estimation for a single 2x2 contingency table.

Estimators:
- ``conditional``: conditional maximum likelihood estimate with exact
  confidence interval (Fisher's noncentral hypergeometric model)
- ``midp``: median-unbiased estimate with exact mid-p confidence interval
  (the same noncentral hypergeometric model, half weight on the observed count)
- ``sample``: sample odds ratio (a*d)/(b*c) with Wald interval on log(OR)

P-values for the null hypothesis OR = 1:
- ``chi_square``: Pearson chi-square test without continuity correction
- ``fisher``: Fisher's exact test
- ``midp``: exact mid-p test from the conditional hypergeometric distribution

References:
    - Rothman, Greenland & Lash (2008). Modern Epidemiology, 3rd ed., ch. 14.
    - Agresti (2013). Categorical Data Analysis, 3rd ed., section 3.5.
"""

from dataclasses import asdict, dataclass
from typing import Literal

import numpy as np
from scipy import optimize, stats
from scipy.stats.contingency import odds_ratio

from pgs_or.metrics.contingency import has_zero_cell
from pgs_or.metrics.errors import EstimatorFailureError, InvalidArgumentError

EstimatorKind = Literal["conditional", "midp", "sample"]
PValueMethod = Literal["chi_square", "fisher", "midp"]

VALID_ESTIMATORS: tuple[str, ...] = ("conditional", "midp", "sample")
VALID_PVALUE_METHODS: tuple[str, ...] = ("chi_square", "fisher", "midp")


@dataclass(frozen=True)
class OddsRatioEstimate:
    """Point estimate, confidence interval and p-value for one 2x2 table."""

    estimate: float
    ci_low: float
    ci_high: float
    pvalue: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def validate_estimator_options(
    kind: str, confidence_level: float, pvalue_method: str
) -> None:
    """
    Check estimator options before any computation.

    Raises:
        InvalidArgumentError: If any option is not supported
    """
    if kind not in VALID_ESTIMATORS:
        raise InvalidArgumentError(f"estimator must be one of {VALID_ESTIMATORS}, got '{kind}'")
    if pvalue_method not in VALID_PVALUE_METHODS:
        raise InvalidArgumentError(
            f"pvalue_method must be one of {VALID_PVALUE_METHODS}, got '{pvalue_method}'"
        )
    if not (0.0 < confidence_level < 1.0):
        raise InvalidArgumentError(
            f"confidence_level must be in (0, 1), got {confidence_level}"
        )


def midp_exact_pvalue(table: np.ndarray) -> float:
    """
    Two-sided exact mid-p value for a 2x2 table.

    Conditions on all margins; the count in the top-left cell then follows a
    hypergeometric distribution under OR = 1. The one-sided mid-p values put
    half the probability of the observed count on each side and the two-sided
    value is twice the smaller one, capped at 1.
    """
    t = np.asarray(table, dtype=int)
    a = int(t[0, 0])
    total = int(t.sum())
    row0 = int(t[0].sum())
    col0 = int(t[:, 0].sum())

    dist = stats.hypergeom(total, col0, row0)
    half_obs = 0.5 * dist.pmf(a)
    lower = dist.cdf(a - 1) + half_obs
    upper = dist.sf(a) + half_obs
    return float(min(1.0, 2.0 * min(lower, upper)))


def _midp_tails(table: np.ndarray):
    """
    Lower and upper mid-p tails of the test-row case count as functions of the OR.

    With all margins fixed, the test-row case count follows Fisher's
    noncentral hypergeometric distribution whose odds parameter is the odds
    ratio. The lower tail falls and the upper tail rises as the OR grows.
    """
    x = int(table[1, 1])
    total = int(table.sum())
    n_cases = int(table[:, 1].sum())
    n_test = int(table[1].sum())

    def lower(psi: float) -> float:
        dist = stats.nchypergeom_fisher(total, n_cases, n_test, psi)
        return float(dist.cdf(x - 1) + 0.5 * dist.pmf(x))

    def upper(psi: float) -> float:
        dist = stats.nchypergeom_fisher(total, n_cases, n_test, psi)
        return float(dist.sf(x) + 0.5 * dist.pmf(x))

    return lower, upper


def _solve_odds_ratio(tail, target: float, start: float) -> float:
    """Find the OR at which ``tail(OR) == target``, searching on the log scale around ``start``."""

    def objective(log_psi: float) -> float:
        return tail(float(np.exp(log_psi))) - target

    lo, hi = start - 2.0, start + 2.0
    for _ in range(20):
        if objective(lo) * objective(hi) <= 0:
            return float(np.exp(optimize.brentq(objective, lo, hi, xtol=1e-10)))
        lo, hi = lo - 2.0, hi + 2.0
    raise EstimatorFailureError(f"No odds ratio within [{np.exp(lo):.3g}, {np.exp(hi):.3g}]")


def midp_odds_ratio(
    table: np.ndarray, confidence_level: float = 0.95
) -> tuple[float, float, float]:
    """
    Median-unbiased odds ratio with exact mid-p confidence limits.

    The estimate is the OR at which both mid-p tails equal 0.5. The lower
    limit is where the upper tail equals (1 - confidence_level) / 2 and the
    upper limit is where the lower tail does.

    Args:
        table: 2x2 counts with no zero cell
        confidence_level: Confidence level of the interval

    Returns:
        (estimate, ci_low, ci_high)

    Examples:
        >>> est, lo, hi = midp_odds_ratio(np.array([[1, 1], [1, 1]]))
        >>> round(est, 6)
        1.0
    """
    t = np.asarray(table, dtype=int)
    alpha = 1.0 - confidence_level
    lower, upper = _midp_tails(t)
    # Start from the sample odds ratio; finite because no cell is zero
    start = float(np.log(t[0, 0] * t[1, 1]) - np.log(t[0, 1] * t[1, 0]))

    estimate = _solve_odds_ratio(lower, 0.5, start)
    ci_low = _solve_odds_ratio(upper, alpha / 2, start)
    ci_high = _solve_odds_ratio(lower, alpha / 2, start)
    return estimate, ci_low, ci_high


def _pvalue(table: np.ndarray, method: PValueMethod) -> float:
    if method == "chi_square":
        return float(stats.chi2_contingency(table, correction=False).pvalue)
    if method == "fisher":
        return float(stats.fisher_exact(table).pvalue)
    return midp_exact_pvalue(table)


def estimate_odds_ratio(
    table: np.ndarray,
    kind: EstimatorKind = "conditional",
    confidence_level: float = 0.95,
    pvalue_method: PValueMethod = "chi_square",
) -> OddsRatioEstimate:
    """
    Estimate the odds ratio of row 2 versus row 1 of a 2x2 table.

    Args:
        table: 2x2 non-negative integer counts ``[[a, b], [c, d]]`` with rows
            (reference, exposed) and columns (outcome=0, outcome=1)
        kind: "conditional" (conditional MLE, exact CI), "midp"
            (median-unbiased, exact mid-p CI) or "sample" ((a*d)/(b*c), Wald CI)
        confidence_level: Confidence level of the interval (default: 0.95)
        pvalue_method: "chi_square" (default), "fisher" or "midp"

    Returns:
        OddsRatioEstimate with finite estimate, interval and p-value

    Raises:
        InvalidArgumentError: If options are invalid or table is not 2x2
        EstimatorFailureError: If the table has a zero cell, negative counts,
            or the estimator fails or returns non-finite values

    Examples:
        >>> est = estimate_odds_ratio(np.array([[90, 10], [80, 20]]), kind="sample")
        >>> round(est.estimate, 4)
        2.25
    """
    validate_estimator_options(kind, confidence_level, pvalue_method)

    t = np.asarray(table)
    if t.shape != (2, 2):
        raise InvalidArgumentError(f"Expected a 2x2 table, got shape {t.shape}")
    if np.any(t < 0):
        raise EstimatorFailureError(f"Negative counts in contingency table: {t.tolist()}")
    if has_zero_cell(t):
        raise EstimatorFailureError(
            f"Cannot estimate odds ratio with a zero cell: {t.tolist()}"
        )
    t = t.astype(int)

    try:
        if kind == "midp":
            estimate, ci_low, ci_high = midp_odds_ratio(t, confidence_level)
        else:
            res = odds_ratio(t, kind=kind)
            ci = res.confidence_interval(confidence_level=confidence_level)
            estimate, ci_low, ci_high = res.statistic, ci.low, ci.high
        pval = _pvalue(t, pvalue_method)
    except (ValueError, ArithmeticError, RuntimeError) as e:
        raise EstimatorFailureError(f"Odds ratio estimation failed: {e}") from e

    values = (float(estimate), float(ci_low), float(ci_high), pval)
    if not all(np.isfinite(values)):
        raise EstimatorFailureError(
            f"Odds ratio estimator returned non-finite values {values} for {t.tolist()}"
        )

    return OddsRatioEstimate(*values)
