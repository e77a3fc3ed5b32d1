"""
Tests for the 2x2 odds ratio estimator.

Covers:
- Sample and conditional estimates with their intervals
- Chi-square, Fisher and mid-p p-values
- Option validation and estimator failure on degenerate tables
"""

import numpy as np
import pytest
from pgs_or.metrics.errors import EstimatorFailureError, InvalidArgumentError
from pgs_or.metrics.odds_ratio import (
    VALID_ESTIMATORS,
    VALID_PVALUE_METHODS,
    OddsRatioEstimate,
    estimate_odds_ratio,
    midp_exact_pvalue,
    midp_odds_ratio,
    validate_estimator_options,
)
from scipy import stats


@pytest.fixture
def moderate_table():
    """Baseline 90/10, test 80/20 controls/cases: sample OR 2.25."""
    return np.array([[90, 10], [80, 20]])


class TestSampleEstimator:
    """Tests for kind='sample' (cross-product ratio, Wald interval)."""

    def test_cross_product_ratio(self, moderate_table):
        est = estimate_odds_ratio(moderate_table, kind="sample")
        assert est.estimate == pytest.approx(2.25)

    def test_wald_interval(self, moderate_table):
        est = estimate_odds_ratio(moderate_table, kind="sample")
        se = np.sqrt(1 / 90 + 1 / 10 + 1 / 80 + 1 / 20)
        z = stats.norm.ppf(0.975)
        assert est.ci_low == pytest.approx(np.exp(np.log(2.25) - z * se), rel=1e-6)
        assert est.ci_high == pytest.approx(np.exp(np.log(2.25) + z * se), rel=1e-6)

    def test_row_swap_inverts_estimate(self, moderate_table):
        forward = estimate_odds_ratio(moderate_table, kind="sample")
        reverse = estimate_odds_ratio(moderate_table[::-1], kind="sample")
        assert reverse.estimate == pytest.approx(1 / forward.estimate)


class TestConditionalEstimator:
    """Tests for kind='conditional' (conditional MLE, exact interval)."""

    def test_close_to_sample_for_large_counts(self):
        table = np.array([[900, 100], [800, 200]])
        est = estimate_odds_ratio(table, kind="conditional")
        assert est.estimate == pytest.approx(2.25, rel=0.01)

    def test_interval_brackets_estimate(self, moderate_table):
        est = estimate_odds_ratio(moderate_table)
        assert est.ci_low < est.estimate < est.ci_high
        assert est.ci_low > 0

    def test_identical_rows_give_unit_or(self):
        est = estimate_odds_ratio(np.array([[95, 5], [95, 5]]))
        assert est.estimate == pytest.approx(1.0, abs=1e-3)
        assert est.ci_low < 1.0 < est.ci_high

    def test_higher_confidence_gives_wider_interval(self, moderate_table):
        narrow = estimate_odds_ratio(moderate_table, confidence_level=0.90)
        wide = estimate_odds_ratio(moderate_table, confidence_level=0.99)
        assert wide.ci_low < narrow.ci_low
        assert wide.ci_high > narrow.ci_high
        assert wide.estimate == pytest.approx(narrow.estimate)


class TestMidpEstimator:
    """Tests for kind='midp' (median-unbiased estimate, exact mid-p interval)."""

    def test_unit_table_by_hand(self):
        """
        For [[1, 1], [1, 1]] the test-row case count takes 0, 1, 2 with weights
        1, 4*psi, psi**2. Setting the upper mid-p tail (psi**2 + 2*psi) / (1 + 4*psi + psi**2)
        to 0.025 gives 0.975*psi**2 + 1.9*psi - 0.025 = 0; the upper limit is its reciprocal.
        """
        lower_limit = (-1.9 + np.sqrt(1.9**2 + 4 * 0.975 * 0.025)) / (2 * 0.975)
        est = estimate_odds_ratio(np.array([[1, 1], [1, 1]]), kind="midp")
        assert est.estimate == pytest.approx(1.0, rel=1e-6)
        assert est.ci_low == pytest.approx(lower_limit, rel=1e-5)
        assert est.ci_high == pytest.approx(1 / lower_limit, rel=1e-5)

    def test_estimate_splits_mid_p_mass(self, moderate_table):
        """At the estimate, half of the mid-p mass lies on each side of the observed count."""
        estimate, _, _ = midp_odds_ratio(moderate_table)
        dist = stats.nchypergeom_fisher(200, 30, 100, estimate)
        assert dist.cdf(19) + 0.5 * dist.pmf(20) == pytest.approx(0.5, abs=1e-8)

    def test_close_to_sample_for_large_counts(self):
        est = estimate_odds_ratio(np.array([[900, 100], [800, 200]]), kind="midp")
        assert est.estimate == pytest.approx(2.25, rel=0.02)
        assert est.ci_low < est.estimate < est.ci_high

    def test_row_swap_inverts_estimate(self, moderate_table):
        forward = estimate_odds_ratio(moderate_table, kind="midp")
        reverse = estimate_odds_ratio(moderate_table[::-1], kind="midp")
        assert reverse.estimate == pytest.approx(1 / forward.estimate, rel=1e-6)
        assert reverse.ci_low == pytest.approx(1 / forward.ci_high, rel=1e-6)

    @pytest.mark.parametrize(
        "table,excludes_one",
        [([[60, 40], [40, 60]], True), ([[50, 50], [45, 55]], False)],
    )
    def test_interval_agrees_with_midp_test(self, table, excludes_one):
        """The mid-p interval excludes 1 exactly when the mid-p test rejects at 5%."""
        est = estimate_odds_ratio(np.array(table), kind="midp", pvalue_method="midp")
        assert (est.ci_low > 1.0) == excludes_one
        assert (est.pvalue < 0.05) == excludes_one

    def test_higher_confidence_gives_wider_interval(self, moderate_table):
        narrow = estimate_odds_ratio(moderate_table, kind="midp", confidence_level=0.90)
        wide = estimate_odds_ratio(moderate_table, kind="midp", confidence_level=0.99)
        assert wide.ci_low < narrow.ci_low
        assert wide.ci_high > narrow.ci_high


class TestPValues:
    """Tests for the p-value methods."""

    def test_chi_square_matches_uncorrected_pearson(self, moderate_table):
        est = estimate_odds_ratio(moderate_table, pvalue_method="chi_square")
        expected = stats.chi2_contingency(moderate_table, correction=False).pvalue
        assert est.pvalue == pytest.approx(expected)

    def test_fisher_matches_scipy(self, moderate_table):
        est = estimate_odds_ratio(moderate_table, pvalue_method="fisher")
        assert est.pvalue == pytest.approx(stats.fisher_exact(moderate_table).pvalue)

    def test_midp_symmetric_table_is_one(self):
        """Observed count at the centre of a symmetric null distribution."""
        assert midp_exact_pvalue(np.array([[10, 10], [10, 10]])) == pytest.approx(1.0)

    def test_midp_strong_association_is_small(self):
        assert midp_exact_pvalue(np.array([[50, 5], [5, 50]])) < 1e-6

    def test_midp_does_not_exceed_fisher(self, moderate_table):
        """Equal row totals make the null symmetric; mid-p drops half the observed mass."""
        midp = estimate_odds_ratio(moderate_table, pvalue_method="midp").pvalue
        fisher = estimate_odds_ratio(moderate_table, pvalue_method="fisher").pvalue
        assert 0.0 < midp <= fisher

    def test_pvalue_independent_of_estimator(self, moderate_table):
        cond = estimate_odds_ratio(moderate_table, kind="conditional")
        samp = estimate_odds_ratio(moderate_table, kind="sample")
        assert cond.pvalue == pytest.approx(samp.pvalue)


class TestValidation:
    """Tests for option validation and failure modes."""

    def test_valid_options_listed(self):
        assert set(VALID_ESTIMATORS) == {"conditional", "midp", "sample"}
        assert set(VALID_PVALUE_METHODS) == {"chi_square", "fisher", "midp"}

    def test_unknown_estimator(self):
        with pytest.raises(InvalidArgumentError, match="estimator"):
            validate_estimator_options("wald", 0.95, "chi_square")

    def test_unknown_pvalue_method(self):
        with pytest.raises(InvalidArgumentError, match="pvalue_method"):
            validate_estimator_options("sample", 0.95, "exact")

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5, -0.2])
    def test_confidence_level_out_of_range(self, level):
        with pytest.raises(InvalidArgumentError, match="confidence_level"):
            validate_estimator_options("sample", level, "chi_square")

    def test_non_2x2_table(self):
        with pytest.raises(InvalidArgumentError, match="2x2"):
            estimate_odds_ratio(np.ones((2, 3), dtype=int))

    def test_zero_cell_fails(self):
        with pytest.raises(EstimatorFailureError, match="zero cell"):
            estimate_odds_ratio(np.array([[10, 0], [5, 5]]))

    def test_negative_count_fails(self):
        with pytest.raises(EstimatorFailureError, match="Negative"):
            estimate_odds_ratio(np.array([[10, -1], [5, 5]]))


class TestOddsRatioEstimate:
    """Tests for the result container."""

    def test_to_dict(self):
        est = OddsRatioEstimate(2.0, 1.5, 3.0, 0.01)
        assert est.to_dict() == {
            "estimate": 2.0,
            "ci_low": 1.5,
            "ci_high": 3.0,
            "pvalue": 0.01,
        }

    def test_all_fields_finite(self, moderate_table):
        est = estimate_odds_ratio(moderate_table)
        assert all(np.isfinite(list(est.to_dict().values())))
