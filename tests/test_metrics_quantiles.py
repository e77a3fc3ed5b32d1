"""
Tests for quantile binning.

Covers:
- Breakpoint validation (count, range, ordering, finiteness)
- Type-7 quantile cutoffs
- Bin table layout and monotone cutoffs
"""

import numpy as np
import pytest
from pgs_or.metrics.errors import InvalidArgumentError
from pgs_or.metrics.quantiles import (
    DEFAULT_BREAKPOINTS,
    build_bin_table,
    quantile_cutoffs,
    validate_breakpoints,
)


class TestValidateBreakpoints:
    """Tests for validate_breakpoints."""

    def test_default_is_deciles(self):
        bp = validate_breakpoints(DEFAULT_BREAKPOINTS)
        assert len(bp) == 11
        assert bp[0] == 0.0
        assert bp[-1] == 1.0
        np.testing.assert_allclose(np.diff(bp), 0.1)

    def test_default_is_immutable(self):
        assert isinstance(DEFAULT_BREAKPOINTS, tuple)

    def test_returns_float_array(self):
        bp = validate_breakpoints([0, 0.5, 1])
        assert bp.dtype == float
        assert bp.tolist() == [0.0, 0.5, 1.0]

    @pytest.mark.parametrize("bad", [[], [0.5]])
    def test_fewer_than_two(self, bad):
        """A single breakpoint defines no bin."""
        with pytest.raises(InvalidArgumentError, match="At least 2 breakpoints"):
            validate_breakpoints(bad)

    @pytest.mark.parametrize("bad", [[-0.1, 0.5, 1.0], [0.0, 0.5, 1.2]])
    def test_outside_unit_interval(self, bad):
        with pytest.raises(InvalidArgumentError, match=r"\[0, 1\]"):
            validate_breakpoints(bad)

    def test_not_increasing(self):
        with pytest.raises(InvalidArgumentError, match="strictly increasing"):
            validate_breakpoints([0.0, 0.6, 0.4, 1.0])

    def test_duplicates_rejected(self):
        """Zero-width bins are rejected."""
        with pytest.raises(InvalidArgumentError, match="strictly increasing"):
            validate_breakpoints([0.0, 0.5, 0.5, 1.0])

    def test_nan_rejected(self):
        with pytest.raises(InvalidArgumentError, match="finite"):
            validate_breakpoints([0.0, np.nan, 1.0])

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidArgumentError, match="numeric"):
            validate_breakpoints(["low", "high"])

    def test_is_value_error(self):
        """InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_breakpoints([1.0])


class TestQuantileCutoffs:
    """Tests for quantile_cutoffs (linear interpolation, type 7)."""

    def test_matches_type7_definition(self):
        """quantile(1:10, 0.25) is 3.25 under type 7."""
        cut = quantile_cutoffs(np.arange(1, 11), [0.25])
        assert cut[0] == pytest.approx(3.25)

    def test_extremes_are_min_and_max(self):
        scores = np.array([5.0, -2.0, 9.5, 0.0])
        cut = quantile_cutoffs(scores, [0.0, 1.0])
        assert cut.tolist() == [-2.0, 9.5]

    def test_order_of_input_does_not_matter(self):
        rng = np.random.default_rng(0)
        scores = rng.normal(size=101)
        probs = [0.1, 0.5, 0.9]
        np.testing.assert_allclose(
            quantile_cutoffs(scores, probs), quantile_cutoffs(rng.permutation(scores), probs)
        )


class TestBuildBinTable:
    """Tests for build_bin_table."""

    def test_one_row_per_bin(self):
        bins = build_bin_table(np.arange(1, 101), DEFAULT_BREAKPOINTS)
        assert len(bins) == 10
        assert bins["quantile"].tolist() == list(range(1, 11))
        assert list(bins.columns) == [
            "quantile",
            "lower_bound",
            "upper_bound",
            "cutoff1",
            "cutoff2",
        ]

    def test_probability_bounds_are_consecutive_pairs(self):
        bins = build_bin_table(np.arange(10), [0.0, 0.25, 0.75, 1.0])
        assert bins["lower_bound"].tolist() == [0.0, 0.25, 0.75]
        assert bins["upper_bound"].tolist() == [0.25, 0.75, 1.0]

    def test_decile_cutoffs_for_1_to_100(self):
        """Baseline upper cutoff of 1..100 is 1 + 0.1 * 99 = 10.9."""
        bins = build_bin_table(np.arange(1, 101), DEFAULT_BREAKPOINTS)
        assert bins.loc[0, "cutoff1"] == pytest.approx(1.0)
        assert bins.loc[0, "cutoff2"] == pytest.approx(10.9)
        assert bins.loc[9, "cutoff2"] == pytest.approx(100.0)

    def test_cutoffs_non_decreasing(self):
        rng = np.random.default_rng(42)
        scores = rng.normal(0, 4, size=500)
        bins = build_bin_table(scores, DEFAULT_BREAKPOINTS)
        assert np.all(np.diff(bins["cutoff1"]) >= 0)
        assert np.all(np.diff(bins["cutoff2"]) >= 0)
        # Upper cutoff of bin i equals lower cutoff of bin i+1
        np.testing.assert_allclose(bins["cutoff2"].to_numpy()[:-1], bins["cutoff1"].to_numpy()[1:])

    def test_tied_scores_give_equal_cutoffs(self):
        bins = build_bin_table(np.ones(20), [0.0, 0.5, 1.0])
        assert bins["cutoff1"].tolist() == [1.0, 1.0]
        assert bins["cutoff2"].tolist() == [1.0, 1.0]
