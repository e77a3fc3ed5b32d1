"""
Group membership and 2x2 contingency tables for baseline-vs-bin comparisons.

Table layout (rows x columns)::

                 outcome=0   outcome=1
    baseline        a           b
    test            c           d

so that the sample odds ratio of the test bin versus the baseline is
(a * d) / (b * c).
"""

import numpy as np


def baseline_mask(scores: np.ndarray, ref_cutoff: float) -> np.ndarray:
    """Individuals in the baseline group: ``score <= ref_cutoff``."""
    return np.asarray(scores, dtype=float) <= ref_cutoff


def bin_mask(scores: np.ndarray, cutoff1: float, cutoff2: float) -> np.ndarray:
    """
    Individuals in a test bin: ``cutoff1 < score <= cutoff2``.

    The lower bound is strict, so a score exactly equal to ``cutoff1`` is
    never part of the test group.
    """
    s = np.asarray(scores, dtype=float)
    return (s > cutoff1) & (s <= cutoff2)


def contingency_table(
    baseline: np.ndarray, test: np.ndarray, outcome: np.ndarray
) -> np.ndarray:
    """
    Count individuals per group x outcome.

    Args:
        baseline: Boolean mask of the baseline group
        test: Boolean mask of the test group
        outcome: Binary outcome (0/1)

    Returns:
        2x2 int array ``[[baseline_controls, baseline_cases],
        [test_controls, test_cases]]``

    Examples:
        >>> y = np.array([0, 1, 0, 1, 1])
        >>> base = np.array([True, True, False, False, False])
        >>> contingency_table(base, ~base, y)
        array([[1, 1],
               [1, 2]])
    """
    case = np.asarray(outcome).astype(int) == 1
    baseline = np.asarray(baseline, dtype=bool)
    test = np.asarray(test, dtype=bool)

    return np.array(
        [
            [int(np.sum(baseline & ~case)), int(np.sum(baseline & case))],
            [int(np.sum(test & ~case)), int(np.sum(test & case))],
        ],
        dtype=int,
    )


def has_zero_cell(table: np.ndarray) -> bool:
    """True if any cell of the contingency table is zero."""
    return bool(np.any(np.asarray(table) == 0))
