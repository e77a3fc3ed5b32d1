"""
Simulated cohorts for examples and tests.

Scores are drawn from a normal distribution and outcomes from a logistic
model on the score:

    logit P(case | pgs) = logit(baseline_prob) + beta * pgs
"""

import logging

import numpy as np
import pandas as pd
from scipy.special import expit, logit

logger = logging.getLogger(__name__)


def simulate_pgs_cohort(
    n: int = 10000,
    mean: float = 0.0,
    sd: float = 4.0,
    beta: float = 0.3,
    baseline_prob: float = 0.3,
    seed: int | None = 123,
    score_col: str = "pgs",
    outcome_col: str = "outcome",
) -> pd.DataFrame:
    """
    Simulate a cohort of scores and binary outcomes.

    Args:
        n: Number of individuals
        mean: Mean of the score distribution
        sd: Standard deviation of the score distribution
        beta: Log odds ratio per unit of score
        baseline_prob: Case probability at score 0
        seed: Seed for numpy's Generator (None = unseeded)
        score_col: Name of the score column
        outcome_col: Name of the outcome column

    Returns:
        DataFrame with columns [score_col, outcome_col]

    Raises:
        ValueError: If n < 1, sd <= 0 or baseline_prob not in (0, 1)
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    if sd <= 0:
        raise ValueError(f"sd must be > 0, got {sd}")
    if not (0.0 < baseline_prob < 1.0):
        raise ValueError(f"baseline_prob must be in (0, 1), got {baseline_prob}")

    rng = np.random.default_rng(seed)
    pgs = rng.normal(loc=mean, scale=sd, size=n)
    prob_case = expit(logit(baseline_prob) + beta * pgs)
    outcome = rng.binomial(1, prob_case)

    logger.debug(
        f"Simulated {n:,} individuals: {int(outcome.sum()):,} cases "
        f"(beta={beta}, baseline_prob={baseline_prob}, seed={seed})"
    )
    return pd.DataFrame({score_col: pgs, outcome_col: outcome.astype(int)})
