"""
Shared pytest fixtures for pgs-or tests.
"""

import logging

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _close_figures():
    """Close every figure a test leaves open."""
    yield
    plt.close("all")


@pytest.fixture(autouse=True)
def _reset_cli_logger():
    """Drop handlers installed by CLI runs so later tests log through caplog."""
    yield
    logger = logging.getLogger("pgs_or")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def graded_risk_data():
    """
    1000 individuals with scores 1..1000 and a risk jump in the top decile.

    Every 20th individual is a case (5% risk); in the top decile (scores
    901..1000) every even score is a case (50% risk). With deciles, the
    baseline and bins 2-9 each hold 95 controls and 5 cases, bin 10 holds
    50 controls and 50 cases.
    """
    scores = np.arange(1, 1001, dtype=float)
    outcome = ((scores % 20 == 0) | ((scores > 900) & (scores % 2 == 0))).astype(int)
    return scores, outcome


@pytest.fixture
def top_tail_cases():
    """Scores 1..100 with cases only at scores 95..100."""
    scores = np.arange(1, 101, dtype=float)
    outcome = (scores >= 95).astype(int)
    return scores, outcome


@pytest.fixture
def score_table_csv(tmp_path, graded_risk_data):
    """CSV file with pgs/outcome columns built from graded_risk_data."""
    scores, outcome = graded_risk_data
    path = tmp_path / "cohort.csv"
    pd.DataFrame({"pgs": scores, "outcome": outcome}).to_csv(path, index=False)
    return path
