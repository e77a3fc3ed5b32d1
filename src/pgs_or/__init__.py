"""
pgs-or: odds ratios of a binary outcome across quantiles of a risk score

Bins a continuous risk score (e.g. a polygenic score) by quantile, compares
each bin against the lowest bin with 2x2 contingency tables, and reports odds
ratios, confidence intervals, p-values and a summary plot.
"""

import pandas as pd

# Copy-on-Write is always on from pandas 3, where setting the option warns.
# See: https://pandas.pydata.org/docs/user_guide/copy_on_write.html
if int(pd.__version__.split(".")[0]) < 3:
    pd.options.mode.copy_on_write = True

__version__ = "1.0.0"
__license__ = "MIT"

from pgs_or import (  # noqa: E402
    config,
    data,
    evaluation,
    metrics,
    plotting,
    utils,
)
from pgs_or.evaluation import ORByQuantileResult, compute_or_by_quantile  # noqa: E402
from pgs_or.metrics import (  # noqa: E402
    DEFAULT_BREAKPOINTS,
    DegenerateBinWarning,
    EstimatorFailureError,
    InvalidArgumentError,
)

__all__ = [
    "__version__",
    "config",
    "data",
    "evaluation",
    "metrics",
    "plotting",
    "utils",
    "compute_or_by_quantile",
    "ORByQuantileResult",
    "DEFAULT_BREAKPOINTS",
    "InvalidArgumentError",
    "EstimatorFailureError",
    "DegenerateBinWarning",
]
