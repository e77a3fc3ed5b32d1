"""
Error and warning categories for odds-ratio-by-quantile analysis.

Input validation failures abort the call. Per-bin problems (zero cells,
estimator failures) are reported as warnings and leave that bin undefined.
"""


class InvalidArgumentError(ValueError):
    """Raised when scores, outcomes, breakpoints or estimator options are invalid."""

    pass


class EstimatorFailureError(RuntimeError):
    """Raised when the odds-ratio estimator cannot produce a finite result."""

    pass


class DegenerateBinWarning(UserWarning):
    """Warning for a quantile bin whose statistics cannot be estimated."""

    pass
