"""
Configuration validation and safety checks.

Hard errors (malformed breakpoints, unknown estimator) are rejected by the
schema. This module reports soft issues according to the strictness level.
"""

import warnings

import numpy as np

from pgs_or.config.schema import ORConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails in strict mode."""

    pass


class ConfigValidationWarning(UserWarning):
    """Warning for potential configuration issues."""

    pass


def validate_or_config(config: ORConfig, n_samples: int | None = None) -> list[str]:
    """
    Check an OR configuration for soft issues.

    Args:
        config: ORConfig instance
        n_samples: Number of individuals the run will use; enables the
            expected-bin-size check

    Returns:
        List of issue messages (empty if none)

    Raises:
        ConfigValidationError: If issues are found and strictness level is "error"
    """
    strictness = config.strictness.level
    issues = []
    bp = np.asarray(config.breakpoints, dtype=float)

    if config.strictness.check_breakpoint_span:
        if bp[0] != 0.0:
            issues.append(
                f"First breakpoint is {bp[0]}, not 0.0; the baseline group still includes "
                "every score at or below its upper cutoff."
            )
        if bp[-1] != 1.0:
            issues.append(
                f"Last breakpoint is {bp[-1]}, not 1.0; "
                "scores above its cutoff are not assigned to any bin."
            )

    if len(bp) == 2:
        issues.append("Only one bin requested: no comparisons against the baseline will be made.")

    if n_samples is not None and config.strictness.min_expected_bin_size > 0:
        expected = float(np.min(np.diff(bp))) * n_samples
        if expected < config.strictness.min_expected_bin_size:
            issues.append(
                f"Smallest bin is expected to hold ~{expected:.1f} individuals "
                f"(< {config.strictness.min_expected_bin_size}); zero-cell bins are likely."
            )

    if not config.create_plot and config.output.save_plot:
        issues.append("output.save_plot=True has no effect because create_plot=False.")

    _handle_issues(issues, strictness, "OR configuration")
    return issues


def _handle_issues(issues: list[str], strictness: str, context: str):
    """Handle validation issues based on strictness level."""
    if not issues:
        return

    message = f"{context} issues:\n" + "\n".join(f"  - {issue}" for issue in issues)

    if strictness == "error":
        raise ConfigValidationError(message)
    elif strictness == "warn":
        warnings.warn(message, ConfigValidationWarning, stacklevel=3)
