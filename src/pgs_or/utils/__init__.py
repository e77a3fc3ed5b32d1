"""Utility functions for pgs-or."""

from pgs_or.utils.logging import log_section, setup_logger, verbosity_to_level

__all__ = [
    "setup_logger",
    "log_section",
    "verbosity_to_level",
]
