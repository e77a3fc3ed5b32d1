"""Configuration management for odds-ratio-by-quantile runs."""

from pgs_or.config.defaults import (
    DEFAULT_ESTIMATOR_CONFIG,
    DEFAULT_INPUT_CONFIG,
    DEFAULT_OR_CONFIG,
    DEFAULT_OUTPUT_CONFIG,
    DEFAULT_STRICTNESS_CONFIG,
)
from pgs_or.config.loader import (
    apply_overrides,
    load_or_config,
    load_yaml,
    print_config_summary,
    save_config,
)
from pgs_or.config.schema import (
    EstimatorConfig,
    InputConfig,
    ORConfig,
    OutputConfig,
    StrictnessConfig,
)
from pgs_or.config.validation import (
    ConfigValidationError,
    ConfigValidationWarning,
    validate_or_config,
)

__all__ = [
    "DEFAULT_OR_CONFIG",
    "DEFAULT_INPUT_CONFIG",
    "DEFAULT_ESTIMATOR_CONFIG",
    "DEFAULT_OUTPUT_CONFIG",
    "DEFAULT_STRICTNESS_CONFIG",
    "apply_overrides",
    "load_or_config",
    "load_yaml",
    "print_config_summary",
    "save_config",
    "ORConfig",
    "InputConfig",
    "EstimatorConfig",
    "OutputConfig",
    "StrictnessConfig",
    "ConfigValidationError",
    "ConfigValidationWarning",
    "validate_or_config",
]
