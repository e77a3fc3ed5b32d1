"""
Configuration loading and merging logic.

Precedence (lowest to highest):
1. Defaults (config/defaults.py)
2. YAML file (optionally inheriting from a ``_base`` file)
3. Explicit CLI arguments
4. ``--override`` strings in dot-notation (e.g. estimator.kind=sample)
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pgs_or.config.defaults import (
    DEFAULT_ESTIMATOR_CONFIG,
    DEFAULT_INPUT_CONFIG,
    DEFAULT_OR_CONFIG,
    DEFAULT_OUTPUT_CONFIG,
    DEFAULT_STRICTNESS_CONFIG,
)
from pgs_or.config.schema import ORConfig

# Keys that should always be lists
LIST_KEYS = {"breakpoints"}

# Keys that should always be strings (not parsed as int/float/bool)
STRING_KEYS = {"score_col", "outcome_col", "sep", "plot_title"}

# Keys holding paths that are resolved relative to the config file
PATH_KEYS = {"infile", "outdir"}


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overlay* into *base* (overlay wins on leaf conflicts).

    Returns a new dict; neither input is mutated.
    """
    merged = base.copy()
    for key, value in overlay.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_yaml(file_path: str | Path) -> dict[str, Any]:
    """Load configuration from YAML file.

    Supports a ``_base`` key: if present, the referenced YAML file is loaded
    first and the current file's values are deep-merged on top. The ``_base``
    path is resolved relative to the directory containing *file_path*.
    """
    file_path = Path(file_path).resolve()
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping at top level: {file_path}")

    base_ref = config_dict.pop("_base", None)
    if base_ref is not None:
        base_path = (file_path.parent / base_ref).resolve()
        config_dict = _deep_merge(load_yaml(base_path), config_dict)

    return config_dict


def resolve_paths_relative_to_config(
    config_dict: dict[str, Any], config_file: Path
) -> dict[str, Any]:
    """
    Resolve relative path values (``infile``, ``outdir``) against the config file directory.

    Absolute paths and non-path keys are left untouched.
    """
    config_dir = Path(config_file).resolve().parent

    def resolve(node: Any) -> Any:
        if not isinstance(node, dict):
            return node
        out = {}
        for key, value in node.items():
            if key in PATH_KEYS and isinstance(value, str) and not Path(value).is_absolute():
                out[key] = str(config_dir / value)
            else:
                out[key] = resolve(value)
        return out

    return resolve(config_dict)


def _set_nested(config_dict: dict[str, Any], key_path: str, value: Any) -> None:
    keys = key_path.split(".")
    target = config_dict
    for key in keys[:-1]:
        if not isinstance(target.get(key), dict):
            target[key] = {}
        target = target[key]
    target[keys[-1]] = value


def apply_overrides(config_dict: dict[str, Any], overrides: list[str]) -> dict[str, Any]:
    """
    Apply CLI overrides to config dictionary.

    Supports dot-notation for nested keys:
        estimator.kind=sample -> config_dict['estimator']['kind'] = 'sample'
        breakpoints=0,0.25,0.5,0.75,1 -> config_dict['breakpoints'] = [0, 0.25, ...]

    Args:
        config_dict: Base configuration dictionary
        overrides: List of "key=value" or "nested.key=value" strings

    Returns:
        Updated config dictionary
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected 'key=value'")

        key_path, value_str = override.split("=", 1)
        final_key = key_path.split(".")[-1]
        value = _parse_value(
            value_str,
            force_list=final_key in LIST_KEYS,
            force_string=final_key in STRING_KEYS,
        )
        _set_nested(config_dict, key_path, value)

    return config_dict


def _parse_scalar(value_str: str) -> Any:
    try:
        return int(value_str)
    except ValueError:
        pass
    try:
        return float(value_str)
    except ValueError:
        pass
    return value_str


def _parse_value(value_str: str, force_list: bool = False, force_string: bool = False) -> Any:
    """
    Parse string value to appropriate Python type.

    Args:
        value_str: String to parse
        force_list: If True, always return a list of numbers/strings
        force_string: If True, always return a string (skip type parsing)
    """
    if force_string:
        return value_str

    if force_list:
        return [_parse_scalar(v.strip()) for v in value_str.split(",") if v.strip()]

    if value_str.lower() in ("true", "yes"):
        return True
    if value_str.lower() in ("false", "no"):
        return False

    if value_str.lower() in ("none", "null"):
        return None

    if "," in value_str:
        return [_parse_scalar(v.strip()) for v in value_str.split(",")]

    return _parse_scalar(value_str)


def default_config_dict() -> dict[str, Any]:
    """Fresh nested dict of default values."""
    config_dict = copy.deepcopy(DEFAULT_OR_CONFIG)
    config_dict["input"] = DEFAULT_INPUT_CONFIG.copy()
    config_dict["estimator"] = DEFAULT_ESTIMATOR_CONFIG.copy()
    config_dict["output"] = DEFAULT_OUTPUT_CONFIG.copy()
    config_dict["strictness"] = DEFAULT_STRICTNESS_CONFIG.copy()
    return config_dict


def load_or_config(
    config_file: str | Path | None = None,
    cli_args: dict[str, Any] | None = None,
    overrides: list[str] | None = None,
) -> ORConfig:
    """
    Load an odds-ratio run configuration.

    Args:
        config_file: Path to YAML config file (optional)
        cli_args: Explicit CLI values keyed by dotted path (e.g. "input.infile");
            None values are ignored
        overrides: List of CLI overrides in "key=value" format (optional)

    Returns:
        Validated ORConfig instance

    Raises:
        ValueError: If the merged configuration fails schema validation
    """
    config_dict = default_config_dict()

    if config_file is not None:
        config_file_path = Path(config_file)
        file_config = load_yaml(config_file_path)
        file_config = resolve_paths_relative_to_config(file_config, config_file_path)
        config_dict = _deep_merge(config_dict, file_config)

    if cli_args:
        for key_path, value in cli_args.items():
            if value is not None:
                _set_nested(config_dict, key_path, value)

    if overrides:
        config_dict = apply_overrides(config_dict, overrides)

    try:
        return ORConfig(**config_dict)
    except ValidationError as e:
        raise ValueError(f"Invalid OR configuration:\n{e}") from e


def save_config(config: ORConfig, output_path: str | Path) -> None:
    """Save resolved configuration to YAML file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def print_config_summary(config: ORConfig, logger: logging.Logger | None = None) -> None:
    """Print human-readable configuration summary."""
    lines = ["=" * 80, "Configuration Summary", "=" * 80]

    def format_dict(d, indent=0):
        result = []
        for key, value in d.items():
            if isinstance(value, dict):
                result.append(f"{'  ' * indent}{key}:")
                result.extend(format_dict(value, indent + 1))
            else:
                result.append(f"{'  ' * indent}{key}: {value}")
        return result

    lines.extend(format_dict(config.model_dump(mode="json")))
    lines.append("=" * 80)

    summary = "\n".join(lines)
    if logger:
        logger.info(summary)
    else:
        print(summary)
