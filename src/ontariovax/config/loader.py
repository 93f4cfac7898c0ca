"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Every section is optional; an empty file yields the default configuration.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from ontariovax.config.settings import (
    ChartConfig,
    DataPathsConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
    ValidationConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data).__name__}: {path}"
        raise ValueError(msg)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PipelineConfig:
    """
    Load pipeline configuration from YAML file(s).

    Recognized sections: data, validation, charts, output, logging.

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # Try to find base.yaml in same directory
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base != config_path:
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    merged = _deep_merge(base_data, load_yaml(config_path))

    data_data = merged.get("data", {})
    data_paths = DataPathsConfig(
        **{
            name: Path(data_data[key])
            for name, key in (
                ("data_root", "root"),
                ("cases", "cases"),
                ("hospitalizations", "hospitalizations"),
            )
            if data_data.get(key)
        }
    )

    return PipelineConfig(
        data_paths=data_paths,
        validation=ValidationConfig(**merged.get("validation", {})),
        charts=ChartConfig(**merged.get("charts", {})),
        output=OutputConfig(**merged.get("output", {})),
        logging=LoggingConfig(**merged.get("logging", {})),
    )
