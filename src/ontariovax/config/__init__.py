"""
Configuration management with typed Pydantic models.

Provides source paths, validation thresholds and output settings,
loaded from YAML with environment variable interpolation.
"""

from ontariovax.config.loader import load_config
from ontariovax.config.settings import (
    ChartConfig,
    DataPathsConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
    SourceFormat,
    ValidationConfig,
    default_config,
)

__all__ = [
    "ChartConfig",
    "DataPathsConfig",
    "LoggingConfig",
    "OutputConfig",
    "PipelineConfig",
    "SourceFormat",
    "ValidationConfig",
    "default_config",
    "load_config",
]
