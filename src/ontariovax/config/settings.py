"""
Typed configuration models using Pydantic.

All tunable thresholds and paths live here. Processing code receives
these models instead of reading constants.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceFormat(str, Enum):
    """Layout of a raw source file."""

    JSON = "json"  # tabular "fields" + "records"
    CSV = "csv"  # flat, named columns

    @classmethod
    def from_path(cls, path: Path) -> "SourceFormat":
        """Infer the layout from a file suffix."""
        suffix = path.suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            msg = f"Unsupported source format: {path.suffix!r} ({path})"
            raise ValueError(msg) from None


class DataPathsConfig(BaseModel):
    """Source file locations, relative to data_root."""

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("./data"), description="Root directory for source files"
    )
    cases: Path = Field(
        default=Path("cases_by_vac_status.json"),
        description="Cases by vaccination status (JSON or CSV)",
    )
    hospitalizations: Path = Field(
        default=Path("hosp_by_vac_status.json"),
        description="Hospitalizations by vaccination status (JSON or CSV)",
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class ValidationConfig(BaseModel):
    """Per-record value constraints."""

    model_config = ConfigDict(frozen=True)

    min_date: date = Field(
        default=date(2020, 7, 1), description="Earliest accepted record date"
    )
    rate_upper_bound: Decimal = Field(
        default=Decimal(100000), description="Largest accepted rate per 100k"
    )
    enforce_rate_bounds: bool = Field(
        default=True,
        description="Reject rates outside [0, rate_upper_bound]",
    )

    @field_validator("rate_upper_bound")
    @classmethod
    def validate_upper_bound(cls, v: Decimal) -> Decimal:
        """Ensure the upper bound is positive."""
        if v <= 0:
            msg = f"rate_upper_bound must be positive, got: {v}"
            raise ValueError(msg)
        return v


class ChartConfig(BaseModel):
    """Chart series settings."""

    model_config = ConfigDict(frozen=True)

    decimals: int = Field(default=2, ge=0, le=6, description="Rounding for chart values")


class OutputConfig(BaseModel):
    """Output settings."""

    model_config = ConfigDict(frozen=True)

    bulk_path: Path = Field(
        default=Path("bulk.json"), description="Key/value bulk file to write"
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""

    model_config = ConfigDict(frozen=True)

    data_paths: DataPathsConfig = Field(default_factory=DataPathsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    charts: ChartConfig = Field(default_factory=ChartConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def cases_path(self) -> Path:
        """Absolute path of the cases source."""
        return self.data_paths.resolve("cases")

    @property
    def hospitalizations_path(self) -> Path:
        """Absolute path of the hospitalizations source."""
        return self.data_paths.resolve("hospitalizations")


def default_config() -> PipelineConfig:
    """Configuration with every default applied."""
    return PipelineConfig()
