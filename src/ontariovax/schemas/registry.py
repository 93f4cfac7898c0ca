"""
Schema registry for versioning and discovery.

Provides centralized access to the source layouts and output contracts
with version tracking.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import pandera.pandas as pa

from ontariovax.schemas.charts import ChartSeriesSchema
from ontariovax.schemas.tabular import CASES_FIELDS, HOSPITALIZATION_FIELDS, HeaderField


class DataRole(Enum):
    """Classification of data products by their role in the pipeline."""

    SOURCE = "source"  # Raw published datasets
    OUTPUT = "output"  # Values written to the key/value store


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    version: str
    role: DataRole
    description: str
    fields: tuple[HeaderField, ...] = ()
    frame_schema: type[pa.DataFrameModel] | None = None


class SchemaRegistry:
    """Centralized registry for all data schemas."""

    _version = "1.0.0"

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "cases": SchemaInfo(
            name="cases",
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Daily cases by vaccination status (JSON tabular layout)",
            fields=CASES_FIELDS,
        ),
        "hospitalizations": SchemaInfo(
            name="hospitalizations",
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Daily hospital and ICU admissions by vaccination status",
            fields=HOSPITALIZATION_FIELDS,
        ),
        "chart_series": SchemaInfo(
            name="chart_series",
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Per-100k rate series for charts",
            frame_schema=ChartSeriesSchema,
        ),
    }

    @classmethod
    def registry_version(cls) -> str:
        """Get the registry version."""
        return cls._version

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get full schema info by name.

        Raises:
            KeyError: If schema not found.
        """
        if name not in cls._schemas:
            available = ", ".join(cls._schemas.keys())
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def fields(cls, name: str) -> tuple[HeaderField, ...]:
        """Expected header fields of a tabular source schema."""
        info = cls.get_info(name)
        if not info.fields:
            msg = f"Schema '{name}' does not describe a tabular source"
            raise KeyError(msg)
        return info.fields

    @classmethod
    def list_schemas(cls) -> list[str]:
        """List all registered schema names."""
        return list(cls._schemas.keys())

    @classmethod
    def list_by_role(cls, role: DataRole) -> list[str]:
        """List schemas filtered by their data role."""
        return [name for name, info in cls._schemas.items() if info.role == role]
