"""
Schema definitions for source datasets and derived outputs.

Source layouts are declared as header field lists; output frames are
validated with Pandera.
"""

from ontariovax.schemas.charts import CHART_SERIES, ChartSeriesSchema
from ontariovax.schemas.registry import DataRole, SchemaRegistry
from ontariovax.schemas.tabular import (
    CASES_FIELDS,
    HOSPITALIZATION_FIELDS,
    HeaderField,
    HeaderFieldInfo,
    TabularDataset,
    check_schema,
)

__all__ = [
    "CASES_FIELDS",
    "CHART_SERIES",
    "HOSPITALIZATION_FIELDS",
    "ChartSeriesSchema",
    "DataRole",
    "HeaderField",
    "HeaderFieldInfo",
    "SchemaRegistry",
    "TabularDataset",
    "check_schema",
]
