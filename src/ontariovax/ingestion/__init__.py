"""
Data ingestion layer: source files to row sources.

All raw data loading happens through this module; schema checks and
row transforms are attached to each source.
"""

from ontariovax.ingestion.loaders import load_csv_rows, load_tabular_json, open_source
from ontariovax.ingestion.sources import (
    CasesCsvSource,
    CasesJsonSource,
    DatasetKind,
    HospitalizationCsvSource,
    HospitalizationJsonSource,
    RawRow,
    RecordSource,
)

__all__ = [
    "CasesCsvSource",
    "CasesJsonSource",
    "DatasetKind",
    "HospitalizationCsvSource",
    "HospitalizationJsonSource",
    "RawRow",
    "RecordSource",
    "load_csv_rows",
    "load_tabular_json",
    "open_source",
]
