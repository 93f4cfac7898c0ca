"""
Row transformers: raw JSON or CSV rows to validated typed records.
"""

from ontariovax.transform.cases import (
    CasesCsvRow,
    transform_cases_csv_row,
    transform_cases_json_row,
)
from ontariovax.transform.hospitalizations import (
    HospitalizationCsvRow,
    transform_hospitalization_csv_row,
    transform_hospitalization_json_row,
)

__all__ = [
    "CasesCsvRow",
    "HospitalizationCsvRow",
    "transform_cases_csv_row",
    "transform_cases_json_row",
    "transform_hospitalization_csv_row",
    "transform_hospitalization_json_row",
]
