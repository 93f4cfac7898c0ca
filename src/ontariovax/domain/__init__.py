"""
Domain model: typed records, value rules, day reports and the report index.
"""

from ontariovax.domain.index import Index
from ontariovax.domain.records import CasesRecord, HospitalizationRecord
from ontariovax.domain.report import DayReport, build_day_report
from ontariovax.domain.rules import validate_cases_record, validate_hospitalization_record

__all__ = [
    "CasesRecord",
    "DayReport",
    "HospitalizationRecord",
    "Index",
    "build_day_report",
    "validate_cases_record",
    "validate_hospitalization_record",
]
