"""
Transform raw hospitalization rows into validated records.
"""

import datetime as dt
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ontariovax.config.settings import ValidationConfig
from ontariovax.domain.records import HospitalizationRecord
from ontariovax.domain.rules import (
    DEFAULT_RULES,
    HOSPITALIZATION_COUNT_FIELDS,
    validate_hospitalization_record,
)
from ontariovax.transform.parsing import (
    blank_to_none,
    cell,
    parse_failure_from,
    parse_id,
    parse_int,
    parse_timestamp_date,
)


def transform_hospitalization_json_row(
    row: Sequence[Any], rules: ValidationConfig = DEFAULT_RULES
) -> HospitalizationRecord:
    """
    Build a hospitalization record from one JSON tabular row.

    Counts are declared numeric and normally arrive as JSON numbers; their
    text form is accepted too. Every count is required.

    Raises:
        ParseFailureError: If a field cannot be parsed.
        InvalidValueError: If the record breaks a value constraint.
    """
    fields: dict[str, Any] = {
        "id": parse_id(cell(row, 0)),
        "date": parse_timestamp_date(cell(row, 1), "date"),
    }
    for position, name in enumerate(HOSPITALIZATION_COUNT_FIELDS, start=2):
        fields[name] = parse_int(cell(row, position), name, required=True)

    return validate_hospitalization_record(HospitalizationRecord(**fields), rules)


class HospitalizationCsvRow(BaseModel):
    """One CSV row of the hospitalization dataset."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    icu_unvac: int
    icu_partial_vac: int
    icu_full_vac: int
    hospitalnonicu_unvac: int
    hospitalnonicu_partial_vac: int
    hospitalnonicu_full_vac: int

    @field_validator("*", mode="before")
    @classmethod
    def blank_cells_are_absent(cls, v: Any) -> Any:
        return blank_to_none(v)


def transform_hospitalization_csv_row(
    row: Mapping[str, Any],
    row_number: int,
    rules: ValidationConfig = DEFAULT_RULES,
) -> HospitalizationRecord:
    """Build a hospitalization record from one CSV row, keyed by row number."""
    try:
        typed = HospitalizationCsvRow.model_validate(row)
    except ValidationError as e:
        raise parse_failure_from(e, row) from e

    record = HospitalizationRecord(id=row_number, **typed.model_dump())
    return validate_hospitalization_record(record, rules)
