"""
Transform raw case rows into validated CasesRecord values.

Two layouts are supported:
- JSON tabular rows: positional arrays matching CASES_FIELDS, counts and
  rates published as text.
- CSV rows: named columns, including the newer not-fully-vaccinated and
  boosted cohorts; blank cells mean "not published".
"""

import datetime as dt
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ontariovax.config.settings import ValidationConfig
from ontariovax.domain.records import CasesRecord
from ontariovax.domain.rules import DEFAULT_RULES, validate_cases_record
from ontariovax.errors import ParseFailureError
from ontariovax.transform.parsing import (
    blank_to_none,
    cell,
    parse_decimal,
    parse_failure_from,
    parse_id,
    parse_int,
    parse_timestamp_date,
)

# (position, record field, required)
JSON_COUNT_COLUMNS: tuple[tuple[int, str, bool], ...] = (
    (2, "covid19_cases_unvac", False),
    (3, "covid19_cases_partial_vac", True),
    (4, "covid19_cases_full_vac", True),
    (5, "covid19_cases_vac_unknown", True),
)

JSON_RATE_COLUMNS: tuple[tuple[int, str, bool], ...] = (
    (6, "cases_unvac_rate_per100k", True),
    (7, "cases_partial_vac_rate_per100k", True),
    (8, "cases_full_vac_rate_per100k", True),
    (9, "cases_unvac_rate_7ma", True),
    (10, "cases_partial_vac_rate_7ma", True),
    (11, "cases_full_vac_rate_7ma", True),
)


def transform_cases_json_row(
    row: Sequence[Any], rules: ValidationConfig = DEFAULT_RULES
) -> CasesRecord:
    """
    Build a cases record from one JSON tabular row.

    Args:
        row: Positional values in CASES_FIELDS order.
        rules: Value constraints applied to the built record.

    Returns:
        Validated cases record.

    Raises:
        ParseFailureError: If a required field cannot be parsed.
        InvalidValueError: If the record breaks a value constraint.
    """
    fields: dict[str, Any] = {
        "id": parse_id(cell(row, 0)),
        "date": parse_timestamp_date(cell(row, 1), "Date"),
    }
    for position, name, required in JSON_COUNT_COLUMNS:
        fields[name] = parse_int(cell(row, position), name, required=required)
    for position, name, required in JSON_RATE_COLUMNS:
        fields[name] = parse_decimal(cell(row, position), name, required=required)

    return validate_cases_record(CasesRecord(**fields), rules)


class CasesCsvRow(BaseModel):
    """One CSV row, typed by column. Column names follow the published header."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: dt.date = Field(alias="Date")
    covid19_cases_unvac: int | None = None
    covid19_cases_partial_vac: int | None = None
    covid19_cases_notfull_vac: int | None = None
    covid19_cases_full_vac: int
    covid19_cases_boost_vac: int | None = None
    covid19_cases_vac_unknown: int | None = None
    cases_unvac_rate_per100k: Decimal | None = Field(
        default=None, alias="cases_unvac_rate_per100K"
    )
    cases_partial_vac_rate_per100k: Decimal | None = Field(
        default=None, alias="cases_partial_vac_rate_per100K"
    )
    cases_notfull_vac_rate_per100k: Decimal | None = Field(
        default=None, alias="cases_notfull_vac_rate_per100K"
    )
    cases_full_vac_rate_per100k: Decimal | None = Field(
        default=None, alias="cases_full_vac_rate_per100K"
    )
    cases_boost_vac_rate_per100k: Decimal | None = Field(
        default=None, alias="cases_boost_vac_rate_per100K"
    )
    cases_unvac_rate_7ma: Decimal | None = None
    cases_partial_vac_rate_7ma: Decimal | None = None
    cases_notfull_vac_rate_7ma: Decimal | None = None
    cases_full_vac_rate_7ma: Decimal | None = None
    cases_boost_vac_rate_7ma: Decimal | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_cells_are_absent(cls, v: Any) -> Any:
        """An empty cell means the value was not published."""
        return blank_to_none(v)


def transform_cases_csv_row(
    row: Mapping[str, Any],
    row_number: int,
    rules: ValidationConfig = DEFAULT_RULES,
) -> CasesRecord:
    """
    Build a cases record from one CSV row.

    CSV files carry no identifier column, so the 1-based row number is used.

    Raises:
        ParseFailureError: If a column cannot be typed, or the fully
            vaccinated rate is blank.
        InvalidValueError: If the record breaks a value constraint.
    """
    try:
        typed = CasesCsvRow.model_validate(row)
    except ValidationError as e:
        raise parse_failure_from(e, row) from e

    if typed.cases_full_vac_rate_per100k is None:
        raise ParseFailureError(
            "cases_full_vac_rate_per100K",
            row.get("cases_full_vac_rate_per100K"),
            "value is missing",
        )

    record = CasesRecord(id=row_number, **typed.model_dump())
    return validate_cases_record(record, rules)
