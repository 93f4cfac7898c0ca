"""
Field parsers for loosely typed source values.

The JSON layout publishes most numbers as text. Required fields raise
ParseFailureError when they cannot be parsed; optional fields resolve
to None instead.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from ontariovax.errors import ParseFailureError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def cell(row: Sequence[Any], position: int) -> Any:
    """Value at a position, None past the end of a short row."""
    return row[position] if position < len(row) else None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_id(value: Any) -> int:
    """Row identifiers arrive as JSON integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseFailureError("_id", value, "expected an integer")
    return value


def parse_timestamp_date(value: Any, field: str) -> date:
    """Parse a ``YYYY-MM-DDTHH:MM:SS`` timestamp and keep the date."""
    if not isinstance(value, str):
        raise ParseFailureError(field, value, "expected a timestamp string")
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT).date()
    except ValueError as e:
        raise ParseFailureError(field, value, str(e)) from e


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        msg = "boolean is not a count"
        raise ValueError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            msg = "not a whole number"
            raise ValueError(msg)
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    msg = f"unsupported type {type(value).__name__}"
    raise ValueError(msg)


def parse_int(value: Any, field: str, *, required: bool) -> int | None:
    """Parse a count from a JSON number or its text form."""
    if _is_blank(value):
        if required:
            raise ParseFailureError(field, value, "value is missing")
        return None
    try:
        return _to_int(value)
    except ValueError as e:
        if required:
            raise ParseFailureError(field, value, str(e)) from e
        return None


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        msg = "boolean is not a rate"
        raise ValueError(msg)
    if isinstance(value, (int, str)):
        number = Decimal(value.strip() if isinstance(value, str) else value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    else:
        msg = f"unsupported type {type(value).__name__}"
        raise ValueError(msg)
    if not number.is_finite():
        msg = "rate must be finite"
        raise ValueError(msg)
    return number


def parse_decimal(value: Any, field: str, *, required: bool) -> Decimal | None:
    """Parse an exact decimal rate from its text form."""
    if _is_blank(value):
        if required:
            raise ParseFailureError(field, value, "value is missing")
        return None
    try:
        return _to_decimal(value)
    except (ValueError, InvalidOperation) as e:
        if required:
            raise ParseFailureError(field, value, str(e) or "not a decimal") from e
        return None


def blank_to_none(value: Any) -> Any:
    """CSV cells are strings; an empty cell means the value is absent."""
    return None if _is_blank(value) else value


def parse_failure_from(error: ValidationError, row: Mapping[str, Any]) -> ParseFailureError:
    """Describe the first failing column of a typed CSV row."""
    first = error.errors()[0]
    loc = first.get("loc") or ("row",)
    field = str(loc[0])
    return ParseFailureError(field, row.get(field, first.get("input")), first.get("msg"))
