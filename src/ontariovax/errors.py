"""
Error types raised by the ingestion and reporting pipeline.

Dataset-level errors abort a run; row-level errors cause a single row
to be discarded and recorded as a diagnostic.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of pipeline failures, used for diagnostics."""

    SCHEMA_MISMATCH = "schema_mismatch"
    PARSE_FAILURE = "parse_failure"
    INVALID_VALUE = "invalid_value"
    UNMATCHED_ROW = "unmatched_row"
    CROSS_VALIDATION_FAILURE = "cross_validation_failure"
    DUPLICATE_DATE = "duplicate_date"


class DataError(Exception):
    """Base class for all data errors."""

    kind: ErrorKind


class SchemaMismatchError(DataError):
    """Declared dataset fields do not match the expected schema."""

    kind = ErrorKind.SCHEMA_MISMATCH

    def __init__(
        self,
        message: str,
        *,
        expected_count: int,
        actual_count: int,
        position: int | None = None,
        expected_field: Any = None,
        actual_field: Any = None,
    ) -> None:
        super().__init__(message)
        self.expected_count = expected_count
        self.actual_count = actual_count
        self.position = position
        self.expected_field = expected_field
        self.actual_field = actual_field


class RowError(DataError):
    """A single raw row could not be turned into a valid record."""


class ParseFailureError(RowError):
    """A required field could not be parsed into its type."""

    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, field: str, raw: Any, reason: str | None = None) -> None:
        msg = f"unable to parse {field} from `{raw}`"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.field = field
        self.raw = raw


class InvalidValueError(RowError):
    """A parsed field holds a value outside its allowed range."""

    kind = ErrorKind.INVALID_VALUE

    def __init__(self, value: str, field: str | None = None) -> None:
        msg = f"the value `{value}` is invalid"
        if field:
            msg = f"{msg} for {field}"
        super().__init__(msg)
        self.value = value
        self.field = field


class CrossValidationError(DataError):
    """A joined day report is internally inconsistent."""

    kind = ErrorKind.CROSS_VALIDATION_FAILURE


class DateMismatchError(CrossValidationError):
    """Cases and hospitalization records for a report carry different dates."""


class EmptyIndexError(DataError, LookupError):
    """Navigation was requested on an index without keys."""
