"""
Row sources for the two datasets.

A source yields raw rows lazily and knows how to turn one raw row into a
validated record. The pipeline only depends on this capability, so JSON
tabular and CSV inputs are interchangeable.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from ontariovax.config.settings import ValidationConfig
from ontariovax.domain.records import CasesRecord, HospitalizationRecord
from ontariovax.domain.rules import DEFAULT_RULES
from ontariovax.schemas.tabular import (
    CASES_FIELDS,
    HOSPITALIZATION_FIELDS,
    HeaderField,
    TabularDataset,
    check_schema,
)
from ontariovax.transform.cases import transform_cases_csv_row, transform_cases_json_row
from ontariovax.transform.hospitalizations import (
    transform_hospitalization_csv_row,
    transform_hospitalization_json_row,
)

R = TypeVar("R", CasesRecord, HospitalizationRecord)


class DatasetKind(str, Enum):
    """The two published datasets."""

    CASES = "cases"
    HOSPITALIZATIONS = "hospitalizations"


@dataclass(frozen=True)
class RawRow:
    """An untransformed row and its 1-based position in the source."""

    number: int
    payload: Any


class RecordSource(ABC, Generic[R]):
    """
    Abstract base class for row sources.

    Subclasses provide the raw payloads and the per-row transform; the
    base class numbers rows and offers a dataset-level schema check hook.
    """

    kind: DatasetKind
    layout: str

    def __init__(self, rules: ValidationConfig = DEFAULT_RULES) -> None:
        """
        Initialize the source.

        Args:
            rules: Value constraints applied to every transformed record.
        """
        self.rules = rules

    @property
    def name(self) -> str:
        """Dataset name used in logs and diagnostics."""
        return self.kind.value

    def check_schema(self) -> None:
        """Reject the whole dataset before rows are read. No-op by default."""

    @abstractmethod
    def _payloads(self) -> Sequence[Any]:
        """Raw row payloads in source order."""
        ...

    @abstractmethod
    def _transform(self, payload: Any, number: int) -> R:
        """Turn one payload into a validated record."""
        ...

    @property
    def row_count(self) -> int:
        """Number of raw rows in the source."""
        return len(self._payloads())

    def rows(self) -> Iterator[RawRow]:
        """Yield raw rows lazily, numbered from 1."""
        for number, payload in enumerate(self._payloads(), start=1):
            yield RawRow(number=number, payload=payload)

    def transform(self, row: RawRow) -> R:
        """
        Transform one raw row.

        Raises:
            ParseFailureError: If a required field cannot be parsed.
            InvalidValueError: If the record breaks a value constraint.
        """
        return self._transform(row.payload, row.number)


class JsonTabularSource(RecordSource[R]):
    """Base for JSON tabular datasets with declared field metadata."""

    layout = "json"
    expected_fields: tuple[HeaderField, ...]

    def __init__(
        self, dataset: TabularDataset, rules: ValidationConfig = DEFAULT_RULES
    ) -> None:
        super().__init__(rules)
        self.dataset = dataset

    def check_schema(self) -> None:
        """
        Compare the declared fields with the expected layout.

        Raises:
            SchemaMismatchError: If the layout differs.
        """
        check_schema(self.dataset.fields, self.expected_fields, self.name)

    def _payloads(self) -> Sequence[Any]:
        return self.dataset.records


class CsvSource(RecordSource[R]):
    """Base for CSV datasets. Rows are typed individually, headers are not checked."""

    layout = "csv"

    def __init__(
        self,
        rows: Sequence[Mapping[str, Any]],
        rules: ValidationConfig = DEFAULT_RULES,
    ) -> None:
        super().__init__(rules)
        self._rows = rows

    def _payloads(self) -> Sequence[Any]:
        return self._rows


class CasesJsonSource(JsonTabularSource[CasesRecord]):
    kind = DatasetKind.CASES
    expected_fields = CASES_FIELDS

    def _transform(self, payload: Any, number: int) -> CasesRecord:
        return transform_cases_json_row(payload, self.rules)


class HospitalizationJsonSource(JsonTabularSource[HospitalizationRecord]):
    kind = DatasetKind.HOSPITALIZATIONS
    expected_fields = HOSPITALIZATION_FIELDS

    def _transform(self, payload: Any, number: int) -> HospitalizationRecord:
        return transform_hospitalization_json_row(payload, self.rules)


class CasesCsvSource(CsvSource[CasesRecord]):
    kind = DatasetKind.CASES

    def _transform(self, payload: Any, number: int) -> CasesRecord:
        return transform_cases_csv_row(payload, number, self.rules)


class HospitalizationCsvSource(CsvSource[HospitalizationRecord]):
    kind = DatasetKind.HOSPITALIZATIONS

    def _transform(self, payload: Any, number: int) -> HospitalizationRecord:
        return transform_hospitalization_csv_row(payload, number, self.rules)
