"""
Field metadata for JSON tabular datasets.

The upstream open-data portal publishes datasets as a ``fields`` list
describing each column followed by positional ``records``. Before any
row is read, the declared fields are compared with the layout this
package knows how to transform.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ontariovax.errors import SchemaMismatchError


class HeaderFieldInfo(BaseModel):
    """Optional per-column annotations."""

    model_config = ConfigDict(frozen=True)

    notes: str = ""
    type_override: str = ""
    label: str = ""


class HeaderField(BaseModel):
    """Declared name, type and annotations of one column."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type_: str = Field(alias="type")
    info: HeaderFieldInfo = Field(default_factory=HeaderFieldInfo)

    @field_validator("info", mode="before")
    @classmethod
    def default_missing_info(cls, v: Any) -> Any:
        """Treat a null info block like an absent one."""
        return HeaderFieldInfo() if v is None else v

    def describe(self) -> str:
        """Compact human-readable form used in error messages."""
        info = self.info
        return (
            f"{self.id}:{self.type_}"
            f"(notes={info.notes!r}, type_override={info.type_override!r}, label={info.label!r})"
        )


class TabularDataset(BaseModel):
    """A raw dataset: column metadata plus positional rows."""

    fields: list[HeaderField]
    records: list[list[Any]] = Field(default_factory=list)


def _field(id_: str, type_: str, type_override: str = "") -> HeaderField:
    return HeaderField(
        id=id_, type=type_, info=HeaderFieldInfo(type_override=type_override)
    )


CASES_FIELDS: tuple[HeaderField, ...] = (
    _field("_id", "int"),
    _field("Date", "timestamp", "timestamp"),
    _field("covid19_cases_unvac", "text"),
    _field("covid19_cases_partial_vac", "text"),
    _field("covid19_cases_full_vac", "text"),
    _field("covid19_cases_vac_unknown", "text"),
    _field("cases_unvac_rate_per100K", "text"),
    _field("cases_partial_vac_rate_per100K", "text"),
    _field("cases_full_vac_rate_per100K", "text"),
    _field("cases_unvac_rate_7ma", "text"),
    _field("cases_partial_vac_rate_7ma", "text"),
    _field("cases_full_vac_rate_7ma", "text"),
)

HOSPITALIZATION_FIELDS: tuple[HeaderField, ...] = (
    _field("_id", "int"),
    _field("date", "timestamp", "timestamp"),
    _field("icu_unvac", "numeric", "numeric"),
    _field("icu_partial_vac", "numeric", "numeric"),
    _field("icu_full_vac", "numeric", "numeric"),
    _field("hospitalnonicu_unvac", "numeric", "numeric"),
    _field("hospitalnonicu_partial_vac", "numeric", "numeric"),
    _field("hospitalnonicu_full_vac", "numeric", "numeric"),
)


def check_schema(
    actual: Sequence[HeaderField],
    expected: Sequence[HeaderField],
    dataset: str = "dataset",
) -> None:
    """
    Compare declared fields with the expected layout.

    Args:
        actual: Fields declared by the raw dataset.
        expected: Fields the transformer expects, in order.
        dataset: Dataset name for error messages.

    Raises:
        SchemaMismatchError: On a length difference or the first field
            whose id, type or info differs.
    """
    if len(actual) != len(expected):
        msg = (
            f"{dataset}: the expected headers and received headers have different "
            f"length expected: {len(expected)} actual: {len(actual)}"
        )
        raise SchemaMismatchError(
            msg, expected_count=len(expected), actual_count=len(actual)
        )

    for position, (got, want) in enumerate(zip(actual, expected)):
        if got != want:
            msg = (
                f"{dataset}: header field {position} does not match "
                f"expected: {want.describe()} actual: {got.describe()}"
            )
            raise SchemaMismatchError(
                msg,
                expected_count=len(expected),
                actual_count=len(actual),
                position=position,
                expected_field=want,
                actual_field=got,
            )
