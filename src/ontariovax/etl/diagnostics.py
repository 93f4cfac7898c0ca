"""
Collector for rows discarded during a pipeline run.

Every discard is logged as it happens and kept so callers can report
on the run afterwards.
"""

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass

from ontariovax.errors import DataError, ErrorKind
from ontariovax.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """
    One discarded row or dataset-level problem.

    Attributes:
        kind: Classification of the failure.
        dataset: Dataset the problem was found in.
        message: Human readable description.
        row: 1-based source row, when the problem is tied to a row.
        key: Report key (YYYYMMDD), when known.
    """

    kind: ErrorKind
    dataset: str
    message: str
    row: int | None = None
    key: str | None = None


class DiagnosticLog:
    """Ordered collection of diagnostics for one run."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def record(
        self,
        kind: ErrorKind,
        dataset: str,
        message: str,
        *,
        row: int | None = None,
        key: str | None = None,
    ) -> Diagnostic:
        """Store and log a diagnostic."""
        diagnostic = Diagnostic(kind=kind, dataset=dataset, message=message, row=row, key=key)
        self._entries.append(diagnostic)
        log.warning(
            "Discarded data",
            kind=kind.value,
            dataset=dataset,
            row=row,
            key=key,
            reason=message,
        )
        return diagnostic

    def from_error(
        self,
        error: DataError,
        dataset: str,
        *,
        row: int | None = None,
        key: str | None = None,
    ) -> Diagnostic:
        """Record a diagnostic classified by the error's kind."""
        return self.record(error.kind, dataset, str(error), row=row, key=key)

    @property
    def entries(self) -> tuple[Diagnostic, ...]:
        return tuple(self._entries)

    def count(self, kind: ErrorKind | None = None) -> int:
        """Number of diagnostics, optionally of a single kind."""
        if kind is None:
            return len(self._entries)
        return sum(1 for d in self._entries if d.kind is kind)

    def by_kind(self) -> dict[ErrorKind, int]:
        """Diagnostic counts per kind, in first-seen order."""
        return dict(Counter(d.kind for d in self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)
