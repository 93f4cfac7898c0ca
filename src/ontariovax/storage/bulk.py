"""
Key/value bulk file read and write.

The bulk file is a JSON array of ``{"key": ..., "value": ...}`` objects,
the upload format of a key/value store. Values are JSON documents
serialized to strings.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter

from ontariovax.domain.index import Index
from ontariovax.domain.report import DayReport
from ontariovax.schemas.charts import CHART_SERIES
from ontariovax.utils.logging import get_logger

log = get_logger(__name__)

INDEX_KEY = "index"
LABELS_KEY = "labels"


class StoreEntry(BaseModel):
    """A single key and its serialized JSON value."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


_ENTRIES = TypeAdapter(list[StoreEntry])


def write_bulk(entries: Iterable[StoreEntry], path: Path) -> Path:
    """
    Write entries to a bulk file, creating parent directories.

    Returns:
        The path written.
    """
    items = list(entries)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_ENTRIES.dump_json(items, indent=2))
    log.info("Wrote bulk file", path=str(path), entries=len(items))
    return path


def read_bulk(path: Path) -> list[StoreEntry]:
    """
    Read entries from a bulk file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        msg = f"Bulk file not found: {path}"
        raise FileNotFoundError(msg)
    return _ENTRIES.validate_json(path.read_bytes())


class BulkStore:
    """
    Read-only view over bulk entries.

    Mirrors what a consumer of the key/value store sees: the index, one
    report per key and the chart series.
    """

    def __init__(self, entries: Iterable[StoreEntry]) -> None:
        self._values: dict[str, str] = {e.key: e.value for e in entries}

    @classmethod
    def from_file(cls, path: Path) -> "BulkStore":
        return cls(read_bulk(path))

    def get(self, key: str) -> str | None:
        """Raw serialized value for a key."""
        return self._values.get(key)

    def index(self) -> Index:
        """
        The stored index.

        Raises:
            KeyError: If the store has no index entry.
        """
        raw = self._values.get(INDEX_KEY)
        if raw is None:
            msg = f"No '{INDEX_KEY}' entry in store"
            raise KeyError(msg)
        return Index.model_validate_json(raw)

    def report(self, key: str) -> DayReport | None:
        """The day report stored under a YYYYMMDD key."""
        raw = self._values.get(key)
        if raw is None:
            return None
        return DayReport.model_validate_json(raw)

    def series(self, name: str) -> list[Any]:
        """
        A chart series (or the labels) as a list.

        Raises:
            KeyError: If the name is not a stored series.
        """
        if name != LABELS_KEY and name not in CHART_SERIES:
            msg = f"Unknown series: {name!r}"
            raise KeyError(msg)
        raw = self._values.get(name)
        if raw is None:
            msg = f"No '{name}' entry in store"
            raise KeyError(msg)
        return json.loads(raw)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
