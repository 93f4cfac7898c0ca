"""
Chronological index over day report keys.

Keys are fixed-width YYYYMMDD strings, so lexicographic order is also
chronological order. The index is an immutable snapshot rebuilt on
every pipeline run.
"""

from bisect import bisect_left
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ontariovax.errors import EmptyIndexError


class Index(BaseModel):
    """Sorted, unique report keys plus the time the index was built."""

    model_config = ConfigDict(frozen=True)

    keys: tuple[str, ...] = ()
    updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("keys")
    @classmethod
    def validate_keys_sorted(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Navigation relies on strictly ascending keys."""
        if any(a >= b for a, b in zip(v, v[1:])):
            msg = "index keys must be unique and sorted ascending"
            raise ValueError(msg)
        return v

    @classmethod
    def build(cls, keys: Iterable[str], updated: datetime | None = None) -> "Index":
        """
        Build an index from report keys in any order.

        Duplicates are dropped. The build time defaults to now (UTC).
        """
        unique = tuple(sorted(set(keys)))
        if updated is None:
            return cls(keys=unique)
        return cls(keys=unique, updated=updated)

    def __len__(self) -> int:
        return len(self.keys)

    def _find(self, key: str) -> int | None:
        pos = bisect_left(self.keys, key)
        if pos < len(self.keys) and self.keys[pos] == key:
            return pos
        return None

    def most_recent(self) -> str:
        """Latest key. Raises EmptyIndexError when there are no keys."""
        if not self.keys:
            msg = "error empty index"
            raise EmptyIndexError(msg)
        return self.keys[-1]

    def next(self, key: str) -> str | None:
        """Key following ``key``; None at the end or for an unknown key."""
        pos = self._find(key)
        if pos is None or pos + 1 >= len(self.keys):
            return None
        return self.keys[pos + 1]

    def previous(self, key: str) -> str | None:
        """Key preceding ``key``; None at the start or for an unknown key."""
        pos = self._find(key)
        if pos is None or pos == 0:
            return None
        return self.keys[pos - 1]

    def position(self, key: str) -> int | None:
        """Zero-based rank of a known key."""
        return self._find(key)

    def max_position(self) -> int:
        """Rank of the latest key."""
        if not self.keys:
            msg = "error empty index"
            raise EmptyIndexError(msg)
        return len(self.keys) - 1

    def by_position(self, rank: int) -> str | None:
        """Key at a rank, None when out of range."""
        if 0 <= rank < len(self.keys):
            return self.keys[rank]
        return None
