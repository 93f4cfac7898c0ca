"""Key/value bulk output."""

from ontariovax.storage.bulk import (
    INDEX_KEY,
    LABELS_KEY,
    BulkStore,
    StoreEntry,
    read_bulk,
    write_bulk,
)

__all__ = [
    "INDEX_KEY",
    "LABELS_KEY",
    "BulkStore",
    "StoreEntry",
    "read_bulk",
    "write_bulk",
]
