"""Minimal key-value storage interfaces and a disk-backed implementation."""

from __future__ import annotations

import abc
import dbm
from pathlib import Path


class BareMetalKVDb(abc.ABC):
    """A store that can look up raw values by key."""

    @abc.abstractmethod
    def fetch(self, key: bytes) -> bytes | None:
        """Return the value at key, or None."""


class BatchWriter(abc.ABC):
    """Collects writes to apply later."""

    @abc.abstractmethod
    def batch_put(self, key: bytes, val: bytes) -> None:
        """Record a write."""


class BatchDB(abc.ABC):
    """A store that applies batches of writes."""

    @abc.abstractmethod
    def flush(self, batch: BatchWriter) -> None:
        """Apply every write in the batch."""


class DictBatch(BatchWriter):
    """A batch writer that keeps pending writes in a dict."""

    def __init__(self) -> None:
        self.items: dict[bytes, bytes] = {}

    def batch_put(self, key: bytes, val: bytes) -> None:
        self.items[bytes(key)] = bytes(val)


class DbmDb(BareMetalKVDb, BatchDB):
    """Key-value database stored on disk with the dbm module."""

    DEFAULT_PATH = "./db/verkle_db"

    def __init__(self, handle) -> None:
        self._db = handle

    @classmethod
    def from_path(cls, path=DEFAULT_PATH) -> DbmDb:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(dbm.open(str(path), "c"))

    def fetch(self, key: bytes) -> bytes | None:
        try:
            return bytes(self._db[bytes(key)])
        except KeyError:
            return None

    def new_batch(self) -> DictBatch:
        return DictBatch()

    def flush(self, batch: DictBatch) -> None:
        for key, val in batch.items.items():
            self._db[key] = val

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> DbmDb:
        return self

    def __exit__(self, *exc) -> None:
        self.close()