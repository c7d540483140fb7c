"""In-memory key-value store with versioned keys, prefix scans and transactions."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import TracebackType


def _to_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


@dataclass(frozen=True)
class KeyValue:
    """A stored entry.

    ``version`` counts the writes to the key since it was created.
    """

    key: str
    value: bytes
    version: int
    create_revision: int
    mod_revision: int


class Transaction:
    """Writes applied together, only when every required key is absent.

    Use it as a context manager; it commits when the block ends without an
    exception. ``succeeded`` tells whether the writes were applied and
    ``deleted`` holds the entries removed by it.
    """

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._ops: list[tuple[str, str, bytes | None]] = []
        self._absent: list[str] = []
        self._done = False
        self.succeeded = False
        self.deleted: list[KeyValue] = []

    def _check_open(self) -> None:
        if self._done:
            raise RuntimeError("transaction already finished")

    def put(self, key: str, value: bytes | str) -> None:
        self._check_open()
        self._ops.append(("put", key, _to_bytes(value)))

    def delete(self, key: str) -> None:
        self._check_open()
        self._ops.append(("delete", key, None))

    def require_absent(self, key: str) -> None:
        """Apply the writes only if ``key`` does not exist at commit time."""
        self._check_open()
        self._absent.append(key)

    def __enter__(self) -> Transaction:
        self._check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._done = True
        if exc_type is not None:
            return
        self.succeeded, self.deleted = self._store._commit(self._ops, self._absent)


class MemoryStore:
    """Thread-safe ordered key-value store."""

    def __init__(self) -> None:
        self._data: dict[str, KeyValue] = {}
        self._revision = 0
        self._lock = threading.RLock()

    def _write(self, key: str, value: bytes, revision: int) -> KeyValue:
        old = self._data.get(key)
        if old is None:
            entry = KeyValue(key, value, 1, revision, revision)
        else:
            entry = KeyValue(key, value, old.version + 1, old.create_revision, revision)
        self._data[key] = entry
        return entry

    def _next_revision(self) -> int:
        self._revision += 1
        return self._revision

    def get(self, key: str) -> KeyValue | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: bytes | str) -> KeyValue:
        """Store ``value`` under ``key`` and return the stored entry."""
        with self._lock:
            return self._write(key, _to_bytes(value), self._next_revision())

    def insert(self, key: str, value: bytes | str) -> bool:
        """Store ``value`` only if ``key`` is new; return whether it was stored."""
        with self._lock:
            if key in self._data:
                return False
            self._write(key, _to_bytes(value), self._next_revision())
            return True

    def list(self, prefix: str) -> list[KeyValue]:
        """Return the entries whose key starts with ``prefix``, ordered by key."""
        with self._lock:
            return [self._data[k] for k in sorted(self._data) if k.startswith(prefix)]

    def count(self, prefix: str) -> int:
        with self._lock:
            return sum(1 for k in self._data if k.startswith(prefix))

    def delete(self, key: str) -> KeyValue | None:
        """Remove ``key``; return the removed entry, or None if there was none."""
        with self._lock:
            removed = self._data.pop(key, None)
            if removed is not None:
                self._next_revision()
            return removed

    def delete_prefix(self, prefix: str) -> list[KeyValue]:
        """Remove every key starting with ``prefix``; return the removed entries."""
        with self._lock:
            removed = [self._data.pop(k) for k in sorted(self._data) if k.startswith(prefix)]
            if removed:
                self._next_revision()
            return removed

    def transaction(self) -> Transaction:
        return Transaction(self)

    def _commit(
        self, ops: list[tuple[str, str, bytes | None]], absent: list[str]
    ) -> tuple[bool, list[KeyValue]]:
        with self._lock:
            if any(key in self._data for key in absent):
                return False, []
            revision = self._next_revision()
            deleted: list[KeyValue] = []
            for op, key, value in ops:
                if op == "put":
                    assert value is not None
                    self._write(key, value, revision)
                else:
                    removed = self._data.pop(key, None)
                    if removed is not None:
                        deleted.append(removed)
            return True, deleted