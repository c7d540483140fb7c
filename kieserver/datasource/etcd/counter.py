"""Revision counter kept as the version of one key."""

from __future__ import annotations

from kieserver.datasource.base import RevisionDao
from kieserver.datasource.etcd import keys
from kieserver.datasource.etcd.store import MemoryStore

_REVISION = "revision_counter"


class EtcdRevisionDao(RevisionDao):
    """Per-domain revision numbers backed by a key-value store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def get_revision(self, domain: str) -> int:
        """Return the current revision; 0 when none was applied yet."""
        entry = self._store.get(keys.counter(_REVISION, domain))
        return entry.version if entry is not None else 0

    def apply_revision(self, domain: str) -> int:
        """Increase the revision and return the new value."""
        return self._store.put(keys.counter(_REVISION, domain), b"").version