"""Revision history of key values in a key-value store."""

from __future__ import annotations

import json
import logging

from kieserver.datasource.base import (
    MAX_HISTORY_NUM,
    HistoryDao,
    reverse_by_update_rev,
)
from kieserver.datasource.etcd import keys
from kieserver.datasource.etcd.store import MemoryStore
from kieserver.datasource.options import FindOptions
from kieserver.model import KVDoc, KVResponse

logger = logging.getLogger(__name__)


def _paging_result(histories: list[KVDoc], offset: int, limit: int) -> list[KVDoc]:
    total = len(histories)
    if limit != 0 and offset >= total:
        return []
    reverse_by_update_rev(histories)
    if limit == 0:
        return histories
    return histories[offset : offset + limit]


def delete_many(store: MemoryStore, kvs: list[KVDoc]) -> None:
    """Remove the history entries of ``kvs`` in one transaction."""
    with store.transaction() as txn:
        for kv in kvs:
            txn.delete(keys.history(kv.domain, kv.project, kv.id, kv.update_revision))


class EtcdHistoryDao(HistoryDao):
    """History entries stored one key per revision."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def get_history(
        self,
        kv_id: str,
        project: str,
        domain: str,
        options: FindOptions | None = None,
    ) -> KVResponse:
        """Return the revisions of a key value, newest first, paged by ``options``."""
        opts = options or FindOptions()
        entries = self._store.list(keys.history_list(domain, project, kv_id))
        histories: list[KVDoc] = []
        for entry in entries:
            try:
                histories.append(KVDoc.from_json(entry.value))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.error("decode error: %s", exc)
        return KVResponse(
            total=len(entries),
            data=_paging_result(histories, opts.offset, opts.limit),
        )

    def add_history(self, kv: KVDoc) -> None:
        """Record ``kv`` as a revision and drop revisions over the limit."""
        self._store.put(
            keys.history(kv.domain, kv.project, kv.id, kv.update_revision),
            kv.to_json(),
        )
        self._history_rotate(kv.id, kv.project, kv.domain)

    def delay_deletion_time(self, kv_ids: list[str], project: str, domain: str) -> None:
        """Remove every revision of the given key values."""
        for kv_id in kv_ids:
            self._store.delete_prefix(keys.history_list(domain, project, kv_id))

    def _history_rotate(self, kv_id: str, project: str, domain: str) -> None:
        resp = self.get_history(kv_id, project, domain)
        if resp.total <= MAX_HISTORY_NUM:
            return
        delete_many(self._store, resp.data[MAX_HISTORY_NUM:])