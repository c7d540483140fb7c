"""Key value documents in a key-value store."""

from __future__ import annotations

import logging
import re

from kieserver.datasource.base import (
    CONFIG_RESOURCE,
    KeyNotExistsError,
    KVAlreadyExistsError,
    KVDao,
    TooManyError,
    clear_part,
    reverse_by_update_rev,
    tombstone_id,
)
from kieserver.datasource.etcd import keys
from kieserver.datasource.etcd.store import KeyValue, MemoryStore
from kieserver.datasource.options import FindOptions, WriteOptions, default_find_options
from kieserver.datasource.sync import Action, Task, Tombstone, new_task, new_tombstone
from kieserver.labels import is_contain_label, is_equivalent_label
from kieserver.model import GetKVRequest, KVDoc, KVResponse

logger = logging.getLogger(__name__)

_VALUE_PATTERN = re.compile(r"\(([^)]+)\)")
_DECODE_ERRORS = (ValueError, TypeError, AttributeError)


def _get_value(text: str) -> str:
    """Return the text inside the parentheses of ``beginWith(...)`` or ``wildcard(...)``."""
    match = _VALUE_PATTERN.search(text)
    if match is None:
        raise ValueError(f"no value in parentheses: {text!r}")
    return match.group(1)


def is_unique_find(opts: FindOptions) -> bool:
    """Return whether the options name exactly one key value: key and label format."""
    return bool(opts.label_format) and bool(opts.key)


def to_regex(opts: FindOptions) -> re.Pattern[str] | None:
    """Return the pattern that keys must match, or None when no key is given."""
    if not opts.key:
        return None
    if opts.key.startswith("beginWith("):
        value = _get_value(opts.key).replace(".", "\\.") + ".*"
    elif opts.key.startswith("wildcard("):
        value = _get_value(opts.key).replace(".", "\\.").replace("*", ".*")
    else:
        value = opts.key.replace(".", "\\.")
    flags = 0 if opts.case_sensitive else re.IGNORECASE
    expr = "^" + value + r"\Z"
    try:
        return re.compile(expr, flags)
    except re.error as exc:
        logger.error("invalid wildcard expr: %s, error: %s", expr, exc)
        raise


def _filter_match(
    doc: KVDoc, opts: FindOptions, regex: re.Pattern[str] | None
) -> bool:
    if opts.status and doc.status != opts.status:
        return False
    if regex is not None and regex.search(doc.key) is None:
        return False
    if opts.labels:
        if opts.exact_labels and not is_equivalent_label(opts.labels, doc.labels):
            return False
        if not opts.exact_labels and not is_contain_label(doc.labels, opts.labels):
            return False
    if opts.label_format and doc.label_format != opts.label_format:
        return False
    return True


def _paging_result(result: KVResponse, opts: FindOptions) -> KVResponse:
    reverse_by_update_rev(result.data)
    if opts.limit == 0:
        return result
    if opts.offset >= result.total:
        result.data = []
        return result
    result.data = result.data[opts.offset : opts.offset + opts.limit]
    return result


def _decode(entry: KeyValue) -> KVDoc:
    try:
        return KVDoc.from_json(entry.value)
    except _DECODE_ERRORS as exc:
        logger.error("decode error: %s", exc)
        raise


class EtcdKVDao(KVDao):
    """Key values stored one key per document."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def create(self, kv: KVDoc, options: WriteOptions | None = None) -> KVDoc:
        """Store a new key value; raise KVAlreadyExistsError when its id is taken."""
        opts = options or WriteOptions()
        stored = self._txn_create(kv) if opts.sync_enable else self._create(kv)
        if not stored:
            logger.error("create error: %s, kv: %s", KVAlreadyExistsError(), kv)
            raise KVAlreadyExistsError()
        return kv

    def _create(self, kv: KVDoc) -> bool:
        return self._store.insert(keys.kv_key(kv.domain, kv.project, kv.id), kv.to_json())

    def _txn_create(self, kv: KVDoc) -> bool:
        task = new_task(kv.domain, kv.project, Action.CREATE, CONFIG_RESOURCE, kv)
        kv_key = keys.kv_key(kv.domain, kv.project, kv.id)
        task_key = keys.task_key(kv.domain, kv.project, task.id, task.timestamp)
        with self._store.transaction() as txn:
            txn.require_absent(kv_key)
            txn.require_absent(task_key)
            txn.put(kv_key, kv.to_json())
            txn.put(task_key, task.to_json())
        return txn.succeeded

    def update(self, kv: KVDoc, options: WriteOptions | None = None) -> None:
        """Update value, status, checker, label format and update time/revision."""
        kv_key = keys.kv_key(kv.domain, kv.project, kv.id)
        entry = self._store.get(kv_key)
        if entry is None:
            raise KeyNotExistsError()
        old = _decode(entry)
        old.label_format = kv.label_format
        old.value = kv.value
        old.status = kv.status
        old.checker = kv.checker
        old.update_time = kv.update_time
        old.update_revision = kv.update_revision

        opts = options or WriteOptions()
        if opts.sync_enable:
            task = new_task(kv.domain, kv.project, Action.UPDATE, CONFIG_RESOURCE, kv)
            with self._store.transaction() as txn:
                txn.put(kv_key, kv.to_json())
                txn.put(
                    keys.task_key(kv.domain, kv.project, task.id, task.timestamp),
                    task.to_json(),
                )
        else:
            self._store.put(kv_key, old.to_json())

    def exist(
        self,
        key: str,
        project: str,
        domain: str,
        options: FindOptions | None = None,
    ) -> bool:
        """Return whether exactly one key value has ``key`` and the given labels."""
        opts = options or FindOptions()
        search = FindOptions(
            exact_labels=True,
            labels=dict(opts.labels),
            label_format=opts.label_format,
            key=key,
            case_sensitive=True,
        )
        try:
            kvs = self.list(project, domain, search)
        except Exception as exc:
            logger.error("check kv exist: %s", exc)
            raise
        if is_unique_find(search) and not kvs.data:
            return False
        if len(kvs.data) != 1:
            raise TooManyError()
        return True

    def find_one_and_delete(
        self,
        kv_id: str,
        project: str,
        domain: str,
        options: WriteOptions | None = None,
    ) -> KVDoc:
        opts = options or WriteOptions()
        if opts.sync_enable:
            return self._txn_find_one_and_delete(kv_id, project, domain)
        removed = self._store.delete(keys.kv_key(domain, project, kv_id))
        if removed is None:
            raise KeyNotExistsError()
        return _decode(removed)

    def _txn_find_one_and_delete(self, kv_id: str, project: str, domain: str) -> KVDoc:
        doc = self._get_doc(domain, project, kv_id)
        task = new_task(domain, project, Action.DELETE, CONFIG_RESOURCE, doc)
        tombstone = new_tombstone(domain, project, CONFIG_RESOURCE, tombstone_id(doc))
        with self._store.transaction() as txn:
            txn.delete(keys.kv_key(domain, project, kv_id))
            self._put_task(txn, domain, project, task)
            self._put_tombstone(txn, domain, project, tombstone)
        return doc

    @staticmethod
    def _put_task(txn, domain: str, project: str, task: Task) -> None:
        txn.put(keys.task_key(domain, project, task.id, task.timestamp), task.to_json())

    @staticmethod
    def _put_tombstone(txn, domain: str, project: str, tombstone: Tombstone) -> None:
        txn.put(
            keys.tombstone_key(
                domain, project, tombstone.resource_type, tombstone.resource_id
            ),
            tombstone.to_json(),
        )

    def _get_doc(self, domain: str, project: str, kv_id: str) -> KVDoc:
        entry = self._store.get(keys.kv_key(domain, project, kv_id))
        if entry is None:
            raise KeyNotExistsError()
        return _decode(entry)

    def find_many_and_delete(
        self,
        kv_ids: list[str],
        project: str,
        domain: str,
        options: WriteOptions | None = None,
    ) -> tuple[list[KVDoc], int]:
        opts = options or WriteOptions()
        if opts.sync_enable:
            return self._txn_find_many_and_delete(kv_ids, project, domain)
        with self._store.transaction() as txn:
            for kv_id in kv_ids:
                txn.delete(keys.kv_key(domain, project, kv_id))
        if not txn.deleted:
            raise KeyNotExistsError()
        return [_decode(entry) for entry in txn.deleted], len(txn.deleted)

    def _txn_find_many_and_delete(
        self, kv_ids: list[str], project: str, domain: str
    ) -> tuple[list[KVDoc], int]:
        docs: list[KVDoc] = []
        tasks: list[Task] = []
        tombstones: list[Tombstone] = []
        for kv_id in kv_ids:
            try:
                doc = self._get_doc(domain, project, kv_id)
            except KeyNotExistsError as exc:
                logger.error("%s", exc)
                continue
            tasks.append(new_task(domain, project, Action.DELETE, CONFIG_RESOURCE, doc))
            tombstones.append(
                new_tombstone(domain, project, CONFIG_RESOURCE, tombstone_id(doc))
            )
            docs.append(doc)
        if not docs:
            raise KeyNotExistsError()
        with self._store.transaction() as txn:
            for kv_id in kv_ids:
                txn.delete(keys.kv_key(domain, project, kv_id))
            for task in tasks:
                self._put_task(txn, domain, project, task)
            for tombstone in tombstones:
                self._put_tombstone(txn, domain, project, tombstone)
        return docs, len(docs)

    def get(self, req: GetKVRequest) -> KVDoc:
        """Return the key value with the request's id."""
        return self._get_doc(req.domain, req.project, req.id)

    def total(self, project: str, domain: str) -> int:
        return self._store.count(keys.kv_list(domain, project))

    def list(
        self, project: str, domain: str, options: FindOptions | None = None
    ) -> KVResponse:
        """Return matching key values, newest update revision first, paged."""
        opts = options or default_find_options()
        regex = to_regex(opts)
        result = KVResponse()
        for entry in self._store.list(keys.kv_list(domain, project)):
            try:
                doc = KVDoc.from_json(entry.value)
            except _DECODE_ERRORS as exc:
                logger.error("decode to KVList error: %s", exc)
                continue
            if not _filter_match(doc, opts, regex):
                continue
            clear_part(doc)
            result.data.append(doc)
            result.total += 1
            if is_unique_find(opts):
                break
        return _paging_result(result, opts)