"""Layout of keys in the key-value store."""

from __future__ import annotations

_SPLIT = "/"
_KEY_KV = "kvs"
_KEY_COUNTER = "counter"
_KEY_HISTORY = "kv-history"
_KEY_TRACK = "track"
_SYNCER = "syncer"
_TASK = "task"
_TOMBSTONE = "tombstone"


def _join(*parts: str) -> str:
    return _SPLIT.join(parts)


def _sync_root() -> str:
    return _SPLIT + _SYNCER + _SPLIT + _TASK


def _tombstone_root() -> str:
    return _SPLIT + _TOMBSTONE


def task_key(domain: str, project: str, task_id: str, timestamp: int) -> str:
    return _join(_sync_root(), domain, project, str(timestamp), task_id)


def tombstone_key(
    domain: str, project: str, resource_type: str, resource_id: str
) -> str:
    return _join(_tombstone_root(), domain, project, resource_type, resource_id)


def kv_key(domain: str, project: str, kv_id: str) -> str:
    return _join(_KEY_KV, domain, project, kv_id)


def kv_list(domain: str, project: str) -> str:
    """Prefix of all key values of a project, or of a domain when project is empty."""
    if not project:
        return _join(_KEY_KV, domain, "")
    return _join(_KEY_KV, domain, project, "")


def counter(name: str, domain: str) -> str:
    return _join(_KEY_COUNTER, domain, name)


def history(domain: str, project: str, kv_id: str, update_revision: int) -> str:
    return _join(_KEY_HISTORY, domain, project, kv_id, str(update_revision))


def history_list(domain: str, project: str, kv_id: str) -> str:
    return _join(_KEY_HISTORY, domain, project, kv_id, "")


def track(domain: str, project: str, revision: str, session_id: str) -> str:
    return _join(_KEY_TRACK, domain, project, revision, session_id)


def track_list(domain: str, project: str) -> str:
    return _join(_KEY_TRACK, domain, project, "")