"""Cache of query results shared by long-polling requests."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from kieserver.model import KVResponse


@dataclass
class DBResult:
    """A stored query outcome: the key values, an error, and the revision."""

    kvs: KVResponse | None = None
    err: Exception | None = None
    rev: int = 0


class LongPollingCache:
    """Thread-safe map from topic to its latest query result."""

    def __init__(self) -> None:
        self._results: dict[str, DBResult] = {}
        self._lock = threading.Lock()

    def read(self, topic: str) -> tuple[int, KVResponse | None]:
        """Return (revision, key values); (0, None) when nothing is cached.

        A cached error is raised.
        """
        with self._lock:
            result = self._results.get(topic)
        if result is None:
            return 0, None
        if result.err is not None:
            raise result.err
        return result.rev, result.kvs

    def write(self, topic: str, result: DBResult) -> None:
        """Store the result for a topic, replacing any earlier one."""
        with self._lock:
            self._results[topic] = result


_polling_cache = LongPollingCache()


def cached_kv() -> LongPollingCache:
    """Return the process-wide cache."""
    return _polling_cache