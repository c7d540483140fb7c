"""Polling records in a key-value store."""

from __future__ import annotations

import json
import logging

from kieserver.datasource.base import RecordNotExistsError, TrackDao
from kieserver.datasource.etcd import keys
from kieserver.datasource.etcd.store import MemoryStore
from kieserver.model import PollingDetail

logger = logging.getLogger(__name__)

_FILTERS = ("session_id", "ip", "user_agent", "url_path", "revision")


class EtcdTrackDao(TrackDao):
    """Polling details keyed by domain, project, revision and session."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def create_or_update(self, detail: PollingDetail) -> PollingDetail:
        """Store ``detail``, replacing a record of the same revision and session."""
        self._store.put(
            keys.track(detail.domain, detail.project, detail.revision, detail.session_id),
            json.dumps(detail.to_dict(), separators=(",", ":")),
        )
        return detail

    def get_polling_detail(self, detail: PollingDetail) -> list[PollingDetail]:
        """Return the records of the detail's domain and project matching its set fields."""
        wanted = {name: getattr(detail, name) for name in _FILTERS if getattr(detail, name)}
        records: list[PollingDetail] = []
        for entry in self._store.list(keys.track_list(detail.domain, detail.project)):
            try:
                doc = PollingDetail.from_dict(json.loads(entry.value))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.error("decode polling detail error: %s", exc)
                continue
            if all(getattr(doc, name) == value for name, value in wanted.items()):
                records.append(doc)
        if not records:
            raise RecordNotExistsError()
        return records