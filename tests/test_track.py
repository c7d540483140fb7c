from datetime import datetime, timezone

import pytest

from kieserver.datasource.base import RecordNotExistsError
from kieserver.datasource.etcd import keys
from kieserver.datasource.etcd.store import MemoryStore
from kieserver.datasource.etcd.track import EtcdTrackDao
from kieserver.model import KVDoc, PollingDetail


def _detail(session="s1", revision="1", ip="10.0.0.1"):
    return PollingDetail(
        session_id=session,
        session_group="g",
        domain="default",
        project="p",
        polling_data={"revision": revision, "wait": "", "labels": ""},
        revision=revision,
        ip=ip,
        user_agent="agent",
        url_path="GET /v1/p/kie/kv",
        response_body=[KVDoc(key="k", value="v")],
        response_code=200,
        timestamp=datetime(2022, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


def test_round_trip():
    dao = EtcdTrackDao(MemoryStore())
    detail = _detail()
    assert dao.create_or_update(detail) is detail
    records = dao.get_polling_detail(PollingDetail(domain="default", project="p"))
    assert records == [detail]


def test_filters():
    dao = EtcdTrackDao(MemoryStore())
    dao.create_or_update(_detail(session="s1", ip="10.0.0.1"))
    dao.create_or_update(_detail(session="s2", ip="10.0.0.2"))
    by_session = dao.get_polling_detail(
        PollingDetail(domain="default", project="p", session_id="s2")
    )
    assert [r.session_id for r in by_session] == ["s2"]
    by_ip = dao.get_polling_detail(PollingDetail(domain="default", project="p", ip="10.0.0.1"))
    assert [r.ip for r in by_ip] == ["10.0.0.1"]


def test_same_revision_and_session_overwrites():
    store = MemoryStore()
    dao = EtcdTrackDao(store)
    dao.create_or_update(_detail())
    updated = _detail()
    updated.response_code = 304
    dao.create_or_update(updated)
    records = dao.get_polling_detail(PollingDetail(domain="default", project="p"))
    assert len(records) == 1
    assert records[0].response_code == updated.response_code


def test_no_records():
    dao = EtcdTrackDao(MemoryStore())
    with pytest.raises(RecordNotExistsError):
        dao.get_polling_detail(PollingDetail(domain="default", project="p"))


def test_filter_matches_nothing():
    dao = EtcdTrackDao(MemoryStore())
    dao.create_or_update(_detail())
    with pytest.raises(RecordNotExistsError):
        dao.get_polling_detail(
            PollingDetail(domain="default", project="p", user_agent="other")
        )


def test_undecodable_record_skipped():
    store = MemoryStore()
    dao = EtcdTrackDao(store)
    dao.create_or_update(_detail())
    store.put(keys.track("default", "p", "9", "bad"), b"{broken")
    records = dao.get_polling_detail(PollingDetail(domain="default", project="p"))
    assert [r.session_id for r in records] == ["s1"]