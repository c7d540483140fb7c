import pytest

from kieserver.datasource.base import (
    Broker,
    DatasourceError,
    HistoryDao,
    KeyNotExistsError,
    KVAlreadyExistsError,
    KVDao,
    RecordNotExistsError,
    RevisionDao,
    RevisionNotExistError,
    TooManyError,
    TrackDao,
    clear_part,
    get_broker,
    init,
    register_plugin,
    reverse_by_update_rev,
    tombstone_id,
)
from kieserver.datasource.options import Config
from kieserver.model import KVDoc


class _FakeBroker(Broker):
    def __init__(self, config):
        self.config = config

    def get_revision_dao(self):
        return "revision"

    def get_history_dao(self):
        return "history"

    def get_track_dao(self):
        return "track"

    def get_kv_dao(self):
        return "kv"


def test_init_registered_plugin():
    register_plugin("fake-base-test", _FakeBroker)
    broker = init("fake-base-test")
    assert isinstance(broker, _FakeBroker)
    assert isinstance(broker.config, Config)
    assert get_broker() is broker
    assert get_broker().get_kv_dao() == "kv"


def test_init_unknown_kind():
    with pytest.raises(DatasourceError, match="do not support 'nosuchdb'"):
        init("nosuchdb")


def test_init_propagates_factory_error():
    def failing(config):
        raise DatasourceError("connect failed")

    register_plugin("failing-base-test", failing)
    with pytest.raises(DatasourceError, match="connect failed"):
        init("failing-base-test")


@pytest.mark.parametrize(
    "error, message",
    [
        (KeyNotExistsError, "can not find any key value"),
        (RecordNotExistsError, "can not find any polling data"),
        (RevisionNotExistError, "revision does not exist"),
        (KVAlreadyExistsError, "kv already exists"),
        (TooManyError, "key with labels should be only one"),
    ],
)
def test_error_messages(error, message):
    instance = error()
    assert str(instance) == message
    assert isinstance(instance, DatasourceError)


@pytest.mark.parametrize("abstract", [KVDao, HistoryDao, TrackDao, RevisionDao, Broker])
def test_interfaces_are_abstract(abstract):
    with pytest.raises(TypeError):
        abstract()


def test_clear_part():
    kv = KVDoc(key="k", value="v", domain="d", project="p", label_format="app=a")
    clear_part(kv)
    assert (kv.domain, kv.project, kv.label_format) == ("", "", "")
    assert (kv.key, kv.value) == ("k", "v")


def test_tombstone_id():
    kv = KVDoc(key="timeout", label_format="app=mall")
    assert tombstone_id(kv) == "timeout/app=mall"


def test_reverse_by_update_rev():
    kvs = [KVDoc(key=name, update_revision=rev) for name, rev in
           [("a", 2), ("b", 5), ("c", 1), ("d", 3)]]
    reverse_by_update_rev(kvs)
    assert [kv.key for kv in kvs] == ["b", "d", "a", "c"]


def test_reverse_by_update_rev_empty():
    kvs = []
    reverse_by_update_rev(kvs)
    assert kvs == []