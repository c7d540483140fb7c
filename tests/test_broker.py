from kieserver.datasource import base
from kieserver.datasource.etcd.broker import EtcdBroker, new_from
from kieserver.datasource.options import Config
from kieserver.model import KVDoc


def test_new_from_gives_fresh_store():
    first = new_from(Config())
    second = new_from(Config())
    assert isinstance(first, EtcdBroker)
    assert first.store is not second.store


def test_daos_share_store():
    broker = EtcdBroker()
    kv = KVDoc(id="a", key="k", value="v", domain="default", project="p", update_revision=3)
    broker.get_kv_dao().create(kv)
    broker.get_history_dao().add_history(kv)
    assert broker.get_kv_dao().total("p", "default") == 1
    history = broker.get_history_dao().get_history("a", "p", "default")
    assert [h.value for h in history.data] == ["v"]


def test_revision_dao():
    broker = EtcdBroker()
    dao = broker.get_revision_dao()
    applied = dao.apply_revision("default")
    assert broker.get_revision_dao().get_revision("default") == applied
    assert dao.apply_revision("default") > applied


def test_registered_kinds():
    for kind in ("etcd", "embedded_etcd"):
        broker = base.init(kind)
        assert isinstance(broker, EtcdBroker)
        assert base.get_broker() is broker


def test_track_dao_round_trip():
    from kieserver.model import PollingDetail

    broker = EtcdBroker()
    detail = PollingDetail(domain="default", project="p", revision="1", session_id="s")
    broker.get_track_dao().create_or_update(detail)
    found = broker.get_track_dao().get_polling_detail(PollingDetail(domain="default", project="p"))
    assert [d.session_id for d in found] == ["s"]