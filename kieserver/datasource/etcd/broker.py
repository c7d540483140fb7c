"""Broker of the key-value store datasource."""

from __future__ import annotations

from kieserver.datasource.base import Broker, register_plugin
from kieserver.datasource.etcd.counter import EtcdRevisionDao
from kieserver.datasource.etcd.history import EtcdHistoryDao
from kieserver.datasource.etcd.kv import EtcdKVDao
from kieserver.datasource.etcd.store import MemoryStore
from kieserver.datasource.etcd.track import EtcdTrackDao
from kieserver.datasource.options import Config


class EtcdBroker(Broker):
    """Hands out DAOs that share one store."""

    def __init__(self, store: MemoryStore | None = None) -> None:
        self.store = store if store is not None else MemoryStore()

    def get_revision_dao(self) -> EtcdRevisionDao:
        return EtcdRevisionDao(self.store)

    def get_kv_dao(self) -> EtcdKVDao:
        return EtcdKVDao(self.store)

    def get_history_dao(self) -> EtcdHistoryDao:
        return EtcdHistoryDao(self.store)

    def get_track_dao(self) -> EtcdTrackDao:
        return EtcdTrackDao(self.store)


def new_from(config: Config) -> EtcdBroker:
    """Create a broker with a fresh store."""
    return EtcdBroker()


register_plugin("etcd", new_from)
register_plugin("embedded_etcd", new_from)