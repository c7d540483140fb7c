"""Persistence interfaces, errors and the plugin registry of the datasource layer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from kieserver.datasource.options import Config, FindOptions, WriteOptions
from kieserver.model import GetKVRequest, KVDoc, KVResponse, PollingDetail

logger = logging.getLogger(__name__)

DEFAULT_VALUE_TYPE = "text"
MAX_HISTORY_NUM = 100
CONFIG_RESOURCE = "config"


class DatasourceError(Exception):
    """Base of all datasource errors."""

    default_message = "datasource error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class KeyNotExistsError(DatasourceError):
    default_message = "can not find any key value"


class RecordNotExistsError(DatasourceError):
    default_message = "can not find any polling data"


class RevisionNotExistError(DatasourceError):
    default_message = "revision does not exist"


class KVAlreadyExistsError(DatasourceError):
    default_message = "kv already exists"


class TooManyError(DatasourceError):
    default_message = "key with labels should be only one"


class KVDao(ABC):
    """Access to key value documents."""

    @abstractmethod
    def create(self, kv: KVDoc, options: WriteOptions | None = None) -> KVDoc: ...

    @abstractmethod
    def update(self, kv: KVDoc, options: WriteOptions | None = None) -> None: ...

    @abstractmethod
    def list(
        self, project: str, domain: str, options: FindOptions | None = None
    ) -> KVResponse: ...

    @abstractmethod
    def find_one_and_delete(
        self,
        kv_id: str,
        project: str,
        domain: str,
        options: WriteOptions | None = None,
    ) -> KVDoc:
        """Delete one key value by id and return it as it was."""

    @abstractmethod
    def find_many_and_delete(
        self,
        kv_ids: list[str],
        project: str,
        domain: str,
        options: WriteOptions | None = None,
    ) -> tuple[list[KVDoc], int]:
        """Delete key values by id; return them as they were and the count."""

    @abstractmethod
    def get(self, req: GetKVRequest) -> KVDoc: ...

    @abstractmethod
    def exist(
        self,
        key: str,
        project: str,
        domain: str,
        options: FindOptions | None = None,
    ) -> bool: ...

    @abstractmethod
    def total(self, project: str, domain: str) -> int:
        """Return the number of key values in a domain and project."""


class HistoryDao(ABC):
    """Access to the revision history of key values."""

    @abstractmethod
    def add_history(self, kv: KVDoc) -> None: ...

    @abstractmethod
    def get_history(
        self,
        kv_id: str,
        project: str,
        domain: str,
        options: FindOptions | None = None,
    ) -> KVResponse: ...

    @abstractmethod
    def delay_deletion_time(
        self, kv_ids: list[str], project: str, domain: str
    ) -> None: ...


class TrackDao(ABC):
    """Access to polling records."""

    @abstractmethod
    def create_or_update(self, detail: PollingDetail) -> PollingDetail: ...

    @abstractmethod
    def get_polling_detail(self, detail: PollingDetail) -> list[PollingDetail]: ...


class RevisionDao(ABC):
    """Global revision counter."""

    @abstractmethod
    def get_revision(self, domain: str) -> int: ...

    @abstractmethod
    def apply_revision(self, domain: str) -> int:
        """Increase the revision and return the new value."""


class Broker(ABC):
    """Entry to every DAO of one persistence solution."""

    @abstractmethod
    def get_revision_dao(self) -> RevisionDao: ...

    @abstractmethod
    def get_history_dao(self) -> HistoryDao: ...

    @abstractmethod
    def get_track_dao(self) -> TrackDao: ...

    @abstractmethod
    def get_kv_dao(self) -> KVDao: ...


BrokerFactory = Callable[[Config], Broker]

_plugins: dict[str, BrokerFactory] = {}
_broker: Broker | None = None


def register_plugin(name: str, factory: BrokerFactory) -> None:
    """Make a datasource kind available under ``name``."""
    _plugins[name] = factory


def init(kind: str) -> Broker:
    """Create the broker of ``kind`` and make it the current one."""
    global _broker
    try:
        factory = _plugins[kind]
    except KeyError:
        raise DatasourceError(f"do not support '{kind}'") from None
    _broker = factory(Config())
    logger.info("use %s as storage", kind)
    return _broker


def get_broker() -> Broker:
    """Return the current broker."""
    if _broker is None:
        raise DatasourceError("datasource is not initialized")
    return _broker


def clear_part(kv: KVDoc) -> None:
    """Remove domain, project and label format from ``kv``."""
    kv.domain = ""
    kv.project = ""
    kv.label_format = ""


def tombstone_id(kv: KVDoc) -> str:
    """Return the tombstone resource id: key and label format."""
    return f"{kv.key}/{kv.label_format}"


def reverse_by_update_rev(kvs: list[KVDoc]) -> None:
    """Sort ``kvs`` in place, newest update revision first."""
    kvs.sort(key=lambda kv: kv.update_revision, reverse=True)