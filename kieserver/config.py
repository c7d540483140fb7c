"""Server configuration read from a YAML file and the command line."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class TLS:
    ssl_enabled: bool = False
    root_ca: str = ""
    cert_file: str = ""
    key_file: str = ""
    cert_pwd_file: str = ""
    verify_peer: bool = False


@dataclass
class DB:
    """Persistence settings; TLS keys sit inline in the ``db`` section."""

    tls: TLS = field(default_factory=TLS)
    uri: str = ""
    kind: str = ""
    pool_size: int = 0
    timeout: str = ""


@dataclass
class RBAC:
    enabled: bool = False
    pub_key_file: str = ""


@dataclass
class Sync:
    enabled: bool = False


def _as_str(name: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list)):
        raise ValueError(f"cannot read {value!r} into string field {name}")
    return str(value)


def _as_bool(name: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"cannot read {value!r} into bool field {name}")
    return value


def _as_int(name: str, value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"cannot read {value!r} into int field {name}")
    return value


_Spec = Mapping[str, tuple[str, Callable[[str, Any], Any]]]

_TLS_KEYS: _Spec = {
    "sslEnabled": ("ssl_enabled", _as_bool),
    "rootCAFile": ("root_ca", _as_str),
    "certFile": ("cert_file", _as_str),
    "keyFile": ("key_file", _as_str),
    "certPwdFile": ("cert_pwd_file", _as_str),
    "verifyPeer": ("verify_peer", _as_bool),
}
_DB_KEYS: _Spec = {
    "uri": ("uri", _as_str),
    "kind": ("kind", _as_str),
    "poolSize": ("pool_size", _as_int),
    "timeout": ("timeout", _as_str),
}
_RBAC_KEYS: _Spec = {
    "enabled": ("enabled", _as_bool),
    "rsaPublicKeyFile": ("pub_key_file", _as_str),
}
_SYNC_KEYS: _Spec = {"enabled": ("enabled", _as_bool)}
_TOP_KEYS: _Spec = {
    "configfile": ("config_file", _as_str),
    "nodename": ("node_name", _as_str),
    "listenpeeraddr": ("listen_peer_addr", _as_str),
    "peeraddr": ("peer_addr", _as_str),
    "advertiseaddr": ("advertise_addr", _as_str),
}


def _section(name: str, value: Any) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"section {name} must be a mapping")
    return value


def _apply(target: Any, data: Mapping[str, Any], spec: _Spec) -> None:
    for key, value in data.items():
        if key in spec:
            attr, convert = spec[key]
            setattr(target, attr, convert(key, value))


@dataclass
class Config:
    """All server settings."""

    db: DB = field(default_factory=DB)
    rbac: RBAC = field(default_factory=RBAC)
    sync: Sync = field(default_factory=Sync)
    config_file: str = ""
    node_name: str = ""
    listen_peer_addr: str = ""
    peer_addr: str = ""
    advertise_addr: str = ""

    def load(self) -> None:
        """Read ``config_file`` and overlay the keys it sets."""
        with open(self.config_file, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        top = _section("root", data)
        _apply(self, top, _TOP_KEYS)
        if "db" in top:
            db = _section("db", top["db"])
            _apply(self.db, db, _DB_KEYS)
            _apply(self.db.tls, db, _TLS_KEYS)
        if "rbac" in top:
            _apply(self.rbac, _section("rbac", top["rbac"]), _RBAC_KEYS)
        if "sync" in top:
            _apply(self.sync, _section("sync", top["sync"]), _SYNC_KEYS)


CONFIGURATIONS = Config()


def get_db() -> DB:
    return CONFIGURATIONS.db


def get_rbac() -> RBAC:
    return CONFIGURATIONS.rbac


def get_sync() -> Sync:
    return CONFIGURATIONS.sync