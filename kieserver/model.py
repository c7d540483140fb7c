"""Documents stored in the database and the request/response bodies of the API."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_FRACTION = re.compile(r"\.(\d+)")


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_time(text: str | None) -> datetime:
    if not text:
        return _ZERO_TIME
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # Sub-microsecond digits cannot be represented; keep at most six.
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _labels(value: Any) -> dict[str, str]:
    return {str(k): str(v) for k, v in (value or {}).items()}


@dataclass
class LabelDoc:
    """Stored set of labels."""

    id: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    format: str = ""
    domain: str = ""
    project: str = ""
    alias: str = ""


@dataclass
class KVDoc:
    """A stored key value."""

    id: str = ""
    label_format: str = ""
    key: str = ""
    value: str = ""
    value_type: str = ""
    checker: str = ""
    create_revision: int = 0
    update_revision: int = 0
    project: str = ""
    status: str = ""
    create_time: int = 0
    update_time: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    domain: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty optional fields."""
        optional_before = {
            "id": self.id,
            "label_format": self.label_format,
        }
        optional_after = {
            "value_type": self.value_type,
            "check": self.checker,
            "create_revision": self.create_revision,
            "update_revision": self.update_revision,
            "project": self.project,
            "status": self.status,
            "create_time": self.create_time,
            "update_time": self.update_time,
            "labels": dict(self.labels),
            "domain": self.domain,
        }
        result: dict[str, Any] = {k: v for k, v in optional_before.items() if v}
        result["key"] = self.key
        result["value"] = self.value
        result.update((k, v) for k, v in optional_after.items() if v)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KVDoc:
        """Build a document from its JSON form."""
        return cls(
            id=data.get("id") or "",
            label_format=data.get("label_format") or "",
            key=data.get("key") or "",
            value=data.get("value") or "",
            value_type=data.get("value_type") or "",
            checker=data.get("check") or "",
            create_revision=int(data.get("create_revision") or 0),
            update_revision=int(data.get("update_revision") or 0),
            project=data.get("project") or "",
            status=data.get("status") or "",
            create_time=int(data.get("create_time") or 0),
            update_time=int(data.get("update_time") or 0),
            labels=_labels(data.get("labels")),
            domain=data.get("domain") or "",
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> KVDoc:
        return cls.from_dict(json.loads(text))


@dataclass
class ViewDoc:
    """A user's custom view name and criteria."""

    id: str = ""
    display: str = ""
    project: str = ""
    domain: str = ""
    criteria: str = ""


@dataclass
class PollingDetail:
    """Record of one polling request."""

    id: str = ""
    session_id: str = ""
    session_group: str = ""
    domain: str = ""
    project: str = ""
    polling_data: dict[str, Any] = field(default_factory=dict)
    revision: str = ""
    ip: str = ""
    user_agent: str = ""
    url_path: str = ""
    response_body: list[KVDoc] = field(default_factory=list)
    response_code: int = 0
    timestamp: datetime = _ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty optional fields."""
        fields = {
            "id": self.id,
            "session_id": self.session_id,
            "session_group": self.session_group,
            "domain": self.domain,
            "project": self.project,
            "polling_data": dict(self.polling_data),
            "revision": self.revision,
            "ip": self.ip,
            "user_agent": self.user_agent,
            "url_path": self.url_path,
            "kv": [kv.to_dict() for kv in self.response_body],
            "response_code": self.response_code,
        }
        result = {k: v for k, v in fields.items() if v}
        result["timestamp"] = _format_time(self.timestamp)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PollingDetail:
        return cls(
            id=data.get("id") or "",
            session_id=data.get("session_id") or "",
            session_group=data.get("session_group") or "",
            domain=data.get("domain") or "",
            project=data.get("project") or "",
            polling_data=dict(data.get("polling_data") or {}),
            revision=data.get("revision") or "",
            ip=data.get("ip") or "",
            user_agent=data.get("user_agent") or "",
            url_path=data.get("url_path") or "",
            response_body=[KVDoc.from_dict(kv) for kv in data.get("kv") or []],
            response_code=int(data.get("response_code") or 0),
            timestamp=_parse_time(data.get("timestamp")),
        )


@dataclass
class UpdateKVRequest:
    """Parameters of a key value update."""

    id: str = ""
    value: str = ""
    project: str = ""
    domain: str = ""
    status: str = ""


@dataclass
class GetKVRequest:
    """Parameters of a key value lookup by id."""

    project: str = ""
    domain: str = ""
    id: str = ""


@dataclass
class ListKVRequest:
    """Parameters of a key value listing."""

    project: str = ""
    domain: str = ""
    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    offset: int = 0
    limit: int = 0
    status: str = ""
    match: str = ""


@dataclass
class UploadKVRequest:
    """Parameters of a bulk key value upload."""

    domain: str = ""
    project: str = ""
    kvs: list[KVDoc] = field(default_factory=list)
    override: str = ""


@dataclass
class KVRequest:
    """HTTP request body for a key value."""

    key: str = ""
    value: str = ""
    value_type: str = ""
    checker: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class KVResponse:
    """A page of key values and the total count."""

    total: int = 0
    data: list[KVDoc] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "data": [kv.to_dict() for kv in self.data]}


@dataclass
class LabelDocResponse:
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class LabelHistoryResponse:
    labels: dict[str, str] = field(default_factory=dict)
    kvs: list[KVDoc] = field(default_factory=list)
    revision: int = 0


@dataclass
class ViewResponse:
    total: int = 0
    data: list[ViewDoc] = field(default_factory=list)


@dataclass
class DocResponseSingleKey:
    create_revision: int = 0
    create_time: str = ""
    id: str = ""
    key: str = ""
    label_format: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    update_revision: int = 0
    update_time: str = ""
    value: str = ""
    value_type: str = ""


@dataclass
class DocResponseGetKey:
    data: list[DocResponseSingleKey] = field(default_factory=list)
    total: int = 0


@dataclass
class DocFailedOfUpload:
    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    err_code: int = 0
    err_msg: str = ""


@dataclass
class DocRespOfUpload:
    success: list[KVDoc] = field(default_factory=list)
    failure: list[DocFailedOfUpload] = field(default_factory=list)


@dataclass
class PollingDataResponse:
    data: list[PollingDetail] = field(default_factory=list)
    total: int = 0


@dataclass
class DocHealthCheck:
    version: str = ""
    revision: str = ""
    timestamp: int = 0
    total: int = 0