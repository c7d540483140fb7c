"""Synchronisation tasks and tombstones recorded alongside key value writes."""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PENDING_STATUS = "pending"


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class Task:
    """A change to be replayed on other clusters."""

    id: str
    domain: str
    project: str
    action: Action
    resource_type: str
    resource: dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0
    status: str = PENDING_STATUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "domain": self.domain,
            "project": self.project,
            "action": self.action.value,
            "resource_type": self.resource_type,
            "resource": self.resource,
            "timestamp": self.timestamp,
            "status": self.status,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


@dataclass
class Tombstone:
    """Marker of a deleted resource."""

    resource_id: str
    resource_type: str
    domain: str
    project: str
    timestamp: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource_id": self.resource_id,
            "resource_type": self.resource_type,
            "domain": self.domain,
            "project": self.project,
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


def _resource_dict(resource: Any) -> dict[str, Any]:
    to_dict = getattr(resource, "to_dict", None)
    if callable(to_dict):
        data = to_dict()
    elif isinstance(resource, Mapping):
        data = dict(resource)
    else:
        raise TypeError(f"cannot record {type(resource).__name__} in a task")
    json.dumps(data)  # raises TypeError when the resource cannot be encoded
    return data


def new_task(
    domain: str, project: str, action: Action | str, resource_type: str, resource: Any
) -> Task:
    """Return a pending task recording ``action`` on ``resource``."""
    return Task(
        id=str(uuid.uuid4()),
        domain=domain,
        project=project,
        action=Action(action),
        resource_type=resource_type,
        resource=_resource_dict(resource),
        timestamp=time.time_ns(),
    )


def new_tombstone(
    domain: str, project: str, resource_type: str, resource_id: str
) -> Tombstone:
    """Return a tombstone for a deleted resource, stamped now."""
    return Tombstone(
        resource_id=resource_id,
        resource_type=resource_type,
        domain=domain,
        project=project,
        timestamp=time.time_ns(),
    )