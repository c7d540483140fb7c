"""Options for finding and writing key values."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_TIMEOUT = timedelta(seconds=60)


@dataclass
class Config:
    """Settings handed to a datasource plugin when it is created."""


@dataclass
class WriteOptions:
    """Options for creating, updating and deleting key values."""

    sync_enable: bool = False


@dataclass
class FindOptions:
    """Criteria for finding key values.

    ``offset`` starts at 0; a ``limit`` of 0 turns paging off.
    """

    exact_labels: bool = False
    status: str = ""
    depth: int = 0
    id: str = ""
    key: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    label_format: str = ""
    clear_label: bool = False
    timeout: timedelta = DEFAULT_TIMEOUT
    offset: int = 0
    limit: int = 0
    case_sensitive: bool = False


def default_find_options() -> FindOptions:
    """Return find options with the default timeout and nothing else set."""
    return FindOptions(timeout=DEFAULT_TIMEOUT)