"""Field rules for request and document validation."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from kieserver.model import (
    GetKVRequest,
    KVDoc,
    ListKVRequest,
    UpdateKVRequest,
    UploadKVRequest,
)

_RULES: dict[str, re.Pattern[str]] = {
    "key": re.compile(r"\A[a-zA-Z0-9._:-]+\Z"),
    "getKey": re.compile(
        r"\A(?:[a-zA-Z0-9._:-]*"
        r"|beginWith\([a-zA-Z0-9._:-]*\)"
        r"|wildcard\([a-zA-Z0-9*._:-]*\))\Z"
    ),
    "commonName": re.compile(
        r"\A(?:[a-zA-Z0-9]*|[a-zA-Z0-9][a-zA-Z0-9_\-.]*[a-zA-Z0-9])\Z"
    ),
    "valueType": re.compile(r"\A(?:|ini|json|text|yaml|properties|xml)\Z"),
    "kvStatus": re.compile(r"\A(?:|enabled|disabled)\Z"),
    "value": re.compile(r".*"),
    "labelK": re.compile(
        r"\A(?:[a-zA-Z0-9]{1,32}|[a-zA-Z0-9][a-zA-Z0-9_\-.]{1,30}[a-zA-Z0-9])\Z"
    ),
    "labelV": re.compile(
        r"\A(?:[a-zA-Z0-9]{0,160}|[a-zA-Z0-9][a-zA-Z0-9_\-.]{0,158}[a-zA-Z0-9])\Z"
    ),
    "check": re.compile(r"\A[\x00-\x7F]*\Z"),
}


class ValidationError(ValueError):
    """Raised when fields break their rules; ``failures`` lists (field, rule)."""

    def __init__(self, failures: list[tuple[str, str]]) -> None:
        self.failures = failures
        super().__init__(
            "; ".join(f"field '{f}' failed on the '{tag}' rule" for f, tag in failures)
        )


def check_rule(rule: str, value: str) -> bool:
    """Return whether ``value`` satisfies the named pattern rule."""
    try:
        pattern = _RULES[rule]
    except KeyError:
        raise ValueError(f"unknown rule: {rule}") from None
    return pattern.search(value) is not None


@dataclass(frozen=True)
class _Text:
    name: str
    min: int | None = None
    max: int | None = None
    rule: str | None = None

    def failures(self, value: str) -> Iterator[tuple[str, str]]:
        if self.min is not None and len(value) < self.min:
            yield self.name, "min"
        elif self.max is not None and len(value) > self.max:
            yield self.name, "max"
        elif self.rule is not None and not check_rule(self.rule, value):
            yield self.name, self.rule


@dataclass(frozen=True)
class _Number:
    name: str
    min: int | None = None
    max: int | None = None

    def failures(self, value: int) -> Iterator[tuple[str, str]]:
        if self.min is not None and value < self.min:
            yield self.name, "min"
        elif self.max is not None and value > self.max:
            yield self.name, "max"


@dataclass(frozen=True)
class _Labels:
    name: str
    max: int

    def failures(self, value: Mapping[str, str] | None) -> Iterator[tuple[str, str]]:
        labels = value or {}
        if len(labels) > self.max:
            yield self.name, "max"
            return
        for k, v in labels.items():
            if not check_rule("labelK", k):
                yield f"{self.name}[{k}]", "labelK"
            elif not check_rule("labelV", v):
                yield f"{self.name}[{k}]", "labelV"


_PROJECT = _Text("project", 1, 256, "commonName")
_DOMAIN = _Text("domain", 1, 256, "commonName")
_STATUS = _Text("status", rule="kvStatus")
_ID = _Text("id", 1, 64)
_VALUE = _Text("value", None, 131072, "value")

_SCHEMAS: dict[type, tuple[Any, ...]] = {
    KVDoc: (
        _Text("key", 1, 2048, "key"),
        _VALUE,
        _Text("value_type", rule="valueType"),
        _Text("checker", None, 1048576, "check"),
        _PROJECT,
        _STATUS,
        _Labels("labels", 6),
        _DOMAIN,
    ),
    UpdateKVRequest: (_ID, _VALUE, _PROJECT, _DOMAIN, _STATUS),
    GetKVRequest: (_PROJECT, _DOMAIN, _ID),
    ListKVRequest: (
        _PROJECT,
        _DOMAIN,
        _Text("key", None, 128, "getKey"),
        _Labels("labels", 8),
        _Number("offset", 0),
        _Number("limit", 0, 100),
        _STATUS,
    ),
    UploadKVRequest: (_DOMAIN, _PROJECT),
}


def validate(obj: Any) -> Any:
    """Check every rule of ``obj``'s fields; return ``obj`` or raise ValidationError."""
    schema = next((s for t, s in _SCHEMAS.items() if isinstance(obj, t)), None)
    if schema is None:
        raise TypeError(f"no validation rules for {type(obj).__name__}")
    failures = [
        failure
        for check in schema
        for failure in check.failures(getattr(obj, check.name))
    ]
    if failures:
        raise ValidationError(failures)
    return obj