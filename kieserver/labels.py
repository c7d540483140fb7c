"""Comparison of label sets."""

from __future__ import annotations

from collections.abc import Mapping


def is_equivalent_label(
    x: Mapping[str, str] | None, y: Mapping[str, str] | None
) -> bool:
    """Return whether two label sets are equal; a missing set equals an empty one."""
    if not x and not y:
        return True
    return dict(x or {}) == dict(y or {})


def is_contain_label(
    x: Mapping[str, str] | None, y: Mapping[str, str] | None
) -> bool:
    """Return whether every label of ``y`` is present in ``x`` with the same value."""
    x = x or {}
    y = y or {}
    if len(x) < len(y):
        return False
    return all(k in x and x[k] == v for k, v in y.items())