"""String helpers for label sets."""

from collections.abc import Mapping

LABEL_NONE = "none"


def format_map(m: Mapping[str, str] | None) -> str:
    """Format labels as sorted ``k=v`` pairs joined by ``::``; ``none`` when empty."""
    if not m:
        return LABEL_NONE
    return "::".join(f"{k}={m[k]}" for k in sorted(m))