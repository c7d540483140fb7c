"""Client address extraction from HTTP requests."""

from __future__ import annotations

from collections.abc import Mapping


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def _split_host(addr: str) -> str | None:
    """Return the host part of ``host:port``, or None when malformed."""
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or end + 1 >= len(addr) or addr[end + 1] != ":":
            return None
        rest = addr[end + 2 :]
        if "[" in addr[1:end] or "[" in rest or "]" in rest:
            return None
        return addr[1:end]
    colon = addr.rfind(":")
    if colon < 0:
        return None
    host = addr[:colon]
    if ":" in host or "[" in addr or "]" in addr:
        return None
    return host


def client_ip(headers: Mapping[str, str], remote_addr: str = "") -> str:
    """Return the client IP from forwarding headers or the peer address."""
    forwarded = _header(headers, "X-Forwarded-For")
    ip = forwarded.split(",")[0].strip()
    if ip:
        return ip
    ip = _header(headers, "X-Real-Ip").strip()
    if ip:
        return ip
    host = _split_host(remote_addr.strip())
    return host if host is not None else ""