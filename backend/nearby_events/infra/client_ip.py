from __future__ import annotations

from typing import Mapping, Optional

# Best signal first. REMOTE_ADDR is the direct peer, usually a proxy when the others are set.
ADDRESS_HEADERS = (
    "client-ip",
    "x-forwarded-for",
    "x-forwarded",
    "x-cluster-client-ip",
    "forwarded-for",
    "forwarded",
    "remote-addr",
)


def _normalize_header(name: str) -> str:
    name = name.strip().lower()
    if name.startswith("http_"):
        name = name[len("http_"):]
    return name.replace("_", "-")


def resolve_client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """Best guess at the caller's address, for use as a location hint only.

    Accepts plain header names (``X-Forwarded-For``) as well as WSGI/CGI
    environ keys (``HTTP_X_FORWARDED_FOR``, ``REMOTE_ADDR``). Forwarded chains
    list the original client first, so only the first comma-separated entry is
    used.

    Every one of these values can be set by the client. Never use the result
    for authentication or access control.
    """
    normalized = {}
    for name, value in headers.items():
        if value is None:
            continue
        normalized.setdefault(_normalize_header(name), value)
    for header in ADDRESS_HEADERS:
        if header in normalized:
            return str(normalized[header]).split(",")[0].strip()
    return None
