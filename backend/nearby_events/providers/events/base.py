from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx


@dataclass(frozen=True)
class EventsRequest:
    base_url: str
    params: dict = field(default_factory=dict)

    @property
    def url(self) -> str:
        return str(httpx.URL(self.base_url, params=self.params))


@dataclass
class DirectoryResponse:
    status_code: int
    body: Any = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class EventsDirectory(Protocol):
    """Contract for the remote events directory."""

    def fetch(self, request: EventsRequest) -> DirectoryResponse:
        """Perform ``request`` and return the status with the decoded body.

        ``body`` is None when the payload is not JSON. Transport failures are
        raised as ``ApiError`` with no status code.
        """
        raise NotImplementedError
