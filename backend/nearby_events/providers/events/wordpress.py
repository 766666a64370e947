from __future__ import annotations

import logging
from typing import Optional

import httpx

from nearby_events.config import REQUEST_TIMEOUT
from nearby_events.domain.errors import ApiError

from .base import DirectoryResponse, EventsDirectory, EventsRequest

logger = logging.getLogger(__name__)


class WordPressEventsProvider(EventsDirectory):
    """Client for the api.wordpress.org events directory."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    def fetch(self, request: EventsRequest) -> DirectoryResponse:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.get(request.base_url, params=request.params)
        except httpx.HTTPError as exc:
            logger.warning("events directory unreachable (%s): %s", request.url, exc)
            raise ApiError(request_url=request.url, status_code=None, body=str(exc)) from exc
        try:
            body = resp.json()
        except ValueError:
            body = None
        return DirectoryResponse(status_code=resp.status_code, body=body, text=resp.text)
