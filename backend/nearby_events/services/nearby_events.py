from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from nearby_events.config import EVENTS_API_URL
from nearby_events.domain.errors import ApiError, ApiInvalidResponse
from nearby_events.domain.models import EventsResponse, Location, RequestContext
from nearby_events.domain.normalize import normalize_response
from nearby_events.infra.cache.events_cache import EventCache
from nearby_events.infra.client_ip import resolve_client_ip
from nearby_events.providers.events.base import DirectoryResponse, EventsDirectory, EventsRequest
from nearby_events.providers.events.request_builder import build_events_request

logger = logging.getLogger(__name__)


@dataclass
class LookupResult:
    response: EventsResponse
    from_cache: bool = False
    # Set when the caller should remember this as the user's location
    location_update: Optional[Location] = None
    request_url: Optional[str] = None
    status_code: Optional[int] = None

    def to_dict(self) -> dict:
        data = self.response.to_dict()
        data["api_request_info"] = {
            "request_url": self.request_url,
            "response_code": self.status_code,
            "from_cache": self.from_cache,
        }
        return data


class NearbyEventsClient:
    """Looks up events near a user, going to the directory only when needed.

    A cached response for the stored coordinates is served as long as the user
    is not searching for a new place. Anything fetched is cached raw and then
    trimmed and localized for this caller alone.
    """

    def __init__(self, directory: EventsDirectory, cache: EventCache, *, base_url: str = EVENTS_API_URL) -> None:
        if directory is None or cache is None:
            raise ValueError("directory and cache are required")
        self.directory = directory
        self.cache = cache
        self.base_url = base_url

    def lookup(
        self,
        context: RequestContext,
        stored_location: Optional[Location] = None,
        search: str = "",
        timezone: str = "",
        *,
        now: Optional[datetime] = None,
    ) -> LookupResult:
        if not search:
            cached = self.cache.get(stored_location)
            if cached is not None:
                return LookupResult(response=self._normalize(cached, context, now), from_cache=True)

        request = build_events_request(
            locale=context.locale,
            ip=resolve_client_ip(context.headers),
            search=search,
            timezone=timezone,
            location=stored_location,
            base_url=self.base_url,
        )
        fetched = self.directory.fetch(request)
        response = self._validate(request, fetched)

        self._write_through(response)

        location_update = None
        if response.location.to_dict() and (search or stored_location is None):
            location_update = response.location

        return LookupResult(
            response=self._normalize(response, context, now),
            location_update=location_update,
            request_url=request.url,
            status_code=fetched.status_code,
        )

    def peek_cached(
        self,
        context: RequestContext,
        stored_location: Optional[Location],
        *,
        now: Optional[datetime] = None,
    ) -> Optional[EventsResponse]:
        """Normalized cached events for ``stored_location``. Never touches the network."""
        cached = self.cache.get(stored_location)
        if cached is None:
            return None
        return self._normalize(cached, context, now)

    @staticmethod
    def _validate(request: EventsRequest, fetched: DirectoryResponse) -> EventsResponse:
        body = fetched.body if fetched.body is not None else fetched.text
        if not fetched.ok:
            logger.warning("events directory returned %s for %s", fetched.status_code, request.url)
            raise ApiError(request_url=request.url, status_code=fetched.status_code, body=body)

        payload = fetched.body if isinstance(fetched.body, dict) else {}
        if payload.get("location") is None or payload.get("events") is None:
            message = payload.get("error") or "Unknown API error."
            logger.warning("events directory sent an invalid payload for %s: %s", request.url, message)
            raise ApiInvalidResponse(
                str(message), request_url=request.url, status_code=fetched.status_code, body=body
            )
        try:
            return EventsResponse.from_payload(payload)
        except ValueError as exc:
            message = payload.get("error") or "Unknown API error."
            logger.warning("events directory sent a malformed payload for %s: %s", request.url, exc)
            raise ApiInvalidResponse(
                str(message), request_url=request.url, status_code=fetched.status_code, body=body
            ) from exc

    def _write_through(self, response: EventsResponse) -> None:
        try:
            stored = self.cache.set(response)
        except Exception as exc:  # the lookup still succeeds without the cache
            logger.warning("could not cache events response: %s", exc)
            return
        if not stored:
            logger.debug("events response not cached")

    @staticmethod
    def _normalize(response: EventsResponse, context: RequestContext, now: Optional[datetime]) -> EventsResponse:
        return normalize_response(
            response,
            locale=context.locale,
            display_timezone=context.display_timezone,
            now=now,
        )
