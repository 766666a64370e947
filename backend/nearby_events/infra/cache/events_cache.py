from __future__ import annotations

import logging
from typing import Optional

from nearby_events.config import DEFAULT_CACHE_TTL
from nearby_events.domain.models import EventsResponse, Location

from .keys import events_cache_key
from .store import CacheStore

logger = logging.getLogger(__name__)


class EventCache:
    """Raw directory responses keyed by coordinates.

    Entries are shared by every user near the same point, so only the
    untrimmed, unformatted response is ever written here.
    """

    def __init__(self, store: CacheStore) -> None:
        if store is None:
            raise ValueError("store is required")
        self.store = store

    def get(self, location: Optional[Location]) -> Optional[EventsResponse]:
        key = events_cache_key(location)
        if key is None:
            return None
        payload = self.store.get(key)
        if payload is None:
            logger.debug("events cache miss for %s", key)
            return None
        try:
            response = EventsResponse.from_payload(payload)
        except ValueError:
            logger.warning("Ignoring malformed events cache entry %s", key)
            return None
        logger.debug("events cache hit for %s", key)
        return response

    def set(self, response: EventsResponse) -> bool:
        key = events_cache_key(response.location)
        if key is None:
            return False
        ttl = response.ttl or DEFAULT_CACHE_TTL
        return self.store.set(key, response.to_dict(include_formatted=False), ttl)
