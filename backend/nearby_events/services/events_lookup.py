from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Engine

from nearby_events.domain.models import EventsResponse, RequestContext
from nearby_events.infra.cache.events_cache import EventCache
from nearby_events.infra.cache.store import CacheStore, InMemoryCacheStore
from nearby_events.infra.db.cache_entries_repository import CacheEntriesRepository
from nearby_events.infra.db.user_locations_repository import UserLocationsRepository
from nearby_events.providers.events.base import EventsDirectory
from nearby_events.providers.events.wordpress import WordPressEventsProvider
from nearby_events.services.location_store import InMemoryLocationStore, LocationStore
from nearby_events.services.nearby_events import LookupResult, NearbyEventsClient


class EventsLookupService:
    def __init__(self, client: NearbyEventsClient, locations: LocationStore) -> None:
        self.client = client
        self.locations = locations

    def get_events(self, context: RequestContext, search: str = "", timezone: str = "") -> LookupResult:
        stored = self.locations.get(context.user_id)
        result = self.client.lookup(context, stored, search=search, timezone=timezone)
        if result.location_update is not None:
            self.locations.set(context.user_id, result.location_update)
        return result

    def get_cached_events(self, context: RequestContext) -> Optional[EventsResponse]:
        return self.client.peek_cached(context, self.locations.get(context.user_id))


def build_events_service(engine: Optional[Engine] = None, directory: Optional[EventsDirectory] = None) -> EventsLookupService:
    """Wire the lookup service to SQL stores when ``engine`` is given, in-memory ones otherwise."""
    if engine is not None:
        cache_store: CacheStore = CacheEntriesRepository(engine)
        locations: LocationStore = UserLocationsRepository(engine)
    else:
        cache_store = InMemoryCacheStore()
        locations = InMemoryLocationStore()
    client = NearbyEventsClient(directory or WordPressEventsProvider(), EventCache(cache_store))
    return EventsLookupService(client, locations)
