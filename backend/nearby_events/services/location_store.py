from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol

from nearby_events.domain.models import Location


class LocationStore(Protocol):
    """Where each user's last resolved location is kept between requests."""

    def get(self, user_id: str) -> Optional[Location]:
        ...

    def set(self, user_id: str, location: Location) -> None:
        ...


class InMemoryLocationStore:
    def __init__(self) -> None:
        self._locations: Dict[str, Location] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Optional[Location]:
        with self._lock:
            return self._locations.get(user_id)

    def set(self, user_id: str, location: Location) -> None:
        with self._lock:
            self._locations[user_id] = location
