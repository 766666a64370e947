from __future__ import annotations

import hashlib
from typing import Optional

from nearby_events.config import CACHE_KEY_PREFIX
from nearby_events.domain.models import Location


def events_cache_key(location: Optional[Location]) -> Optional[str]:
    """Cache key for the events near ``location``, or None without coordinates."""
    if location is None or not location.has_coordinates:
        return None
    # Separator keeps (1.5, 22.5) and (1.52, 2.5) apart
    raw = f"{location.latitude!r}:{location.longitude!r}"
    return CACHE_KEY_PREFIX + hashlib.md5(raw.encode("utf-8")).hexdigest()
