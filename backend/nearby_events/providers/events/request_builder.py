from __future__ import annotations

from typing import Optional

from nearby_events.config import EVENTS_API_URL, EVENTS_REQUESTED
from nearby_events.domain.models import Location

from .base import EventsRequest


def build_events_request(
    *,
    locale: str,
    ip: Optional[str] = None,
    search: str = "",
    timezone: str = "",
    location: Optional[Location] = None,
    number: int = EVENTS_REQUESTED,
    base_url: str = EVENTS_API_URL,
) -> EventsRequest:
    """Query for the events directory.

    An explicit ``search`` wins over stored coordinates; with neither, the
    directory falls back to the IP and locale hints.
    """
    params: dict = {"number": number}
    if ip:
        params["ip"] = ip
    params["locale"] = locale
    if timezone:
        params["timezone"] = timezone
    if search:
        params["location"] = search
    elif location is not None and location.has_coordinates:
        params["latitude"] = location.latitude
        params["longitude"] = location.longitude
    return EventsRequest(base_url=base_url, params=params)
