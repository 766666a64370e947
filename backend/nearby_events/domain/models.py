from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from dateutil import parser as date_parser

from nearby_events.config import DEFAULT_DISPLAY_TZ, DEFAULT_LOCALE

_LOCATION_FIELDS = ("latitude", "longitude", "description", "country", "search", "timezone")
_EVENT_FIELDS = ("type", "date", "title", "url", "formatted_date", "formatted_time")


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Location:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None
    country: Optional[str] = None
    search: Optional[str] = None
    timezone: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def __post_init__(self):
        self.latitude = _to_float(self.latitude)
        self.longitude = _to_float(self.longitude)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> Optional["Location"]:
        if not payload or not isinstance(payload, Mapping):
            return None
        extra = {k: v for k, v in payload.items() if k not in _LOCATION_FIELDS}
        return cls(
            latitude=payload.get("latitude"),
            longitude=payload.get("longitude"),
            description=payload.get("description"),
            country=payload.get("country"),
            search=payload.get("search"),
            timezone=payload.get("timezone"),
            extra=extra,
        )

    def to_dict(self) -> dict:
        data = dict(self.extra)
        for name in _LOCATION_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


@dataclass
class EventRecord:
    """A single entry of the events directory response.

    ``date`` is authoritative. ``formatted_date`` and ``formatted_time`` are
    filled in per reader by the localizer and never stored in the cache.
    Fields the directory sends that are not modelled here survive in ``extra``.
    """

    type: str
    date: str
    title: Optional[str] = None
    url: Optional[str] = None
    formatted_date: Optional[str] = None
    formatted_time: Optional[str] = None
    extra: dict = field(default_factory=dict)

    @property
    def is_meetup(self) -> bool:
        return self.type == "meetup"

    def parsed_date(self) -> Optional[datetime]:
        if not self.date:
            return None
        try:
            return date_parser.parse(self.date)
        except (ValueError, OverflowError):
            return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EventRecord":
        extra = {k: v for k, v in payload.items() if k not in _EVENT_FIELDS}
        return cls(
            type=str(payload.get("type") or ""),
            date=str(payload.get("date") or ""),
            title=payload.get("title"),
            url=payload.get("url"),
            formatted_date=payload.get("formatted_date"),
            formatted_time=payload.get("formatted_time"),
            extra=extra,
        )

    def to_dict(self, include_formatted: bool = True) -> dict:
        data = dict(self.extra)
        data["type"] = self.type
        data["date"] = self.date
        if self.title is not None:
            data["title"] = self.title
        if self.url is not None:
            data["url"] = self.url
        if include_formatted:
            data["formatted_date"] = self.formatted_date
            data["formatted_time"] = self.formatted_time
        return data


@dataclass
class EventsResponse:
    location: Location
    events: list[EventRecord] = field(default_factory=list)
    ttl: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "EventsResponse":
        if "location" not in payload or "events" not in payload:
            raise ValueError("payload requires 'location' and 'events'")
        if not isinstance(payload["location"], Mapping):
            raise ValueError("'location' must be an object")
        events = payload.get("events") or []
        if not isinstance(events, list):
            raise ValueError("'events' must be a list")
        ttl = payload.get("ttl")
        try:
            ttl = abs(int(ttl)) if ttl is not None else None
        except (TypeError, ValueError):
            ttl = None
        return cls(
            location=Location.from_dict(payload.get("location")) or Location(),
            events=[EventRecord.from_dict(item) for item in events if isinstance(item, Mapping)],
            ttl=ttl,
        )

    def to_dict(self, include_formatted: bool = True) -> dict:
        data = {
            "location": self.location.to_dict(),
            "events": [event.to_dict(include_formatted=include_formatted) for event in self.events],
        }
        if self.ttl is not None:
            data["ttl"] = self.ttl
        return data


@dataclass(frozen=True)
class RequestContext:
    """Per-request state for one caller.

    ``headers`` holds the inbound request headers (or a WSGI-style environ) and
    is only used to derive a client IP hint for the directory.
    """

    user_id: str
    locale: str = DEFAULT_LOCALE
    display_timezone: str = DEFAULT_DISPLAY_TZ
    headers: Mapping[str, str] = field(default_factory=dict)
