from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time

from nearby_events.config import (
    DATE_FORMAT,
    DEFAULT_LOCALE,
    EVENTS_SHOWN,
    MEETUP_STALE_AFTER,
    TIME_FORMAT,
)

from .models import EventRecord, EventsResponse

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_stale_meetup(event: EventRecord, now: datetime) -> bool:
    if not event.is_meetup:
        return False
    start = event.parsed_date()
    if start is None:
        return True
    return _as_utc(now) - _as_utc(start) > MEETUP_STALE_AFTER


def trim_events(
    response: EventsResponse,
    *,
    now: Optional[datetime] = None,
    limit: int = EVENTS_SHOWN,
) -> EventsResponse:
    """Drop meetups that ended more than a day ago, then keep the first ``limit``.

    Other event types are never dropped for being in the past. Upstream order
    is kept as is.
    """
    now = now or datetime.now(timezone.utc)
    kept = [event for event in response.events if not is_stale_meetup(event, now)]
    return replace(response, events=kept[:limit])


def resolve_locale(locale: Optional[str]) -> Locale:
    candidate = (locale or DEFAULT_LOCALE).replace("-", "_")
    try:
        return Locale.parse(candidate)
    except (UnknownLocaleError, ValueError):
        logger.warning("Unknown locale %r, falling back to %s", locale, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE)


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning("Unknown timezone %r, using UTC", name)
    return ZoneInfo("UTC")


def localize_event(event: EventRecord, locale: Locale, tz: ZoneInfo) -> EventRecord:
    start = event.parsed_date()
    if start is None:
        return replace(event, formatted_date=None, formatted_time=None)
    # Naive dates are already the event's local wall clock
    if start.tzinfo is not None:
        start = start.astimezone(tz)
    return replace(
        event,
        formatted_date=format_date(start.date(), format=DATE_FORMAT, locale=locale),
        formatted_time=format_time(start.time(), format=TIME_FORMAT, locale=locale),
    )


def localize_events(
    response: EventsResponse,
    *,
    locale: Optional[str] = None,
    display_timezone: Optional[str] = None,
) -> EventsResponse:
    babel_locale = resolve_locale(locale)
    tz = resolve_timezone(display_timezone)
    return replace(response, events=[localize_event(event, babel_locale, tz) for event in response.events])


def normalize_response(
    response: EventsResponse,
    *,
    locale: Optional[str] = None,
    display_timezone: Optional[str] = None,
    now: Optional[datetime] = None,
) -> EventsResponse:
    # Trim first so nothing is formatted only to be thrown away
    trimmed = trim_events(response, now=now)
    return localize_events(trimmed, locale=locale, display_timezone=display_timezone)
