from __future__ import annotations

from datetime import datetime, timedelta, timezone

from nearby_events.domain.models import EventRecord, EventsResponse, Location
from nearby_events.domain.normalize import localize_events, normalize_response, trim_events

NOW = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)


def _date(delta: timedelta) -> str:
    return (NOW + delta).strftime("%Y-%m-%d %H:%M:%S")


def _response(*events: EventRecord) -> EventsResponse:
    return EventsResponse(location=Location(latitude=40.7, longitude=-74.0), events=list(events))


def test_meetup_older_than_a_day_is_dropped():
    response = _response(
        EventRecord(type="meetup", date=_date(-timedelta(hours=25)), title="old"),
        EventRecord(type="meetup", date=_date(-timedelta(hours=23)), title="recent"),
        EventRecord(type="meetup", date=_date(timedelta(days=3)), title="upcoming"),
    )
    trimmed = trim_events(response, now=NOW)
    assert [event.title for event in trimmed.events] == ["recent", "upcoming"]


def test_exactly_one_day_old_meetup_survives():
    response = _response(EventRecord(type="meetup", date=_date(-timedelta(hours=24)), title="edge"))
    assert len(trim_events(response, now=NOW).events) == 1


def test_other_event_types_are_never_dropped_for_age():
    response = _response(EventRecord(type="wordcamp", date=_date(-timedelta(days=365)), title="camp"))
    assert [event.title for event in trim_events(response, now=NOW).events] == ["camp"]


def test_meetup_with_unreadable_date_is_dropped():
    response = _response(EventRecord(type="meetup", date="not a date"))
    assert trim_events(response, now=NOW).events == []


def test_aware_dates_are_compared_in_utc():
    start = (NOW - timedelta(hours=25)).astimezone(timezone(timedelta(hours=-5))).isoformat()
    response = _response(EventRecord(type="meetup", date=start))
    assert trim_events(response, now=NOW).events == []


def test_cap_keeps_first_three_in_upstream_order():
    events = [EventRecord(type="wordcamp", date=_date(timedelta(days=i)), title=f"e{i}") for i in (5, 1, 4, 2, 3)]
    trimmed = trim_events(_response(*events), now=NOW)
    assert [event.title for event in trimmed.events] == ["e5", "e1", "e4"]


def test_trim_does_not_touch_the_input():
    response = _response(*[EventRecord(type="wordcamp", date=_date(timedelta(days=i))) for i in range(5)])
    trim_events(response, now=NOW)
    assert len(response.events) == 5


def test_localize_renders_in_the_requested_locale():
    response = _response(EventRecord(type="meetup", date="2017-05-10 19:00:00"))

    english = localize_events(response, locale="en_US").events[0]
    german = localize_events(response, locale="de_DE").events[0]

    assert english.formatted_date == "Wednesday, May 10, 2017"
    assert english.formatted_time.replace("\u202f", " ") == "7:00 PM"
    assert german.formatted_date.startswith("Mittwoch")
    assert german.formatted_time == "19:00"
    assert response.events[0].formatted_date is None


def test_localize_converts_aware_dates_to_display_timezone():
    response = _response(EventRecord(type="wordcamp", date="2026-02-18T18:00:00+00:00"))
    event = localize_events(response, locale="en_US", display_timezone="America/New_York").events[0]
    assert event.formatted_time.startswith("1:00")


def test_localize_accepts_dashed_and_unknown_locales():
    response = _response(EventRecord(type="meetup", date="2017-05-10 19:00:00"))
    assert localize_events(response, locale="de-DE").events[0].formatted_date.startswith("Mittwoch")
    assert localize_events(response, locale="xx_YY").events[0].formatted_date.startswith("Wednesday")


def test_localize_leaves_unreadable_dates_unformatted():
    response = _response(EventRecord(type="wordcamp", date=""))
    event = localize_events(response, locale="en_US").events[0]
    assert event.formatted_date is None
    assert event.formatted_time is None


def test_normalize_on_empty_events_is_a_no_op():
    response = _response()
    assert normalize_response(response, locale="en_US", now=NOW).events == []


def test_normalize_formats_only_the_kept_events():
    events = [EventRecord(type="meetup", date=_date(-timedelta(days=2)), title="stale")]
    events += [EventRecord(type="wordcamp", date=_date(timedelta(days=i)), title=f"e{i}") for i in range(1, 5)]
    result = normalize_response(_response(*events), locale="en_US", now=NOW)
    assert [event.title for event in result.events] == ["e1", "e2", "e3"]
    assert all(event.formatted_date for event in result.events)


def test_timezone_directory_name_falls_back_to_utc():
    response = _response(EventRecord(type="wordcamp", date="2026-02-18T18:00:00+00:00"))
    event = localize_events(response, locale="en_US", display_timezone="America").events[0]
    assert event.formatted_date == "Wednesday, February 18, 2026"
    assert event.formatted_time.replace("\u202f", " ") == "6:00 PM"
