from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, select

from nearby_events.domain.models import EventRecord, EventsResponse, Location
from nearby_events.infra.cache.events_cache import EventCache
from nearby_events.infra.db import cache_entries_repository as cache_repo_module
from nearby_events.infra.db.cache_entries_repository import CacheEntriesRepository
from nearby_events.infra.db.tables import events_cache_table, metadata
from nearby_events.infra.db.user_locations_repository import UserLocationsRepository


@pytest.fixture()
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'nearby_events.db'}", future=True)
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)


def _response(title: str = "WordPress NYC") -> EventsResponse:
    return EventsResponse(
        location=Location(latitude=40.7, longitude=-74.0, description="New York"),
        events=[EventRecord(type="meetup", date="2026-03-01 18:30:00", title=title, extra={"meetup": "WP NYC"})],
        ttl=3600,
    )


def test_cache_round_trip(engine):
    cache = EventCache(CacheEntriesRepository(engine))
    assert cache.set(_response())
    cached = cache.get(Location(latitude=40.7, longitude=-74.0))
    assert cached.events[0].title == "WordPress NYC"
    assert cached.events[0].extra == {"meetup": "WP NYC"}
    assert cached.ttl == 3600


def test_cache_overwrite_keeps_one_row(engine):
    cache = EventCache(CacheEntriesRepository(engine))
    cache.set(_response("first"))
    cache.set(_response("second"))
    with engine.begin() as conn:
        rows = conn.execute(select(events_cache_table.c.key)).all()
    assert len(rows) == 1
    assert cache.get(Location(latitude=40.7, longitude=-74.0)).events[0].title == "second"


def test_expired_row_reads_as_miss(engine, monkeypatch):
    repo = CacheEntriesRepository(engine)
    EventCache(repo).set(_response())

    class _Tomorrow:
        @staticmethod
        def now(tz=None):
            return datetime(2100, 1, 1, tzinfo=timezone.utc)

    monkeypatch.setattr(cache_repo_module, "datetime", _Tomorrow)
    assert EventCache(repo).get(Location(latitude=40.7, longitude=-74.0)) is None


def test_backend_failure_is_not_raised(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}", future=True)
    repo = CacheEntriesRepository(engine)
    assert repo.set("nearby-events-x", {"location": {}, "events": []}, 60) is False
    assert repo.get("nearby-events-x") is None


def test_requires_engine():
    with pytest.raises(ValueError):
        CacheEntriesRepository(None)


def test_user_locations_round_trip(engine):
    repo = UserLocationsRepository(engine)
    assert repo.get("42") is None
    repo.set("42", Location(latitude=40.7, longitude=-74.0, description="New York"))
    repo.set("42", Location(latitude=48.86, longitude=2.35, description="Paris"))
    stored = repo.get("42")
    assert stored.description == "Paris"
    assert stored.has_coordinates
    assert repo.get("7") is None
