from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .tables import events_cache_table

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes; everything is written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CacheEntriesRepository:
    """``CacheStore`` backed by the ``events_cache`` table.

    Expired rows read as misses and are overwritten by the next write. Backend
    errors are logged and never reach the caller.
    """

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get(self, key: str) -> Optional[dict]:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(
                    select(events_cache_table.c.value, events_cache_table.c.expires_at).where(
                        events_cache_table.c.key == key
                    )
                ).mappings().first()
        except SQLAlchemyError as exc:
            logger.warning("events cache read failed for %s: %s", key, exc)
            return None
        if row is None:
            return None
        if _as_utc(row["expires_at"]) <= datetime.now(timezone.utc):
            return None
        return row["value"]

    def set(self, key: str, value: dict, ttl_seconds: int) -> bool:
        now = datetime.now(timezone.utc)
        payload = {
            "value": value,
            "expires_at": now + timedelta(seconds=ttl_seconds),
            "updated_at": now,
        }
        try:
            with self.engine.begin() as conn:
                existing = conn.execute(
                    select(events_cache_table.c.key).where(events_cache_table.c.key == key)
                ).scalar_one_or_none()
                if existing is not None:
                    conn.execute(
                        update(events_cache_table).where(events_cache_table.c.key == key).values(**payload)
                    )
                else:
                    conn.execute(insert(events_cache_table).values(key=key, **payload))
        except SQLAlchemyError as exc:
            logger.warning("events cache write failed for %s: %s", key, exc)
            return False
        return True
