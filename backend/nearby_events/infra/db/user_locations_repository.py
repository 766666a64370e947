from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from nearby_events.domain.models import Location

from .tables import user_locations_table


class UserLocationsRepository:
    """``LocationStore`` backed by the ``user_locations`` table."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get(self, user_id: str) -> Optional[Location]:
        with self.engine.begin() as conn:
            payload = conn.execute(
                select(user_locations_table.c.location).where(user_locations_table.c.user_id == user_id)
            ).scalar_one_or_none()
        return Location.from_dict(payload)

    def set(self, user_id: str, location: Location) -> None:
        now = datetime.now(timezone.utc)
        with self.engine.begin() as conn:
            existing = conn.execute(
                select(user_locations_table.c.user_id).where(user_locations_table.c.user_id == user_id)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(user_locations_table)
                    .where(user_locations_table.c.user_id == user_id)
                    .values(location=location.to_dict(), updated_at=now)
                )
            else:
                conn.execute(
                    insert(user_locations_table).values(
                        user_id=user_id, location=location.to_dict(), updated_at=now
                    )
                )
