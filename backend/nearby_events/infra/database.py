from __future__ import annotations

import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from nearby_events.infra.db.tables import metadata


def engine_from_env(database_url: Optional[str] = None) -> Optional[Engine]:
    """Engine for ``database_url`` (or ``DATABASE_URL``), None when neither is set."""
    database_url = database_url or os.getenv("DATABASE_URL")
    if not database_url:
        return None
    engine = create_engine(database_url, future=True)
    metadata.create_all(engine)
    return engine
