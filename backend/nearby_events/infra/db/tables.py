from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, MetaData, Table, Text

metadata = MetaData()

events_cache_table = Table(
    "events_cache",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", JSON, nullable=False),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True)),
)

user_locations_table = Table(
    "user_locations",
    metadata,
    Column("user_id", Text, primary_key=True),
    Column("location", JSON, nullable=False),
    Column("updated_at", DateTime(timezone=True)),
)
