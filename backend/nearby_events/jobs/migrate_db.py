from __future__ import annotations

import argparse
import os

from sqlalchemy import create_engine

from nearby_events.infra.db.tables import metadata


def migrate(database_url: str) -> list[str]:
    engine = create_engine(database_url, future=True)
    metadata.create_all(engine)
    return sorted(metadata.tables)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the nearby events cache tables")
    parser.add_argument("--database-url", dest="database_url", default=None)
    args = parser.parse_args()
    database_url = args.database_url or os.getenv("DATABASE_URL")
    if not database_url:
        raise SystemExit("DATABASE_URL must be provided via --database-url or env")
    tables = migrate(database_url)
    print(f"[migrate_db] tables ready: {', '.join(tables)}")


if __name__ == "__main__":
    main()
