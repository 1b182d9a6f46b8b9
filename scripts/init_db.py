#!/usr/bin/env python3
"""
Initialize the MealBills database.
Creates tables and makes sure the default consumers exist.

Usage:
    python scripts/init_db.py                  # tables + settings.seed_consumers
    python scripts/init_db.py --no-seed        # tables only
    python scripts/init_db.py --consumer Alice --consumer Bob
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect  # noqa: E402

from app.config import settings  # noqa: E402
from domain.models import build_engine, build_session_factory, init_database  # noqa: E402
from repositories import ConsumerRepository  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("mealbills.init_db")


def seed_consumers(session_factory, names):
    """Create each named consumer unless it already exists. Returns names created."""
    created = []
    with session_factory() as db:
        repo = ConsumerRepository(db)
        for name in names:
            if repo.get_by_name(name):
                logger.info(f"Found consumer: {name}")
                continue
            consumer = repo.create_consumer(name=name)
            created.append(name)
            logger.info(f"Created consumer: {name} (ID: {consumer.id})")
    return created


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the MealBills database")
    parser.add_argument(
        "--database-url", default=settings.database_url, help="SQLAlchemy URL"
    )
    parser.add_argument(
        "--consumer",
        action="append",
        dest="consumers",
        help="Consumer to create (repeatable); defaults to settings.seed_consumers",
    )
    parser.add_argument("--no-seed", action="store_true", help="Only create tables")
    args = parser.parse_args(argv)

    engine = build_engine(args.database_url, echo=settings.db_echo)
    try:
        init_database(engine)
        tables = inspect(engine).get_table_names()
        logger.info(f"Tables ready: {', '.join(tables)}")

        if not args.no_seed:
            names = args.consumers or settings.seed_consumers
            created = seed_consumers(build_session_factory(engine), names)
            logger.info(f"Seeding done: {len(created)} created, {len(names) - len(created)} existing")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
