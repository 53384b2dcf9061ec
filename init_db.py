"""
Create the chat tables and verify the chat store is usable.
"""
import sys
from pathlib import Path
import logging

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import inspect

from app.database import init_db, engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("chat_sessions", "response_ratings")


def missing_tables(bind=engine):
    """Names of the chat tables that do not exist on the given engine."""
    existing = set(inspect(bind).get_table_names())
    return [name for name in REQUIRED_TABLES if name not in existing]


def main():
    """Create the chat tables, exiting non-zero if any are still missing."""
    logger.info(f"Initializing chat store at {engine.url}")
    init_db()

    missing = missing_tables()
    if missing:
        logger.error(f"Chat store is missing tables: {', '.join(missing)}")
        sys.exit(1)

    logger.info(f"Chat store ready with tables: {', '.join(REQUIRED_TABLES)}")


if __name__ == "__main__":
    main()
