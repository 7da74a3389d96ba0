# leave_portal/db/init_db.py
"""Database initialization utilities."""
import logging

from sqlalchemy import inspect

from leave_portal.db.base import Base
from leave_portal.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create any missing tables.

    Suitable for development and tests; production databases are expected
    to be migrated ahead of deployment.
    """
    try:
        existing_tables = set(inspect(engine).get_table_names())
        Base.metadata.create_all(bind=engine)
        created = set(Base.metadata.tables) - existing_tables
        if created:
            logger.info(f"Database tables created: {', '.join(sorted(created))}")
        else:
            logger.info(f"Database already initialized with {len(existing_tables)} tables")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db() -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    try:
        Base.metadata.drop_all(bind=engine)
        logger.warning("All database tables dropped")
    except Exception as e:
        logger.error(f"Error dropping database: {e}")
        raise


def reset_db() -> None:
    """
    Reset the database by dropping and recreating all tables.
    """
    logger.warning("Resetting database...")
    drop_db()
    init_db()
    logger.info("Database reset complete")
