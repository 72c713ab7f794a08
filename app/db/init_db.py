# app/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.engine import Engine

from app.core.logging import get_logger
from app.db.base import Base
from app.db.session import engine as default_engine

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Suitable for development and tests; production schemas are migrated.
    """
    bind = bind or default_engine
    try:
        Base.metadata.create_all(bind=bind)
        logger.info(
            "Database tables ensured",
            extra={"table_count": len(Base.metadata.tables)},
        )
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(bind: Optional[Engine] = None) -> None:
    """Drop all tables. Development and tests only."""
    bind = bind or default_engine
    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")
