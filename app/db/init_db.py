"""Database initialization utilities."""
import logging

from sqlalchemy.engine import Engine

from app.db.base import Base, import_models
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    import_models()
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ensured ({len(Base.metadata.tables)} tables)")


def drop_db(engine: Engine = default_engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")
