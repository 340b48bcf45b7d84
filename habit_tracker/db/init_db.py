"""
Database initialization.

Creates all tables for the configured database.
"""

import logging

from sqlmodel import SQLModel

from habit_tracker.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create every SQLModel table that does not exist yet."""

    # Import all models so SQLModel.metadata has them
    import habit_tracker.db.base  # noqa: F401

    logger.info("Creating database tables on %s", engine.url.render_as_string(hide_password=True))
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


if __name__ == "__main__":
    init_db()
