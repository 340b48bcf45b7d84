"""
Alembic environment for the habit tracker.

The database URL always comes from the application settings, so
migrations and the running service target the same database. SQLite
needs batch mode for ALTER TABLE, enabled in both modes.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from habit_tracker.core.config import settings
# Register the habit tables on SQLModel.metadata
from habit_tracker.db.base import *  # noqa

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if settings.STORAGE_BACKEND == "memory":
    # The memory backend has no schema; migrations still target DATABASE_URL.
    config.print_stdout("STORAGE_BACKEND=memory: migrating %s anyway", settings.DATABASE_URL)

config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = SQLModel.metadata


def _configure(**kwargs) -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(target_metadata=target_metadata, compare_type=True,
                      render_as_batch=url.startswith("sqlite"), **kwargs)


def run_migrations_offline() -> None:
    """Emit the migration SQL for the configured URL without connecting."""
    _configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True,
               dialect_opts={"paramstyle": "named"})

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run the migrations on a live connection."""
    connectable = engine_from_config(config.get_section(config.config_ini_section, {}), prefix="sqlalchemy.",
                                     poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
