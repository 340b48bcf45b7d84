"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from habit_tracker.models.habit import Habit  # noqa: F401
