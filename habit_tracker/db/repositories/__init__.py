"""Database repositories."""

from habit_tracker.db.repositories.habit import HabitRepository, InMemoryHabitRepository, SqlHabitRepository

__all__ = [
    "HabitRepository",
    "InMemoryHabitRepository",
    "SqlHabitRepository",
]
