"""Business logic services."""

from habit_tracker.services.habit_service import HabitService

__all__ = [
    "HabitService",
]
