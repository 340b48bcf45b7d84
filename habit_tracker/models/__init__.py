"""SQLModel database models."""

from habit_tracker.models.habit import FrequencyType, Habit, HabitStatus, WeekDay

__all__ = [
    "Habit",
    "FrequencyType",
    "HabitStatus",
    "WeekDay",
]
