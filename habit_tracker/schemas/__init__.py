"""Pydantic schemas for request/response validation."""

from habit_tracker.schemas.habit import (
    FieldError,
    HabitCreate,
    HabitListItem,
    HabitListParams,
    HabitOrder,
    HabitRecord,
    HabitResponse,
    HabitUpdate,
    StatusFilter,
)

__all__ = [
    "FieldError",
    "HabitCreate",
    "HabitListItem",
    "HabitListParams",
    "HabitOrder",
    "HabitRecord",
    "HabitResponse",
    "HabitUpdate",
    "StatusFilter",
]
