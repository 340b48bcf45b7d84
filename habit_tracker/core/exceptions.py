"""
Application error taxonomy.

Domain errors are raised by the rules and service layers and turned
into HTTP responses by the handlers registered in :mod:`habit_tracker.main`.
"""

from enum import Enum


class RuleViolation(str, Enum):
    """Reason codes reported by the habit rule validator."""
    INVALID_NAME = "InvalidName"
    INVALID_DESCRIPTION = "InvalidDescription"
    INVALID_FREQUENCY = "InvalidFrequency"
    MISSING_WEEK_DAYS = "MissingWeekDays"
    MISSING_MONTH_DAYS = "MissingMonthDays"
    INVALID_TIME = "InvalidTime"
    INVALID_DURATION = "InvalidDuration"
    INVALID_START_DATE = "InvalidStartDate"
    START_DATE_IN_PAST = "StartDateInPast"
    INVALID_CATEGORY = "InvalidCategory"
    INVALID_STATUS = "InvalidStatus"


class HabitTrackerError(Exception):
    """Base class for errors raised by this application."""


class HabitValidationError(HabitTrackerError):
    """A habit payload broke a field rule.

    Attributes:
        field: Name of the offending field (snake_case)
        reason: Violated rule
        message: Human-readable explanation
    """

    def __init__(self, field: str, reason: RuleViolation, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = reason
        self.message = message


class HabitNotFoundError(HabitTrackerError):
    """The habit does not exist or belongs to another owner."""

    def __init__(self, habit_id: int):
        super().__init__("Habit not found or you do not have permission to access it")
        self.habit_id = habit_id
