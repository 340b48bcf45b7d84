"""
Habit rule validation and normalization.

A habit payload is checked against an **ordered** list of field rules.
Each rule receives the raw value of its field and the values normalized
so far, and either returns the normalized value or raises
:class:`~habit_tracker.core.exceptions.HabitValidationError`.
The first failing rule wins; nothing is accumulated.

Frequency couples the two recurrence fields:

* ``diaria`` / ``semanal`` → ``week_days`` is required, ``month_days`` is cleared,
* ``mensal`` → ``month_days`` is required, ``week_days`` is cleared.

Normalization rules:

* free text is trimmed, a blank description becomes ``None``,
* absent optional fields are ``None`` (never missing),
* ``scheduled_time`` is zero padded (``7:05`` → ``07:05``),
* week days are deduplicated in calendar order, month days ascending.

Validating an already normalized payload returns it unchanged.
"""

from __future__ import annotations

import datetime
import re
from functools import partial
from typing import Any, Callable, Mapping, Optional

from habit_tracker.core.exceptions import HabitValidationError, RuleViolation
from habit_tracker.models.habit import WEEK_DAY_FREQUENCIES, FrequencyType, HabitStatus, WeekDay
from habit_tracker.schemas.habit import HabitRecord

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200
MIN_ESTIMATED_MINUTES = 1
MAX_ESTIMATED_MINUTES = 1440
MIN_MONTH_DAY = 1
MAX_MONTH_DAY = 31

_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")
_WEEK_DAY_ORDER = {day: index for index, day in enumerate(WeekDay)}

# Marks a field that is not in the payload at all (as opposed to ``None``).
_MISSING = object()

Rule = Callable[[Any, dict], Any]


# ======================================================================
# Field rules
# ======================================================================

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _name(value: Any, context: dict) -> str:
    if not isinstance(value, str) or not 1 <= len(value.strip()) <= NAME_MAX_LENGTH:
        raise HabitValidationError("name", RuleViolation.INVALID_NAME,
                                   f"Name is required and must have at most {NAME_MAX_LENGTH} characters")
    return value.strip()


def _description(value: Any, context: dict) -> Optional[str]:
    if value is _MISSING or value is None:
        return None
    if not isinstance(value, str) or len(value.strip()) > DESCRIPTION_MAX_LENGTH:
        raise HabitValidationError("description", RuleViolation.INVALID_DESCRIPTION,
                                   f"Description must have at most {DESCRIPTION_MAX_LENGTH} characters")
    return value.strip() or None


def _frequency_type(value: Any, context: dict) -> FrequencyType:
    try:
        return FrequencyType(value)
    except (ValueError, TypeError):
        raise HabitValidationError("frequency_type", RuleViolation.INVALID_FREQUENCY,
                                   "Frequency must be one of: "
                                   + ", ".join(f.value for f in FrequencyType)) from None


def _week_day_list(value: Any) -> list[WeekDay]:
    """Parse a non-empty collection of week days."""
    error = HabitValidationError("week_days", RuleViolation.MISSING_WEEK_DAYS,
                                 "Select at least one valid day of the week")
    if not isinstance(value, (list, tuple, set, frozenset)) or not value:
        raise error
    days = set()
    for item in value:
        try:
            days.add(WeekDay(item))
        except (ValueError, TypeError):
            raise error from None
    return sorted(days, key=_WEEK_DAY_ORDER.__getitem__)


def _month_day_list(value: Any) -> list[int]:
    """Parse a non-empty collection of days of the month."""
    error = HabitValidationError("month_days", RuleViolation.MISSING_MONTH_DAYS,
                                 f"Select at least one day of the month ({MIN_MONTH_DAY}-{MAX_MONTH_DAY})")
    if not isinstance(value, (list, tuple, set, frozenset)) or not value:
        raise error
    if not all(_is_int(day) and MIN_MONTH_DAY <= day <= MAX_MONTH_DAY for day in value):
        raise error
    return sorted(set(value))


def _required_week_days(value: Any, context: dict) -> Optional[list[WeekDay]]:
    if context["frequency_type"] in WEEK_DAY_FREQUENCIES:
        return _week_day_list(value)
    return None


def _required_month_days(value: Any, context: dict) -> Optional[list[int]]:
    if context["frequency_type"] == FrequencyType.MONTHLY:
        return _month_day_list(value)
    return None


def _scheduled_time(value: Any, context: dict) -> Optional[str]:
    if value is _MISSING or value is None or (isinstance(value, str) and not value.strip()):
        return None
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise HabitValidationError("scheduled_time", RuleViolation.INVALID_TIME,
                                   "Time must be in HH:MM format (00:00-23:59)")
    hours, minutes = match.groups()
    return f"{int(hours):02d}:{minutes}"


def _estimated_minutes(value: Any, context: dict) -> Optional[int]:
    if value is _MISSING or value is None:
        return None
    if not _is_int(value) or not MIN_ESTIMATED_MINUTES <= value <= MAX_ESTIMATED_MINUTES:
        raise HabitValidationError("estimated_minutes", RuleViolation.INVALID_DURATION,
                                   f"Estimated time must be between {MIN_ESTIMATED_MINUTES} "
                                   f"and {MAX_ESTIMATED_MINUTES} minutes")
    return value


def _parse_date(value: Any) -> Optional[datetime.date]:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value)
        except ValueError:
            pass
        try:
            return datetime.datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None


def _start_date(value: Any, context: dict, not_before: Optional[datetime.date] = None) -> datetime.date:
    start = _parse_date(value)
    if start is None:
        raise HabitValidationError("start_date", RuleViolation.INVALID_START_DATE,
                                   "Start date must be a valid date (YYYY-MM-DD)")
    if not_before is not None and start < not_before:
        raise HabitValidationError("start_date", RuleViolation.START_DATE_IN_PAST,
                                   "Start date cannot be in the past")
    return start


def _category_id(value: Any, context: dict) -> Optional[int]:
    if value is _MISSING or value is None:
        return None
    if not _is_int(value) or value < 1:
        raise HabitValidationError("category_id", RuleViolation.INVALID_CATEGORY,
                                   "Category must be a positive integer")
    return value


def _status(value: Any, context: dict) -> HabitStatus:
    try:
        return HabitStatus(value)
    except (ValueError, TypeError):
        raise HabitValidationError("status", RuleViolation.INVALID_STATUS,
                                   "Status must be one of: "
                                   + ", ".join(s.value for s in HabitStatus)) from None


_OPTIONAL_DAYS: dict[str, Callable[[Any], Any]] = {
    "week_days": _week_day_list,
    "month_days": _month_day_list,
}


# ======================================================================
# Validator
# ======================================================================

class HabitRuleValidator:
    """Validates and normalizes habit create/update payloads.

    Payloads are plain mappings keyed by snake_case field names, already
    deserialized by the API layer. The validator is stateless and pure.
    """

    @staticmethod
    def _rules(not_before: Optional[datetime.date]) -> list[tuple[str, Rule]]:
        return [
            ("name", _name),
            ("description", _description),
            ("frequency_type", _frequency_type),
            ("week_days", _required_week_days),
            ("month_days", _required_month_days),
            ("scheduled_time", _scheduled_time),
            ("estimated_minutes", _estimated_minutes),
            ("start_date", partial(_start_date, not_before=not_before)),
            ("category_id", _category_id),
        ]

    def validate_for_create(self, payload: Mapping[str, Any],
                            today: Optional[datetime.date] = None) -> dict[str, Any]:
        """Validate a creation payload.

        Args:
            payload: Raw habit fields
            today: Reference day for the start-date check (defaults to the server's local date)

        Returns:
            Every writable habit field, normalized

        Raises:
            HabitValidationError: On the first violated rule
        """
        not_before = today or datetime.date.today()
        normalized: dict[str, Any] = {}
        for field, rule in self._rules(not_before):
            normalized[field] = rule(payload.get(field, _MISSING), normalized)
        return normalized

    def validate_for_update(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a partial update payload.

        Only fields present in *payload* are checked and returned. When the
        frequency changes, the matching days field must be sent along and
        the other one is cleared. The start date may lie in the past.

        Raises:
            HabitValidationError: On the first violated rule
        """
        frequency_given = "frequency_type" in payload
        patch: dict[str, Any] = {}

        for field, rule in self._rules(None) + [("status", _status)]:
            if field in _OPTIONAL_DAYS:
                if frequency_given:
                    patch[field] = rule(payload.get(field, _MISSING), patch)
                elif field in payload:
                    value = payload[field]
                    patch[field] = None if value is None else _OPTIONAL_DAYS[field](value)
                continue
            if field in payload:
                patch[field] = rule(payload[field], patch)

        return patch

    @staticmethod
    def reconcile_schedule(record: HabitRecord) -> HabitRecord:
        """Check the frequency/days invariant on a merged record.

        Returns the record with the days field that does not apply to its
        frequency cleared.

        Raises:
            HabitValidationError: If the days required by the frequency are missing
        """
        if record.frequency_type in WEEK_DAY_FREQUENCIES:
            if not record.week_days:
                raise HabitValidationError("week_days", RuleViolation.MISSING_WEEK_DAYS,
                                           "Select at least one valid day of the week")
            cleared = {"month_days": None}
        else:
            if not record.month_days:
                raise HabitValidationError("month_days", RuleViolation.MISSING_MONTH_DAYS,
                                           f"Select at least one day of the month ({MIN_MONTH_DAY}-{MAX_MONTH_DAY})")
            cleared = {"week_days": None}
        return record.model_copy(update=cleared)

    @staticmethod
    def apply_update(existing: HabitRecord, patch: Mapping[str, Any]) -> HabitRecord:
        """Return a copy of *existing* with every field of *patch* overwritten."""
        return existing.model_copy(update=dict(patch), deep=True)
