"""
Habit API schemas.

Request schemas only check the *shape* of the payload (types, dates).
Field rules (lengths, frequency-dependent days, time format, ranges)
are enforced by :class:`~habit_tracker.rules.validator.HabitRuleValidator`
so that every violation is reported with the same reason codes.

Fields are snake_case in Python and camelCase on the wire.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from habit_tracker.core.exceptions import HabitValidationError, RuleViolation
from habit_tracker.models.habit import FrequencyType, HabitStatus, WeekDay


class CamelModel(BaseModel):
    """Base schema exposing camelCase aliases and accepting both forms."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------------------------------------------------------------------
# Domain value
# ---------------------------------------------------------------------------

class HabitRecord(BaseModel):
    """A persisted habit, independent of the storage backend."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    frequency_type: FrequencyType
    week_days: Optional[list[WeekDay]] = None
    month_days: Optional[list[int]] = None
    scheduled_time: Optional[str] = None
    estimated_minutes: Optional[int] = None
    start_date: datetime.date
    category_id: Optional[int] = None
    status: HabitStatus = HabitStatus.ACTIVE
    created_at: datetime.datetime
    updated_at: datetime.datetime


# Fields a client may write.
HABIT_INPUT_FIELDS = (
    "name",
    "description",
    "frequency_type",
    "week_days",
    "month_days",
    "scheduled_time",
    "estimated_minutes",
    "start_date",
    "category_id",
)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

def _calendar_day(value):
    """Reduce an ISO date-time (``2026-10-18T15:30:00Z``) to its calendar day.

    Anything that is not a parseable date-time is returned unchanged and
    left to the ``date`` type.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str) and "T" in value.upper():
        raw = value.strip()
        if raw[-1:] in ("z", "Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.datetime.fromisoformat(raw).date()
        except ValueError:
            return value
    return value


class HabitCreate(CamelModel):
    """Schema for creating a habit."""

    name: str = Field(..., description="Habit name (max 50 characters)")
    description: Optional[str] = Field(None, description="Optional description (max 200 characters)")
    frequency_type: str = Field(..., description="'diaria', 'semanal' or 'mensal'")
    week_days: Optional[list[str]] = Field(None, description="Week days, required for daily/weekly habits")
    month_days: Optional[list[int]] = Field(None, description="Days of month (1-31), required for monthly habits")
    scheduled_time: Optional[str] = Field(None, description="Time of day in HH:MM (24h)")
    estimated_minutes: Optional[int] = Field(None, description="Estimated duration in minutes (1-1440)")
    start_date: datetime.date = Field(..., description="First day of the habit (YYYY-MM-DD), not in the past")
    category_id: Optional[int] = Field(None, alias="idCategory", description="Category identifier")

    start_date_as_day = field_validator("start_date", mode="before")(_calendar_day)


class HabitUpdate(CamelModel):
    """Schema for updating a habit. Only the fields sent are changed."""

    name: Optional[str] = None
    description: Optional[str] = None
    frequency_type: Optional[str] = None
    week_days: Optional[list[str]] = None
    month_days: Optional[list[int]] = None
    scheduled_time: Optional[str] = None
    estimated_minutes: Optional[int] = None
    start_date: Optional[datetime.date] = None
    category_id: Optional[int] = Field(None, alias="idCategory")
    status: Optional[str] = Field(None, description="'ativo', 'inativo' or 'concluido'")

    start_date_as_day = field_validator("start_date", mode="before")(_calendar_day)


# ---------------------------------------------------------------------------
# List parameters
# ---------------------------------------------------------------------------

class StatusFilter(str, Enum):
    """Plural status vocabulary used by the list endpoint."""
    ALL = "todos"
    ACTIVE = "ativos"
    INACTIVE = "inativos"
    COMPLETED = "concluidos"


_STATUS_BY_FILTER = {
    StatusFilter.ACTIVE: HabitStatus.ACTIVE,
    StatusFilter.INACTIVE: HabitStatus.INACTIVE,
    StatusFilter.COMPLETED: HabitStatus.COMPLETED,
}


class HabitOrder(str, Enum):
    """Supported list orderings."""
    NAME_ASC = "nome_asc"
    NAME_DESC = "nome_desc"
    START_DATE_ASC = "data_inicio_asc"
    START_DATE_DESC = "data_inicio_desc"
    CREATED_ASC = "data_cadastro_asc"
    CREATED_DESC = "data_cadastro_desc"


_NO_CATEGORY_TOKENS = frozenset({"null", "none"})


class HabitListParams(BaseModel):
    """Filter and sort parameters for listing habits.

    ``has_category_filter`` distinguishes "no category filter" from an
    explicit filter on habits without a category (``category_id=None``).
    """

    filter_status: StatusFilter = StatusFilter.ALL
    category_id: Optional[int] = None
    has_category_filter: bool = False
    order_by: Optional[HabitOrder] = None

    @classmethod
    def from_query(
        cls,
        filter_status: StatusFilter,
        id_category: Optional[str] = None,
        order_by: Optional[HabitOrder] = None,
    ) -> "HabitListParams":
        """Build parameters from raw query values.

        ``id_category`` is a positive integer, or ``null`` to select
        habits without a category.
        """
        if id_category is None:
            return cls(filter_status=filter_status, order_by=order_by)

        raw = id_category.strip()
        if raw.lower() in _NO_CATEGORY_TOKENS:
            return cls(filter_status=filter_status, has_category_filter=True, order_by=order_by)

        if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
            raise HabitValidationError("category_id", RuleViolation.INVALID_CATEGORY,
                                       "Category filter must be a positive integer or 'null'")
        return cls(filter_status=filter_status, category_id=int(raw), has_category_filter=True,
                   order_by=order_by)

    def status_filter(self) -> Optional[HabitStatus]:
        """Map the plural filter to a status. ``None`` means every status."""
        return _STATUS_BY_FILTER.get(self.filter_status)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class HabitResponse(CamelModel):
    """Schema for a habit in API responses. Absent values are ``null``."""

    id: int
    owner_id: int
    name: str
    description: Optional[str]
    frequency_type: FrequencyType
    week_days: Optional[list[WeekDay]]
    month_days: Optional[list[int]]
    scheduled_time: Optional[str]
    estimated_minutes: Optional[int]
    start_date: datetime.date
    category_id: Optional[int] = Field(..., alias="idCategory")
    status: HabitStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime


class HabitListItem(CamelModel):
    """Compact habit projection returned by the list endpoint."""

    id: int
    name: str
    description: Optional[str]
    frequency_type: FrequencyType
    status: HabitStatus
    start_date: datetime.date
    category_id: Optional[int] = Field(..., alias="idCategory")


class FieldError(BaseModel):
    """One entry of a validation error response."""

    field: str
    reason: str
    message: str

