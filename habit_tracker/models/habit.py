"""
Habit database model.

Defines the habits table and the enumerations shared by the rule
validator, the query engine and the API schemas.

Enum values are the product's wire vocabulary.
"""

import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


# ======================================================================
# Enums
# ======================================================================

class FrequencyType(str, Enum):
    """How often a habit recurs."""
    DAILY = "diaria"
    WEEKLY = "semanal"
    MONTHLY = "mensal"


class WeekDay(str, Enum):
    """Day of the week, Monday first."""
    MONDAY = "segunda"
    TUESDAY = "terca"
    WEDNESDAY = "quarta"
    THURSDAY = "quinta"
    FRIDAY = "sexta"
    SATURDAY = "sabado"
    SUNDAY = "domingo"


class HabitStatus(str, Enum):
    """Lifecycle status. Soft delete sets ``INACTIVE``."""
    ACTIVE = "ativo"
    INACTIVE = "inativo"
    COMPLETED = "concluido"


# Frequencies whose recurrence is expressed with week days.
WEEK_DAY_FREQUENCIES = frozenset({FrequencyType.DAILY, FrequencyType.WEEKLY})


# ======================================================================
# Table
# ======================================================================

class Habit(SQLModel, table=True):
    """A recurring activity tracked by one owner.

    ``week_days`` and ``month_days`` are stored as JSON arrays; only the
    one matching ``frequency_type`` is populated.
    """

    __tablename__ = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(nullable=False, index=True)

    name: str = Field(nullable=False, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)

    # Recurrence
    frequency_type: FrequencyType = Field(nullable=False)
    week_days: Optional[list] = Field(default=None, sa_column=Column(JSON, nullable=True))
    month_days: Optional[list] = Field(default=None, sa_column=Column(JSON, nullable=True))

    # Schedule
    scheduled_time: Optional[str] = Field(default=None, max_length=5)
    estimated_minutes: Optional[int] = Field(default=None)
    start_date: datetime.date = Field(nullable=False, index=True)

    category_id: Optional[int] = Field(default=None, index=True)
    status: HabitStatus = Field(default=HabitStatus.ACTIVE, nullable=False, index=True)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
