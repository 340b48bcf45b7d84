"""
Habit repositories.

:class:`HabitRepository` is the storage contract used by the service
layer. Two implementations are provided:

* :class:`SqlHabitRepository`: SQLModel session on the ``habits`` table,
* :class:`InMemoryHabitRepository`: process-local store, used by the
  ``memory`` storage backend and by tests.

Both exchange :class:`~habit_tracker.schemas.habit.HabitRecord` values,
never table rows, so callers cannot mutate stored state by accident.
"""

import datetime
import threading
from typing import Any, Mapping, Optional, Protocol

from sqlmodel import Session, select

from habit_tracker.models.habit import Habit, HabitStatus
from habit_tracker.schemas.habit import HABIT_INPUT_FIELDS, HabitRecord


class HabitRepository(Protocol):
    """Persistence contract for habits."""

    def create(self, owner_id: int, fields: Mapping[str, Any]) -> HabitRecord:  # pragma: no cover - interface
        ...

    def get(self, habit_id: int) -> Optional[HabitRecord]:  # pragma: no cover - interface
        ...

    def list_by_owner(self, owner_id: int) -> list[HabitRecord]:  # pragma: no cover - interface
        ...

    def update(self, record: HabitRecord) -> HabitRecord:  # pragma: no cover - interface
        ...


class SqlHabitRepository:
    """Repository for Habit database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, owner_id: int, fields: Mapping[str, Any]) -> HabitRecord:
        """
        Insert a new habit.

        Args:
            owner_id: Owner of the habit
            fields: Validated habit fields

        Returns:
            Stored habit with generated id and timestamps
        """
        entry = Habit(owner_id=owner_id, status=HabitStatus.ACTIVE, **self._to_columns(fields))
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return self._to_record(entry)

    def get(self, habit_id: int) -> Optional[HabitRecord]:
        entry = self.session.get(Habit, habit_id)
        return self._to_record(entry) if entry else None

    def list_by_owner(self, owner_id: int) -> list[HabitRecord]:
        statement = select(Habit).where(Habit.owner_id == owner_id).order_by(Habit.id)
        return [self._to_record(e) for e in self.session.exec(statement).all()]

    def update(self, record: HabitRecord) -> HabitRecord:
        """
        Persist every writable field and the status of *record*.

        Raises:
            LookupError: If the row no longer exists
        """
        entry = self.session.get(Habit, record.id)
        if entry is None:
            raise LookupError(f"Habit {record.id} does not exist")

        for key, value in self._to_columns(record.model_dump(include=set(HABIT_INPUT_FIELDS))).items():
            setattr(entry, key, value)
        entry.status = record.status
        entry.updated_at = datetime.datetime.utcnow()

        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return self._to_record(entry)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_columns(fields: Mapping[str, Any]) -> dict:
        """Convert validated fields to column values (JSON arrays hold plain strings)."""
        columns = {key: fields[key] for key in HABIT_INPUT_FIELDS if key in fields}
        if columns.get("week_days") is not None:
            columns["week_days"] = [getattr(day, "value", day) for day in columns["week_days"]]
        if columns.get("month_days") is not None:
            columns["month_days"] = list(columns["month_days"])
        return columns

    @staticmethod
    def _to_record(entry: Habit) -> HabitRecord:
        return HabitRecord.model_validate(entry)


class InMemoryHabitRepository:
    """Process-local habit store.

    Records are kept in insertion order and copied on the way in and
    out. A lock serializes writers.
    """

    def __init__(self) -> None:
        self._records: dict[int, HabitRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, owner_id: int, fields: Mapping[str, Any]) -> HabitRecord:
        with self._lock:
            now = datetime.datetime.utcnow()
            values = {key: fields[key] for key in HABIT_INPUT_FIELDS if key in fields}
            record = HabitRecord(id=self._next_id, owner_id=owner_id, status=HabitStatus.ACTIVE,
                                 created_at=now, updated_at=now, **values)
            self._records[record.id] = record
            self._next_id += 1
            return record.model_copy(deep=True)

    def get(self, habit_id: int) -> Optional[HabitRecord]:
        with self._lock:
            record = self._records.get(habit_id)
            return record.model_copy(deep=True) if record else None

    def list_by_owner(self, owner_id: int) -> list[HabitRecord]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records.values() if r.owner_id == owner_id]

    def update(self, record: HabitRecord) -> HabitRecord:
        """
        Replace the stored copy of *record*.

        ``id``, ``owner_id`` and ``created_at`` keep their stored values.

        Raises:
            LookupError: If the record does not exist
        """
        with self._lock:
            stored = self._records.get(record.id)
            if stored is None:
                raise LookupError(f"Habit {record.id} does not exist")
            updated = record.model_copy(deep=True, update={
                "owner_id": stored.owner_id,
                "created_at": stored.created_at,
                "updated_at": datetime.datetime.utcnow(),
            })
            self._records[record.id] = updated
            return updated.model_copy(deep=True)
