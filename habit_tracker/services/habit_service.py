"""
Habit service.

Runs the habit rules on incoming payloads, enforces ownership and
delegates storage to an injected :class:`HabitRepository`. Listing
loads the owner's habits and hands them to the query engine.
"""

import logging
from typing import Optional

from habit_tracker.core.config import settings
from habit_tracker.core.exceptions import HabitNotFoundError
from habit_tracker.db.repositories.habit import HabitRepository
from habit_tracker.models.habit import HabitStatus
from habit_tracker.rules.query import UNSET, HabitQueryEngine
from habit_tracker.rules.validator import HabitRuleValidator
from habit_tracker.schemas.habit import (HabitCreate, HabitListItem, HabitListParams, HabitOrder, HabitRecord,
                                         HabitResponse, HabitUpdate, )

logger = logging.getLogger(__name__)


class HabitService:
    """Service for habit business logic."""

    def __init__(self, repository: HabitRepository, validator: Optional[HabitRuleValidator] = None):
        """
        Initialize service with a habit store.

        Args:
            repository: Storage backend for habits
            validator: Rule validator (a default one is created if omitted)
        """
        self.repository = repository
        self.validator = validator or HabitRuleValidator()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, owner_id: int, data: HabitCreate) -> HabitResponse:
        """
        Create a habit for *owner_id*.

        Raises:
            HabitValidationError: If the payload breaks a habit rule
        """
        fields = self.validator.validate_for_create(data.model_dump(exclude_unset=True))
        record = self.repository.create(owner_id, fields)
        logger.info("Habit %s created for owner %s", record.id, owner_id)
        return self._to_response(record)

    def get(self, owner_id: int, habit_id: int) -> HabitResponse:
        return self._to_response(self._get_owned_record(owner_id, habit_id))

    def list(self, owner_id: int, params: HabitListParams) -> list[HabitListItem]:
        records = self.repository.list_by_owner(owner_id)
        category = params.category_id if params.has_category_filter else UNSET
        order_by = params.order_by or HabitOrder(settings.DEFAULT_ORDER_BY)
        ordered = HabitQueryEngine.list(records, owner_id, filter_status=params.status_filter(),
                                        category_filter=category, order_by=order_by)
        return [HabitListItem(**r.model_dump()) for r in ordered]

    def update(self, owner_id: int, habit_id: int, data: HabitUpdate) -> HabitResponse:
        """
        Apply the fields sent in *data* to an owned habit.

        Raises:
            HabitNotFoundError: If the habit is missing or owned by someone else
            HabitValidationError: If the payload or the resulting habit breaks a rule
        """
        existing = self._get_owned_record(owner_id, habit_id)
        patch = self.validator.validate_for_update(data.model_dump(exclude_unset=True))
        merged = self.validator.reconcile_schedule(self.validator.apply_update(existing, patch))
        record = self.repository.update(merged)
        logger.info("Habit %s updated by owner %s (fields: %s)", habit_id, owner_id, ", ".join(sorted(patch)))
        return self._to_response(record)

    def delete(self, owner_id: int, habit_id: int) -> None:
        """Soft delete: the habit is marked inactive and stays listable."""
        existing = self._get_owned_record(owner_id, habit_id)
        self.repository.update(existing.model_copy(update={"status": HabitStatus.INACTIVE}))
        logger.info("Habit %s deactivated by owner %s", habit_id, owner_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned_record(self, owner_id: int, habit_id: int) -> HabitRecord:
        record = self.repository.get(habit_id)
        if not record or record.owner_id != owner_id:
            raise HabitNotFoundError(habit_id)
        return record

    @staticmethod
    def _to_response(record: HabitRecord) -> HabitResponse:
        return HabitResponse(**record.model_dump())
