"""
Habit list filtering and ordering.

Works on a snapshot of records (any objects exposing the
:class:`~habit_tracker.schemas.habit.HabitRecord` attributes) and
returns a new list. The input is never mutated and the output order is
fully determined by the input order and the parameters: Python's sort is
stable, also when ``reverse=True``.
"""

from __future__ import annotations

import unicodedata
from typing import Any, Callable, Iterable, Optional, Union

from habit_tracker.models.habit import HabitStatus
from habit_tracker.schemas.habit import HabitOrder

# Status filter value that keeps every record.
STATUS_ALL = "all"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Category filter default: no category filtering. ``None`` filters on
# habits without a category.
UNSET: Any = _Unset()

DEFAULT_ORDER = HabitOrder.CREATED_DESC


def collation_key(text: str) -> str:
    """Accent- and case-insensitive sort key ("Água" sorts with "agua")."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


# order -> (sort key, descending)
_ORDERINGS: dict[HabitOrder, tuple[Callable[[Any], Any], bool]] = {
    HabitOrder.NAME_ASC: (lambda r: collation_key(r.name), False),
    HabitOrder.NAME_DESC: (lambda r: collation_key(r.name), True),
    HabitOrder.START_DATE_ASC: (lambda r: r.start_date, False),
    HabitOrder.START_DATE_DESC: (lambda r: r.start_date, True),
    HabitOrder.CREATED_ASC: (lambda r: r.created_at, False),
    HabitOrder.CREATED_DESC: (lambda r: r.created_at, True),
}


class HabitQueryEngine:
    """Produces the visible, ordered habits of one owner."""

    @staticmethod
    def list(
        records: Iterable[Any],
        owner_id: int,
        filter_status: Union[HabitStatus, str, None] = None,
        category_filter: Optional[int] = UNSET,
        order_by: Union[HabitOrder, str, None] = None,
    ) -> list:
        """Filter and sort *records*.

        Args:
            records: Habit records, in storage order
            owner_id: Only this owner's habits are returned
            filter_status: A status, or ``None`` / ``"all"`` for every status
            category_filter: A category id, ``None`` for uncategorized
                habits, or ``UNSET`` (default) for no filtering
            order_by: Ordering, defaults to newest first

        Returns:
            A new, ordered list
        """
        selected = [r for r in records if r.owner_id == owner_id]

        if filter_status is not None and filter_status != STATUS_ALL:
            wanted = HabitStatus(filter_status)
            selected = [r for r in selected if HabitStatus(r.status) == wanted]

        if category_filter is not UNSET:
            selected = [r for r in selected if r.category_id == category_filter]

        key, descending = _ORDERINGS[HabitOrder(order_by or DEFAULT_ORDER)]
        return sorted(selected, key=key, reverse=descending)
