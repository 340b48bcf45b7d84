"""Habit rules: payload validation/normalization and list querying."""

from habit_tracker.rules.query import STATUS_ALL, UNSET, HabitQueryEngine
from habit_tracker.rules.validator import HabitRuleValidator

__all__ = ["HabitQueryEngine", "HabitRuleValidator", "STATUS_ALL", "UNSET"]
