"""Tests for habit list filtering and ordering."""

import datetime

import pytest

from habit_tracker.models.habit import FrequencyType, HabitStatus, WeekDay
from habit_tracker.rules.query import STATUS_ALL, UNSET, HabitQueryEngine, collation_key
from habit_tracker.schemas.habit import HabitOrder, HabitRecord

BASE_TIME = datetime.datetime(2026, 3, 1, 9, 0)


def _habit(habit_id: int, name: str, owner_id: int = 1, **overrides) -> HabitRecord:
    values = dict(
        id=habit_id,
        owner_id=owner_id,
        name=name,
        frequency_type=FrequencyType.DAILY,
        week_days=[WeekDay.MONDAY],
        start_date=datetime.date(2026, 3, 1) + datetime.timedelta(days=habit_id),
        status=HabitStatus.ACTIVE,
        created_at=BASE_TIME + datetime.timedelta(minutes=habit_id),
        updated_at=BASE_TIME + datetime.timedelta(minutes=habit_id),
    )
    values.update(overrides)
    return HabitRecord(**values)


def _names(records) -> list[str]:
    return [r.name for r in records]


@pytest.fixture
def fruit():
    return [_habit(1, "Banana"), _habit(2, "Apple"), _habit(3, "Cherry")]


class TestOwnerScope:
    def test_other_owners_excluded(self):
        records = [_habit(1, "Mine"), _habit(2, "Theirs", owner_id=2)]
        assert _names(HabitQueryEngine.list(records, owner_id=1)) == ["Mine"]

    def test_unknown_owner_gets_empty_list(self, fruit):
        assert HabitQueryEngine.list(fruit, owner_id=99) == []


class TestStatusFilter:
    @pytest.fixture
    def mixed(self):
        return [
            _habit(1, "Active"),
            _habit(2, "Inactive", status=HabitStatus.INACTIVE),
            _habit(3, "Completed", status=HabitStatus.COMPLETED),
        ]

    @pytest.mark.parametrize(
        "status, expected",
        [
            (HabitStatus.ACTIVE, ["Active"]),
            (HabitStatus.INACTIVE, ["Inactive"]),
            (HabitStatus.COMPLETED, ["Completed"]),
            ("inativo", ["Inactive"]),
        ],
    )
    def test_filter_by_status(self, mixed, status, expected):
        assert _names(HabitQueryEngine.list(mixed, 1, filter_status=status)) == expected

    def test_absent_filter_equals_all(self, mixed):
        absent = HabitQueryEngine.list(mixed, 1)
        everything = HabitQueryEngine.list(mixed, 1, filter_status=STATUS_ALL)
        assert absent == everything
        assert len(absent) == 3

    def test_soft_deleted_habit_still_listable(self, mixed):
        inactive = HabitQueryEngine.list(mixed, 1, filter_status=HabitStatus.INACTIVE)
        assert inactive[0].status == HabitStatus.INACTIVE


class TestCategoryFilter:
    @pytest.fixture
    def categorized(self):
        return [
            _habit(1, "Gym", category_id=5),
            _habit(2, "Read", category_id=None),
            _habit(3, "Run", category_id=5),
            _habit(4, "Cook", category_id=8),
        ]

    def test_unset_means_no_filter(self, categorized):
        assert len(HabitQueryEngine.list(categorized, 1, category_filter=UNSET)) == 4

    def test_exact_category(self, categorized):
        result = HabitQueryEngine.list(categorized, 1, category_filter=5, order_by=HabitOrder.NAME_ASC)
        assert _names(result) == ["Gym", "Run"]

    def test_explicit_no_category(self, categorized):
        assert _names(HabitQueryEngine.list(categorized, 1, category_filter=None)) == ["Read"]

    def test_combined_with_status(self, categorized):
        categorized[0] = categorized[0].model_copy(update={"status": HabitStatus.INACTIVE})
        result = HabitQueryEngine.list(categorized, 1, filter_status=HabitStatus.ACTIVE, category_filter=5)
        assert _names(result) == ["Run"]


class TestOrdering:
    def test_name_ascending(self, fruit):
        result = HabitQueryEngine.list(fruit, 1, order_by="nome_asc")
        assert _names(result) == ["Apple", "Banana", "Cherry"]

    def test_name_descending(self, fruit):
        result = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.NAME_DESC)
        assert _names(result) == ["Cherry", "Banana", "Apple"]

    def test_name_is_accent_and_case_insensitive(self):
        records = [_habit(1, "beber água"), _habit(2, "Água"), _habit(3, "andar")]
        result = HabitQueryEngine.list(records, 1, order_by=HabitOrder.NAME_ASC)
        assert _names(result) == ["Água", "andar", "beber água"]

    def test_start_date(self, fruit):
        asc = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.START_DATE_ASC)
        desc = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.START_DATE_DESC)
        assert _names(asc) == ["Banana", "Apple", "Cherry"]
        assert _names(desc) == ["Cherry", "Apple", "Banana"]

    def test_created_at(self, fruit):
        asc = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.CREATED_ASC)
        assert _names(asc) == ["Banana", "Apple", "Cherry"]

    def test_default_is_newest_first(self, fruit):
        assert _names(HabitQueryEngine.list(fruit, 1)) == ["Cherry", "Apple", "Banana"]

    @pytest.mark.parametrize("order", [HabitOrder.NAME_ASC, HabitOrder.NAME_DESC])
    def test_ties_keep_input_order(self, order):
        same_day = datetime.date(2026, 3, 10)
        records = [_habit(i, "Walk", start_date=same_day) for i in (4, 2, 9)]
        assert [r.id for r in HabitQueryEngine.list(records, 1, order_by=order)] == [4, 2, 9]

    def test_unknown_order_rejected(self, fruit):
        with pytest.raises(ValueError):
            HabitQueryEngine.list(fruit, 1, order_by="random")


class TestPurity:
    def test_deterministic(self, fruit):
        first = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.NAME_ASC)
        second = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.NAME_ASC)
        assert first == second

    def test_input_not_mutated(self, fruit):
        snapshot = list(fruit)
        result = HabitQueryEngine.list(fruit, 1, order_by=HabitOrder.NAME_ASC)
        assert fruit == snapshot
        assert result is not fruit

    def test_accepts_any_iterable(self, fruit):
        result = HabitQueryEngine.list(iter(fruit), 1, order_by=HabitOrder.NAME_ASC)
        assert _names(result) == ["Apple", "Banana", "Cherry"]


def test_collation_key():
    assert collation_key("Água") == collation_key("agua")
    assert collation_key("ÉCLAIR") == "eclair"
