"""Tests for the day distribution scheduler."""

from collections.abc import Callable
from datetime import date

import pytest

from trava.models import GeneratedActivity, Priority
from trava.scheduling.distribution import daily_counts, distribute, free_day_placeholder
from trava.utils.dates import generate_date_range

MakeActivity = Callable[..., GeneratedActivity]

THREE_DAYS = generate_date_range(date(2026, 6, 10), date(2026, 6, 12))


@pytest.mark.parametrize(
    "total,days,expected",
    [
        (9, 3, [3, 3, 3]),
        (10, 3, [4, 3, 3]),
        (11, 3, [4, 4, 3]),
        (2, 4, [1, 1, 0, 0]),
        (0, 2, [0, 0]),
        (5, 0, []),
    ],
)
def test_daily_counts(total: int, days: int, expected: list[int]) -> None:
    assert daily_counts(total, days) == expected


def test_even_split_nine_over_three(make_activity: MakeActivity) -> None:
    activities = [make_activity(i, time=f"{9 + i:02d}:00") for i in range(9)]
    schedule = distribute(activities, THREE_DAYS, "Paris")

    assert list(schedule) == THREE_DAYS
    assert [len(items) for items in schedule.values()] == [3, 3, 3]


def test_counts_differ_by_at_most_one(make_activity: MakeActivity) -> None:
    """Every activity is scheduled exactly once and loads stay balanced."""
    days = generate_date_range("2026-01-01", "2026-01-07")
    activities = [make_activity(i) for i in range(17)]
    schedule = distribute(activities, days)

    counts = [len(items) for items in schedule.values()]
    assert sum(counts) == 17
    assert max(counts) - min(counts) <= 1
    assert counts == sorted(counts, reverse=True)

    ids = [item.id for items in schedule.values() for item in items]
    assert sorted(ids) == sorted(a.id for a in activities)


def test_high_priority_lands_on_earlier_days(make_activity: MakeActivity) -> None:
    activities = [
        make_activity(0, time="09:00", priority=Priority.low),
        make_activity(1, time="10:00", priority=Priority.medium),
        make_activity(2, time="11:00", priority=Priority.high),
    ]
    schedule = distribute(activities, THREE_DAYS)

    assert [items[0].id for items in schedule.values()] == ["act_2", "act_1", "act_0"]


def test_day_items_sorted_by_time_with_contiguous_order(make_activity: MakeActivity) -> None:
    """Within a day, order follows clock time even across priorities."""
    activities = [
        make_activity(0, time="18:00", priority=Priority.high),
        make_activity(1, time="08:30", priority=Priority.medium),
        make_activity(2, time="12:00", priority=Priority.high),
    ]
    schedule = distribute(activities, [date(2026, 6, 10)])

    items = schedule[date(2026, 6, 10)]
    assert [i.time for i in items] == ["08:30", "12:00", "18:00"]
    assert [i.order for i in items] == [1, 2, 3]
    assert all(i.date == date(2026, 6, 10) for i in items)


def test_empty_days_get_placeholder(make_activity: MakeActivity) -> None:
    days = generate_date_range("2026-06-10", "2026-06-13")
    schedule = distribute([make_activity(0), make_activity(1)], days, "Rome")

    last = schedule[date(2026, 6, 13)]
    assert len(last) == 1
    assert last[0].title == "Explore Rome - Free Day"
    assert last[0].location == "Your choice"
    assert last[0].time == "10:00"
    assert last[0].order == 1
    assert last[0].id == "generic_3"


def test_no_activities_fills_every_day() -> None:
    schedule = distribute([], THREE_DAYS, "")
    assert all(len(items) == 1 for items in schedule.values())
    assert schedule[THREE_DAYS[0]][0].title == "Explore your destination - Free Day"


def test_empty_date_range_returns_empty_map(make_activity: MakeActivity) -> None:
    assert distribute([make_activity(0)], []) == {}
    assert distribute([], []) == {}


def test_free_day_placeholder_is_normalized() -> None:
    placeholder = free_day_placeholder(2, "Oslo")
    assert placeholder.id == "generic_2"
    assert placeholder.priority == Priority.medium
    assert placeholder.description.startswith("This day is open")
