"""Day distribution scheduler - spreads activities evenly over the trip dates."""

import logging
from datetime import date

from trava.generation.normalizer import normalize
from trava.models.activity import GeneratedActivity, ScheduledItem
from trava.models.common import Priority

logger = logging.getLogger(__name__)

PRIORITY_RANK: dict[Priority, int] = {
    Priority.high: 0,
    Priority.medium: 1,
    Priority.low: 2,
}

DEFAULT_DESTINATION = "your destination"


def priority_key(activity: GeneratedActivity) -> tuple[int, str]:
    """Base ordering: high priority first, then earlier clock time."""
    return (PRIORITY_RANK[activity.priority], activity.time)


def daily_counts(total: int, days: int) -> list[int]:
    """Even split of total over days; the first `total % days` days get one extra."""
    if days <= 0:
        return []
    base, extra = divmod(total, days)
    return [base + (1 if day_index < extra else 0) for day_index in range(days)]


def free_day_placeholder(day_index: int, destination: str) -> GeneratedActivity:
    """Open exploration slot used when a day would otherwise be empty."""
    return normalize(
        {
            "title": f"Explore {destination} - Free Day",
            "description": "This day is open for spontaneous exploration or relaxation.",
            "time": "10:00",
            "location": "Your choice",
            "category": "activity",
            "priority": "medium",
        },
        index=day_index,
        destination=destination,
        id_prefix="generic",
    )


def distribute(
    activities: list[GeneratedActivity],
    date_range: list[date],
    destination: str = DEFAULT_DESTINATION,
) -> dict[date, list[ScheduledItem]]:
    """Assign activities to dates with even load and per-day time ordering.

    Activities are sorted by (priority, time) and consumed in date order, each
    day taking its share from `daily_counts`. Within a day items are re-sorted
    by time and numbered 1..k. Days left empty get a free-day placeholder; an
    empty date range yields an empty map.
    """
    if not date_range:
        if activities:
            logger.warning(f"No trip dates, {len(activities)} activities left unscheduled")
        return {}

    ordered = sorted(activities, key=priority_key)
    counts = daily_counts(len(ordered), len(date_range))
    logger.info(f"Distributing {len(ordered)} activities across {len(date_range)} days: {counts}")

    schedule: dict[date, list[ScheduledItem]] = {}
    cursor = 0
    for day_index, (day, count) in enumerate(zip(date_range, counts)):
        assigned = sorted(ordered[cursor : cursor + count], key=lambda a: a.time)
        cursor += count

        if not assigned:
            logger.warning(f"Day {day.isoformat()} has no activities, adding placeholder")
            assigned = [free_day_placeholder(day_index, destination or DEFAULT_DESTINATION)]

        schedule[day] = [
            ScheduledItem.from_activity(activity, day, order)
            for order, activity in enumerate(assigned, start=1)
        ]

    return schedule
