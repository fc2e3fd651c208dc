"""Itinerary models - per-day output and persistence-shaped records."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel

from trava.models.activity import ScheduledItem
from trava.models.common import Category, Priority
from trava.utils.dates import day_of_week, format_day_header


class GenerationSource(str, Enum):
    """Which path produced the activity list."""

    ai = "ai"
    synthetic = "synthetic"
    empty = "empty"


class DayItinerary(BaseModel):
    """Itinerary for a single day."""

    date: date
    day_of_week: str
    formatted_date: str
    items: list[ScheduledItem]
    item_count: int


class ItineraryResponse(BaseModel):
    """Generated itinerary returned to the caller."""

    destination: str
    source: GenerationSource
    activity_count: int
    days: list[DayItinerary]


class ItineraryItemRecord(BaseModel):
    """Row shape accepted by the itinerary persistence service."""

    trip_id: str
    user_id: str
    title: str
    description: str
    date: date
    time: str
    location: str
    category: Category
    priority: Priority
    item_order: int


def build_day_itineraries(schedule: dict[date, list[ScheduledItem]]) -> list[DayItinerary]:
    """Turn a distribution map into date-ordered day views."""
    return [
        DayItinerary(
            date=day,
            day_of_week=day_of_week(day),
            formatted_date=format_day_header(day),
            items=sorted(items, key=lambda item: item.order),
            item_count=len(items),
        )
        for day, items in sorted(schedule.items())
    ]


def to_itinerary_records(
    schedule: dict[date, list[ScheduledItem]], trip_id: str, user_id: str
) -> list[dict[str, Any]]:
    """Build persistence records for every scheduled item, ordered by date then order."""
    records: list[dict[str, Any]] = []
    for day, items in sorted(schedule.items()):
        for item in sorted(items, key=lambda i: i.order):
            record = ItineraryItemRecord(
                trip_id=trip_id,
                user_id=user_id,
                title=item.title,
                description=item.description,
                date=day,
                time=item.time,
                location=item.location,
                category=item.category,
                priority=item.priority,
                item_order=item.order,
            )
            records.append(record.model_dump(mode="json"))
    return records
