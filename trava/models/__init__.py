"""Models package - re-exports for convenience."""

from trava.models.activity import GeneratedActivity, RawActivity, ScheduledItem
from trava.models.common import BudgetTier, Category, Geo, Priority
from trava.models.itinerary import (
    DayItinerary,
    GenerationSource,
    ItineraryItemRecord,
    ItineraryResponse,
    build_day_itineraries,
    to_itinerary_records,
)
from trava.models.trip import TripContext

__all__ = [
    # Common
    "Geo",
    "Category",
    "Priority",
    "BudgetTier",
    # Trip
    "TripContext",
    # Activity
    "RawActivity",
    "GeneratedActivity",
    "ScheduledItem",
    # Itinerary
    "GenerationSource",
    "DayItinerary",
    "ItineraryResponse",
    "ItineraryItemRecord",
    "build_day_itineraries",
    "to_itinerary_records",
]
