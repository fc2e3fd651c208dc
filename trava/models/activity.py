"""Activity models - generated candidates and their scheduled form."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from trava.models.common import Category, Geo, Priority

# Untrusted activity dict as decoded from a completion response
RawActivity = dict[str, Any]


class GeneratedActivity(BaseModel):
    """Normalized candidate activity, not yet bound to a date."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    time: str = Field(..., pattern=r"^\d{2}:\d{2}$", description="Local clock time, HH:MM")
    location: str
    category: Category
    priority: Priority


class ScheduledItem(GeneratedActivity):
    """Generated activity bound to a calendar date and an intra-day order."""

    date: date
    order: int = Field(..., ge=1)
    geo: Geo | None = None

    @classmethod
    def from_activity(cls, activity: GeneratedActivity, on: date, order: int) -> "ScheduledItem":
        return cls(**activity.model_dump(), date=on, order=order)
