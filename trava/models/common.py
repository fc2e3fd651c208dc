"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, Field


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Category(str, Enum):
    """Fixed activity category taxonomy."""

    activity = "activity"
    restaurant = "restaurant"
    hotel = "hotel"
    transport = "transport"
    flight = "flight"
    attraction = "attraction"
    shopping = "shopping"
    nightlife = "nightlife"
    other = "other"


class Priority(str, Enum):
    """Activity priority."""

    high = "high"
    medium = "medium"
    low = "low"


class BudgetTier(str, Enum):
    """Budget style chosen for the trip."""

    unset = "any"
    budget = "budget"
    mid_range = "mid-range"
    comfort = "comfort"
    luxury = "luxury"
