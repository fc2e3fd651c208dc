"""Trip context - immutable input to itinerary generation."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trava.models.common import BudgetTier
from trava.utils.dates import generate_date_range, parse_date


class TripContext(BaseModel):
    """Everything the engine knows about a trip when generating an itinerary.

    Dates are optional: absent or malformed values are accepted and produce an
    empty date range rather than a validation error.
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(..., min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    companions: str = ""
    interests: str = ""
    budget: BudgetTier = BudgetTier.unset
    trip_name: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> date | None:
        """Turn unparseable date input into None."""
        return parse_date(v)

    @field_validator("budget", mode="before")
    @classmethod
    def coerce_budget(cls, v: Any) -> Any:
        """Treat empty or unknown budget labels as unset."""
        if v is None or v == "":
            return BudgetTier.unset
        if isinstance(v, str) and v.strip().lower() not in {t.value for t in BudgetTier}:
            return BudgetTier.unset
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def date_range(self) -> list[date]:
        """Inclusive list of trip dates (empty when dates are missing or reversed)."""
        return generate_date_range(self.start_date, self.end_date)

    @property
    def is_couple(self) -> bool:
        text = self.companions.lower()
        return "partner" in text or "spouse" in text

    @property
    def is_family_with_kids(self) -> bool:
        text = self.companions.lower()
        return "children" in text or "kids" in text

    @property
    def is_group(self) -> bool:
        text = self.companions.lower()
        return "friends" in text or "4" in self.companions or "5" in self.companions

    def has_interest(self, *keywords: str) -> bool:
        """Check whether any keyword appears in the interests text (case-insensitive)."""
        text = self.interests.lower()
        return any(k in text for k in keywords)
