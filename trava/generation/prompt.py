"""Prompt construction for AI itinerary generation."""

from trava.config import Settings
from trava.models.common import BudgetTier
from trava.models.trip import TripContext

BUDGET_GUIDANCE: dict[BudgetTier, str] = {
    BudgetTier.budget: (
        "Budget traveler - focus on free/low-cost activities and affordable dining"
    ),
    BudgetTier.mid_range: (
        "Mid-range explorer - balance value and comfort, include mix of budget and premium options"
    ),
    BudgetTier.comfort: (
        "Comfort seeker - prioritize quality experiences and comfortable dining/activities"
    ),
    BudgetTier.luxury: (
        "Luxury experience - include premium restaurants, exclusive activities, "
        "and high-end experiences"
    ),
}


def budget_guidance(budget: BudgetTier) -> str | None:
    """Narrative for the budget tier, None when unset."""
    return BUDGET_GUIDANCE.get(budget)


def _date_text(context: TripContext) -> tuple[str, str]:
    start = context.start_date.isoformat() if context.start_date else "unspecified"
    end = context.end_date.isoformat() if context.end_date else "unspecified"
    return start, end


def build_itinerary_prompt(context: TripContext, settings: Settings) -> str:
    """Build the activity-generation prompt for a trip."""
    destination = context.destination
    start, end = _date_text(context)
    guidance = budget_guidance(context.budget)

    lines = [
        f"Generate a travel itinerary for a trip to {destination} from {start} to {end}.",
        "",
        "Trip details:",
        f"- Destination: {destination}",
        f"- Travel dates: {start} to {end}",
        f"- Traveling with: {context.companions}",
        f"- Interested in: {context.interests}",
    ]
    if guidance:
        lines.append(f"Budget style: {guidance}")

    guidelines = [
        (
            f"Create {settings.min_activities}-{settings.max_activities} LOCAL "
            f"activities/experiences in {destination} only"
        ),
        (
            f"DO NOT include transportation TO or FROM {destination} "
            "(no flights, departures, arrivals)"
        ),
        "DO NOT include hotel check-in/check-out activities",
        (
            "Focus on attractions, restaurants, activities, and experiences "
            "WITHIN the destination"
        ),
        f"Ensure activities are realistic and can be done in {destination}",
        "Distribute activities evenly across all trip days",
    ]
    if guidance:
        guidelines.append(
            f"Consider the {context.budget.value} budget preference when selecting "
            "activities and restaurants"
        )

    lines += ["", "IMPORTANT GUIDELINES:"]
    lines += [f"{i}. {text}" for i, text in enumerate(guidelines, start=1)]

    lines += [
        "",
        "For each activity, provide:",
        f"1. Activity name/title (specific to {destination})",
        "2. Brief description (30-50 words)",
        "3. Time (in HH:MM format like 09:00)",
        f"4. Specific location/address in {destination}",
        "5. Category (activity, restaurant, attraction, shopping, nightlife, other)",
        "6. Priority (low, medium, high)",
        "",
        "Respond ONLY with a JSON array of activities. No other text or formatting. "
        "Example format:",
        "[",
        "  {",
        f'    "title": "Local Activity in {destination}",',
        '    "description": "Experience something unique in this destination",',
        '    "time": "09:00",',
        f'    "location": "Specific address in {destination}",',
        '    "category": "activity",',
        '    "priority": "high"',
        "  }",
        "]",
    ]
    return "\n".join(lines)
