"""Tests for itinerary prompt construction."""

import pytest

from trava.config import Settings
from trava.generation.prompt import BUDGET_GUIDANCE, budget_guidance, build_itinerary_prompt
from trava.models import BudgetTier, TripContext


def test_prompt_carries_trip_details(paris_trip: TripContext, settings: Settings) -> None:
    prompt = build_itinerary_prompt(paris_trip, settings)

    assert "trip to Paris from 2026-06-10 to 2026-06-12" in prompt
    assert "- Traveling with: partner" in prompt
    assert "- Interested in: art, food" in prompt
    assert "1. Create 8-12 LOCAL activities/experiences in Paris only" in prompt
    assert "no flights, departures, arrivals" in prompt
    assert "Respond ONLY with a JSON array" in prompt


def test_prompt_activity_bounds_follow_settings(paris_trip: TripContext) -> None:
    settings = Settings(openai_api_key=None, min_activities=5, max_activities=7)
    assert "Create 5-7 LOCAL" in build_itinerary_prompt(paris_trip, settings)


@pytest.mark.parametrize("tier", list(BUDGET_GUIDANCE))
def test_budget_narrative_included(tier: BudgetTier, settings: Settings) -> None:
    context = TripContext(destination="Rome", budget=tier)
    prompt = build_itinerary_prompt(context, settings)

    assert f"Budget style: {BUDGET_GUIDANCE[tier]}" in prompt
    assert f"7. Consider the {tier.value} budget preference" in prompt


def test_budget_narrative_omitted_when_unset(settings: Settings) -> None:
    context = TripContext(destination="Rome", budget="whatever")
    prompt = build_itinerary_prompt(context, settings)

    assert context.budget == BudgetTier.unset
    assert budget_guidance(context.budget) is None
    assert "Budget style:" not in prompt
    assert "budget preference" not in prompt
