"""Shared pytest fixtures for all test suites."""

import random
from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from trava.config import Settings
from trava.models import BudgetTier, Category, GeneratedActivity, Priority, TripContext


@pytest.fixture
def settings() -> Settings:
    """Settings with no AI key, a short timeout and deterministic synthetic output."""
    return Settings(
        openai_api_key=None,
        ai_timeout_ms=200,
        synthetic_shuffle=False,
    )


@pytest.fixture
def paris_trip() -> TripContext:
    """Three-day Paris trip."""
    return TripContext(
        destination="Paris",
        start_date=date(2026, 6, 10),
        end_date=date(2026, 6, 12),
        companions="partner",
        interests="art, food",
        budget=BudgetTier.mid_range,
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def make_activity() -> Callable[..., GeneratedActivity]:
    """Factory for GeneratedActivity with sensible defaults."""

    def _make(
        index: int,
        time: str = "10:00",
        priority: Priority = Priority.medium,
        category: Category = Category.activity,
        **overrides: Any,
    ) -> GeneratedActivity:
        fields: dict[str, Any] = {
            "id": f"act_{index}",
            "title": f"Activity {index}",
            "description": "Test activity",
            "time": time,
            "location": "Somewhere",
            "category": category,
            "priority": priority,
        }
        fields.update(overrides)
        return GeneratedActivity(**fields)

    return _make
