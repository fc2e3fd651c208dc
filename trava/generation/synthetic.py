"""Synthetic activity generator - deterministic fallback when AI generation fails.

Destination matching policy: a catalog entry is used when its key and the trip
destination contain one another, compared case-insensitively (so "Paris,
France" and "paris" both select the Paris catalog). Unmatched destinations get
the generic template set with the destination name substituted.
"""

import json
import logging
import random
from functools import lru_cache
from pathlib import Path
from typing import Any

from trava.config import Settings, get_settings
from trava.generation.normalizer import normalize
from trava.models.activity import GeneratedActivity, RawActivity
from trava.models.trip import TripContext

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

SYNTHETIC_ID_PREFIX = "synthetic_activity"


@lru_cache
def load_catalog() -> dict[str, Any]:
    """Load the destination catalog fixture."""
    with open(FIXTURES_DIR / "destinations.json", encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    return data


def match_destination(destination: str, keys: list[str]) -> str | None:
    """Return the first catalog key matching the destination, if any."""
    needle = destination.strip().lower()
    if not needle:
        return None
    for key in keys:
        candidate = key.lower()
        if candidate in needle or needle in candidate:
            return key
    return None


def _fill(template: RawActivity, destination: str) -> RawActivity:
    return {
        k: v.replace("{destination}", destination) if isinstance(v, str) else v
        for k, v in template.items()
    }


def build_raw_catalog(context: TripContext, minimum: int) -> list[RawActivity]:
    """Assemble raw synthetic activities for a trip, before normalization."""
    catalog = load_catalog()
    destination = context.destination.strip()

    matched = match_destination(destination, list(catalog["destinations"]))
    if matched:
        logger.debug(f"Synthetic catalog matched {destination!r} -> {matched!r}")
        items = [dict(a) for a in catalog["destinations"][matched]]
    else:
        items = [_fill(t, destination) for t in catalog["generic"]]

    for addition in catalog["interest_additions"]:
        if context.has_interest(*addition["keywords"]):
            items += [_fill(t, destination) for t in addition["activities"]]

    companions = catalog["companion_additions"]
    if context.is_couple:
        items += [_fill(t, destination) for t in companions["couple"]]
    if context.is_family_with_kids:
        items += [_fill(t, destination) for t in companions["family"]]
    if context.is_group:
        items += [_fill(t, destination) for t in companions["group"]]

    while len(items) < minimum:
        items.append(
            {
                "title": f"Explore {destination} - Activity {len(items) + 1}",
                "description": f"Discover more of what {destination} has to offer.",
                "time": f"{10 + len(items) % 12}:00",
                "location": f"{destination} City Area",
                "category": "activity",
                "priority": "medium",
            }
        )

    return items


def generate_synthetic(
    context: TripContext,
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> list[GeneratedActivity]:
    """Produce at least `synthetic_min_activities` normalized activities.

    Output order is the catalog order unless an rng is supplied, in which case
    the list is shuffled with it before ids are assigned.
    """
    settings = settings or get_settings()
    items = build_raw_catalog(context, settings.synthetic_min_activities)

    if rng is not None:
        rng.shuffle(items)

    return [
        normalize(raw, index=i, destination=context.destination, id_prefix=SYNTHETIC_ID_PREFIX)
        for i, raw in enumerate(items)
    ]
