"""Category normalizer - the single route from raw activity dicts to GeneratedActivity.

Every producer of activities (AI recovery and the synthetic catalog) passes its
items through `normalize`, so category and priority are always members of their
enums past this point.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from trava.models.activity import GeneratedActivity
from trava.models.common import Category, Priority

logger = logging.getLogger(__name__)

CATEGORY_SYNONYMS: dict[str, Category] = {
    "dining": Category.restaurant,
    "food": Category.restaurant,
    "sightseeing": Category.attraction,
    "tourism": Category.attraction,
    "entertainment": Category.nightlife,
    "accommodation": Category.hotel,
    "travel": Category.transport,
    "transportation": Category.transport,
}

EXCLUDED_KEYWORDS: tuple[str, ...] = (
    "flight",
    "departure",
    "arrival",
    "airport",
    "check-in",
    "check-out",
    "depart",
    "arrive",
)

DEFAULT_TIME = "12:00"
DEFAULT_DESCRIPTION = "No description provided"

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def _text(raw: Mapping[str, Any], *keys: str) -> str | None:
    """First non-blank string value among keys."""
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def normalize_category(value: Any) -> Category:
    """Map an arbitrary label onto the fixed category taxonomy."""
    if not value or (isinstance(value, str) and not value.strip()):
        return Category.activity
    if not isinstance(value, str):
        logger.warning(f"Non-text category {value!r}, using 'other'")
        return Category.other

    label = value.strip().lower()
    if label in CATEGORY_SYNONYMS:
        return CATEGORY_SYNONYMS[label]
    try:
        return Category(label)
    except ValueError:
        logger.warning(f"Unrecognized category {value!r}, using 'other'")
        return Category.other


def normalize_priority(value: Any) -> Priority:
    if isinstance(value, str):
        try:
            return Priority(value.strip().lower())
        except ValueError:
            pass
    return Priority.medium


def normalize_time(value: Any) -> str:
    """Coerce to zero-padded HH:MM, falling back to midday."""
    if not isinstance(value, str):
        return DEFAULT_TIME
    match = _TIME_RE.match(value.strip())
    if not match:
        return DEFAULT_TIME
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return DEFAULT_TIME
    return f"{hour:02d}:{minute:02d}"


def is_excluded(raw: Mapping[str, Any]) -> bool:
    """True for inbound/outbound transport and lodging check-in/out events."""
    if not isinstance(raw, Mapping):
        return False
    title = (_text(raw, "title", "name") or "").lower()
    description = (_text(raw, "description") or "").lower()
    return any(k in title or k in description for k in EXCLUDED_KEYWORDS)


def normalize(
    raw: Mapping[str, Any],
    index: int = 0,
    destination: str = "",
    id_prefix: str = "ai_activity",
) -> GeneratedActivity:
    """Build a valid GeneratedActivity from an untrusted dict.

    Total: unknown categories become `other`, bad priorities become `medium`,
    and missing title/time/location get positional, midday and destination
    defaults.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    return GeneratedActivity(
        id=f"{id_prefix}_{index}",
        title=_text(raw, "title", "name") or f"Activity {index + 1}",
        description=_text(raw, "description") or DEFAULT_DESCRIPTION,
        time=normalize_time(raw.get("time") or raw.get("suggested_time")),
        location=_text(raw, "location", "address") or destination,
        category=normalize_category(raw.get("category")),
        priority=normalize_priority(raw.get("priority")),
    )
