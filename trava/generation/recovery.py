"""Response recovery parser - salvages an activity list from free-form completion text.

Strategies run in order and the chain stops at the first one that yields at
least one activity dict:

1. direct:       strip code fences, decode the whole text
2. bracket_span: decode the first balanced [...] span, else the first {...} span;
                 an object enclosing that array wins (date-keyed responses)
3. aggressive:   strip every fence marker, decode from the first opening bracket
                 to the last closing bracket (retrying once without trailing commas)

A decoded object is flattened into its values, so responses keyed by date
still produce a flat list. Nothing here raises; exhaustion returns [].
"""

import json
import logging
import re
from collections.abc import Iterator
from typing import Any, Protocol

from trava.models.activity import RawActivity
from trava.utils.metrics import recovery_stage_total

logger = logging.getLogger(__name__)

DECODE_ERRORS = (json.JSONDecodeError, ValueError, TypeError, RecursionError)

# Bound the span search on pathological input
MAX_SPAN_CANDIDATES = 25

_FENCE_OPEN_RE = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE_RE = re.compile(r"```\s*")
_ANY_FENCE_RE = re.compile(r"```[\w-]*\s*")
_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers and trim."""
    return _FENCE_RE.sub("", _FENCE_OPEN_RE.sub("", text)).strip()


def coerce_activities(decoded: Any) -> list[RawActivity]:
    """Turn a decoded value into a flat list of activity dicts.

    Lists are taken as-is and objects are flattened one level through their
    values. Non-dict entries are dropped, so a lone activity object (such as
    the first complete entry of a truncated array) yields nothing.
    """
    if isinstance(decoded, list):
        items = decoded
    elif isinstance(decoded, dict):
        items = []
        for value in decoded.values():
            if isinstance(value, list):
                items.extend(value)
            else:
                items.append(value)
    else:
        return []
    return [item for item in items if isinstance(item, dict)]


def _decode(candidate: str) -> list[RawActivity] | None:
    activities = coerce_activities(json.loads(candidate))
    return activities or None


def balanced_spans(text: str, open_ch: str, close_ch: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) of balanced open_ch...close_ch spans in order of start.

    Brackets inside JSON string literals are ignored. `end` is exclusive.
    """
    starts = [i for i, ch in enumerate(text) if ch == open_ch][:MAX_SPAN_CANDIDATES]
    for start in starts:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == open_ch:
                depth += 1
            elif ch == close_ch:
                depth -= 1
                if depth == 0:
                    yield start, pos + 1
                    break


def first_decodable_span(
    text: str, open_ch: str, close_ch: str
) -> tuple[int, int, list[RawActivity]] | None:
    """First balanced span that decodes to at least one activity."""
    for start, end in balanced_spans(text, open_ch, close_ch):
        try:
            activities = _decode(text[start:end])
        except DECODE_ERRORS:
            continue
        if activities:
            return start, end, activities
    return None


class ParseStrategy(Protocol):
    """One stage of the recovery chain."""

    name: str

    def try_parse(self, text: str) -> list[RawActivity] | None:
        """Return activities, or None when this stage cannot recover anything."""
        ...


class DirectDecodeStrategy:
    name = "direct"

    def try_parse(self, text: str) -> list[RawActivity] | None:
        cleaned = strip_code_fences(text)
        if not cleaned:
            return None
        try:
            return _decode(cleaned)
        except DECODE_ERRORS:
            return None


class BracketSpanStrategy:
    name = "bracket_span"

    def try_parse(self, text: str) -> list[RawActivity] | None:
        cleaned = strip_code_fences(text)
        array = first_decodable_span(cleaned, "[", "]")
        obj = first_decodable_span(cleaned, "{", "}")

        # An array nested in an enclosing object is one day of a date-keyed response
        if array and obj and obj[0] < array[0] and obj[1] >= array[1]:
            return obj[2]
        if array:
            return array[2]
        return obj[2] if obj else None


class AggressiveRepairStrategy:
    name = "aggressive"

    def try_parse(self, text: str) -> list[RawActivity] | None:
        cleaned = _ANY_FENCE_RE.sub("", text).replace("```", "").strip()
        first = min((i for i in (cleaned.find("["), cleaned.find("{")) if i != -1), default=-1)
        last = max(cleaned.rfind("]"), cleaned.rfind("}"))
        if first == -1 or last <= first:
            return None

        candidate = cleaned[first : last + 1]
        for attempt in (candidate, _TRAILING_COMMA_RE.sub(r"\1", candidate)):
            try:
                activities = _decode(attempt)
            except DECODE_ERRORS:
                continue
            if activities:
                return activities
        return None


DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    DirectDecodeStrategy(),
    BracketSpanStrategy(),
    AggressiveRepairStrategy(),
)


def recover(
    raw_text: str, strategies: tuple[ParseStrategy, ...] = DEFAULT_STRATEGIES
) -> list[RawActivity]:
    """Run the strategy chain over raw completion text.

    Returns an empty list when no stage recovers anything; that empty list is
    the caller's signal to fall back to synthetic activities.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        return []

    for strategy in strategies:
        try:
            activities = strategy.try_parse(raw_text)
        except Exception:
            logger.exception(f"Recovery stage {strategy.name} raised, skipping")
            continue
        if activities:
            logger.debug(f"Recovered {len(activities)} activities via {strategy.name}")
            recovery_stage_total.labels(stage=strategy.name).inc()
            return activities

    logger.debug("No recovery stage produced activities")
    recovery_stage_total.labels(stage="none").inc()
    return []
