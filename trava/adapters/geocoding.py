"""Geocoding adapter using the Open-Meteo geocoding API (keyless, free tier).

Enrichment is optional: any lookup failure leaves the item without
coordinates instead of failing the itinerary.
"""

import logging
from datetime import date

import httpx

from trava.config import Settings, get_settings
from trava.models.activity import ScheduledItem
from trava.models.common import Geo

logger = logging.getLogger(__name__)

# Locations that are not real places
UNGEOCODABLE_LOCATIONS = {"", "your choice"}


async def geocode_location(
    text: str,
    base_url: str = "https://geocoding-api.open-meteo.com/v1/search",
    client: httpx.AsyncClient | None = None,
    timeout_s: float = 4.0,
) -> Geo | None:
    """Look up coordinates for free-form location text.

    Args:
        text: Location text (address or place name)
        base_url: Open-Meteo geocoding endpoint
        client: Optional httpx client (for testing with mocks)
        timeout_s: Timeout for a client created here

    Returns:
        Geo for the best match, None when nothing matched

    Raises:
        httpx.HTTPError: On network or HTTP errors
    """
    params: dict[str, str | int] = {
        "name": text,
        "count": 1,
        "language": "en",
        "format": "json",
    }

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_s)
        close_client = True

    try:
        response = await client.get(base_url, params=params)
        response.raise_for_status()
        data = response.json()

        # Response structure: {results: [{latitude, longitude, name, ...}]}
        if not isinstance(data, dict):
            logger.warning(f"Unexpected geocoding response for {text!r}: {type(data).__name__}")
            return None
        results = data.get("results") or []
        if not isinstance(results, list) or not results:
            return None
        return Geo(lat=results[0]["latitude"], lon=results[0]["longitude"])
    finally:
        if close_client:
            await client.aclose()


async def enrich_with_coordinates(
    schedule: dict[date, list[ScheduledItem]],
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[date, list[ScheduledItem]]:
    """Return a copy of the schedule with `geo` attached where lookups succeed.

    Each distinct location is looked up once. Placeholder locations are skipped.
    """
    settings = settings or get_settings()
    cache: dict[str, Geo | None] = {}

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=settings.geocoding_timeout_s)
        close_client = True

    try:
        enriched: dict[date, list[ScheduledItem]] = {}
        for day, items in schedule.items():
            day_items = []
            for item in items:
                key = item.location.strip()
                if key.lower() in UNGEOCODABLE_LOCATIONS:
                    day_items.append(item)
                    continue
                if key not in cache:
                    try:
                        cache[key] = await geocode_location(
                            key, base_url=settings.geocoding_base_url, client=client
                        )
                    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
                        logger.warning(f"Geocoding failed for {key!r}: {e}")
                        cache[key] = None
                geo = cache[key]
                day_items.append(item.model_copy(update={"geo": geo}) if geo else item)
            enriched[day] = day_items
        return enriched
    finally:
        if close_client:
            await client.aclose()
