"""Itinerary generation endpoint - POST /itinerary/generate."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from trava.config import Settings, get_settings
from trava.generation.orchestrator import plan_itinerary
from trava.llm.client import CompletionClient, get_llm_client
from trava.models.itinerary import ItineraryResponse
from trava.models.trip import TripContext

router = APIRouter(prefix="/itinerary", tags=["itinerary"])
logger = logging.getLogger(__name__)


def get_completion_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> CompletionClient:
    """Dependency returning the configured completion client."""
    return get_llm_client(settings)


@router.post("/generate", response_model=ItineraryResponse)
async def generate_itinerary(
    context: TripContext,
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[CompletionClient, Depends(get_completion_client)],
    enrich: Annotated[bool | None, Query()] = None,
) -> ItineraryResponse:
    """Generate a day-by-day itinerary preview for a trip.

    AI failures never surface here: the response falls back to synthetic
    activities and reports `source` accordingly.
    """
    logger.info(f"Generating itinerary for {context.destination}")
    return await plan_itinerary(
        context,
        client=client,
        settings=settings,
        enrich=settings.geocoding_enabled if enrich is None else enrich,
    )
