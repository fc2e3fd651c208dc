"""Generation orchestrator - AI activities with a synthetic safety net.

Flow per trip:
1. Build the prompt and race the completion client against the timeout
2. Recover structured activities from the returned text
3. Drop transport/lodging events and normalize the rest
4. On timeout, adapter error, empty text or nothing usable, use the
   synthetic generator instead

Nothing in this module raises to the caller; the worst case is an empty list.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass

import httpx

from trava.adapters.geocoding import enrich_with_coordinates
from trava.config import Settings, get_settings
from trava.generation.normalizer import is_excluded, normalize
from trava.generation.prompt import build_itinerary_prompt
from trava.generation.recovery import recover
from trava.generation.synthetic import generate_synthetic
from trava.llm.client import (
    CompletionClient,
    CompletionError,
    CompletionTimeoutError,
    EmptyCompletionError,
    get_llm_client,
)
from trava.models.activity import GeneratedActivity
from trava.models.itinerary import GenerationSource, ItineraryResponse, build_day_itineraries
from trava.models.trip import TripContext
from trava.scheduling.distribution import distribute
from trava.utils.logging import StructuredGenerationLogger
from trava.utils.metrics import PrometheusGenerationMetrics

logger = logging.getLogger(__name__)

AI_ID_PREFIX = "ai_activity"


class UnusableResponseError(CompletionError):
    """Completion text held no usable activities."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


@dataclass
class GenerationResult:
    """Activities plus the path that produced them."""

    activities: list[GeneratedActivity]
    source: GenerationSource
    failure_reason: str | None = None


def failure_reason(exc: BaseException) -> str:
    """Short metric label for a failed AI attempt."""
    if isinstance(exc, CompletionTimeoutError):
        return "timeout"
    if isinstance(exc, EmptyCompletionError):
        return "empty"
    if isinstance(exc, UnusableResponseError):
        return exc.reason
    return "error"


def _discard_outcome(task: asyncio.Future) -> None:
    """Retrieve the outcome of an abandoned completion so it is never reported as unhandled."""
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Abandoned completion finished with error: {task.exception()}")


def synthetic_rng(settings: Settings) -> random.Random | None:
    """Shuffle source for synthetic output, None when shuffling is disabled."""
    if not settings.synthetic_shuffle:
        return None
    return random.Random(settings.synthetic_seed)


class ItineraryGenerator:
    """Produces the candidate activity list for a trip."""

    def __init__(
        self,
        client: CompletionClient | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client if client is not None else get_llm_client(self.settings)
        self.rng = rng if rng is not None else synthetic_rng(self.settings)
        self.metrics = PrometheusGenerationMetrics()
        self.structured_logger = StructuredGenerationLogger()

    async def generate(self, context: TripContext) -> list[GeneratedActivity]:
        """Generate normalized activities for a trip. Never raises."""
        result = await self.run(context)
        return result.activities

    async def run(self, context: TripContext) -> GenerationResult:
        """Generate activities and report which path produced them."""
        started = time.perf_counter()

        try:
            activities = await self._generate_with_ai(context)
            result = GenerationResult(activities=activities, source=GenerationSource.ai)
        except Exception as e:
            reason = failure_reason(e)
            logger.warning(f"AI generation failed ({reason}): {e}; using synthetic activities")
            self.metrics.inc_ai_failure(reason)
            result = self._generate_synthetic(context, reason)

        latency_ms = (time.perf_counter() - started) * 1000
        self.metrics.inc_generation(result.source.value)
        self.structured_logger.log_outcome(
            destination=context.destination,
            source=result.source.value,
            activity_count=len(result.activities),
            latency_ms=latency_ms,
            failure_reason=result.failure_reason,
        )
        return result

    async def _complete(self, context: TripContext) -> str:
        """Race the completion client against the configured timeout."""
        prompt = build_itinerary_prompt(context, self.settings)
        timeout_s = self.settings.ai_timeout_ms / 1000
        started = time.perf_counter()

        task = asyncio.ensure_future(self.client.complete(prompt, context))
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_s)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            # Abandon the call without waiting for it to honour cancellation
            task.cancel()
            task.add_done_callback(_discard_outcome)
            self.metrics.record_ai_latency("timeout", (time.perf_counter() - started) * 1000)
            raise CompletionTimeoutError(f"no completion within {self.settings.ai_timeout_ms} ms")

        text = task.result()
        self.metrics.record_ai_latency("success", (time.perf_counter() - started) * 1000)
        if not isinstance(text, str) or not text.strip():
            raise EmptyCompletionError("empty response from AI")
        logger.info(f"AI response received, length: {len(text)}")
        return text

    async def _generate_with_ai(self, context: TripContext) -> list[GeneratedActivity]:
        text = await self._complete(context)

        raw_activities = recover(text)
        if not raw_activities:
            raise UnusableResponseError("unparseable", "failed to parse AI response")

        kept = [raw for raw in raw_activities if not is_excluded(raw)]
        dropped = len(raw_activities) - len(kept)
        if dropped:
            logger.info(f"Dropped {dropped} transport/lodging activities from AI response")
        if not kept:
            raise UnusableResponseError("filtered", "no valid activities generated")

        return [
            normalize(raw, index=i, destination=context.destination, id_prefix=AI_ID_PREFIX)
            for i, raw in enumerate(kept)
        ]

    def _generate_synthetic(self, context: TripContext, reason: str) -> GenerationResult:
        try:
            activities = generate_synthetic(context, self.settings, self.rng)
        except Exception:
            logger.exception("Synthetic generation failed, returning no activities")
            return GenerationResult(
                activities=[], source=GenerationSource.empty, failure_reason=reason
            )
        return GenerationResult(
            activities=activities, source=GenerationSource.synthetic, failure_reason=reason
        )


async def plan_itinerary(
    context: TripContext,
    client: CompletionClient | None = None,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    enrich: bool = False,
    http_client: httpx.AsyncClient | None = None,
) -> ItineraryResponse:
    """Generate, distribute and (optionally) geocode an itinerary for a trip.

    Args:
        context: Trip to plan
        client: Completion client (defaults to the configured one)
        settings: Settings override
        rng: Shuffle source for synthetic output
        enrich: Attach coordinates to scheduled items
        http_client: Optional httpx client for geocoding (for testing with mocks)

    Returns:
        ItineraryResponse with one DayItinerary per trip date
    """
    settings = settings or get_settings()
    generator = ItineraryGenerator(client=client, settings=settings, rng=rng)
    result = await generator.run(context)

    schedule = distribute(result.activities, context.date_range, context.destination)
    if enrich:
        schedule = await enrich_with_coordinates(schedule, settings=settings, client=http_client)

    return ItineraryResponse(
        destination=context.destination,
        source=result.source,
        activity_count=len(result.activities),
        days=build_day_itineraries(schedule),
    )
