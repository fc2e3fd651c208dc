"""LLM completion client for activity generation with OpenAI integration.

Security: Reads API key from settings/environment only, never hardcoded.
Without a key the null client is used and the engine goes straight to the
synthetic fallback.
"""

import logging
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError

from trava.config import Settings, get_settings
from trava.models.trip import TripContext

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Completion request failed."""

    pass


class CompletionTimeoutError(CompletionError):
    """Completion did not settle before the timeout."""

    pass


class EmptyCompletionError(CompletionError):
    """Completion returned no text."""

    pass


class CompletionClient(Protocol):
    """Protocol for completion adapters."""

    async def complete(self, prompt: str, context: TripContext) -> str:
        """Return raw completion text for the prompt.

        Args:
            prompt: Fully rendered user prompt
            context: Trip the prompt was built for

        Returns:
            Untrusted free-form text

        Raises:
            CompletionError: On any adapter failure
        """
        ...


SYSTEM_PROMPT = """You are AITA, an expert AI travel assistant specializing in personalized travel
planning and recommendations. You know global destinations, local cuisine, attractions,
budget planning and day-by-day itinerary sequencing.

Provide specific, realistic recommendations that match the traveler's trip context
(dates, destination, companions, interests and budget)."""


def build_system_prompt(context: TripContext) -> str:
    """Persona plus the current trip context block."""
    start = context.start_date.isoformat() if context.start_date else "unspecified"
    end = context.end_date.isoformat() if context.end_date else "unspecified"
    lines = [
        SYSTEM_PROMPT,
        "",
        "Current Trip Context:",
        f"Destination: {context.destination}",
        f"Dates: {start} to {end}",
        f"Travelers: {context.companions}",
        f"Interests: {context.interests}",
        f"Budget: {context.budget.value}",
        "",
        "Current Focus: planning",
    ]
    return "\n".join(lines)


class NullCompletionClient:
    """Client used when no completion backend is configured."""

    async def complete(self, prompt: str, context: TripContext) -> str:
        raise CompletionError("no completion backend configured")


class OpenAIClient:
    """OpenAI-backed completion client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 1200,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            temperature: Sampling temperature
            max_tokens: Completion token cap
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(self, prompt: str, context: TripContext) -> str:
        """Generate completion text using the OpenAI API."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_prompt(context)},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise CompletionError(str(e)) from e

        text = response.choices[0].message.content if response.choices else None
        if not text or not text.strip():
            raise EmptyCompletionError("OpenAI returned empty response")
        return text


def get_llm_client(settings: Settings | None = None) -> CompletionClient:
    """Factory function to get appropriate completion client based on config.

    Returns:
        OpenAIClient if API key is configured, NullCompletionClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for itinerary generation")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )
    logger.warning("No OpenAI API key configured, itineraries will use synthetic activities")
    return NullCompletionClient()
