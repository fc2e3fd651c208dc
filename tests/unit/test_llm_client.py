"""Tests for the completion client.

All tests are deterministic and do not make real network calls.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError
from pydantic import SecretStr

from trava.config import Settings
from trava.llm.client import (
    CompletionError,
    EmptyCompletionError,
    NullCompletionClient,
    OpenAIClient,
    build_system_prompt,
    get_llm_client,
)
from trava.models import TripContext


def mock_openai(content: str | None) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content

    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(return_value=mock_response)
    return mock_openai_client


def test_get_llm_client_returns_null_without_key() -> None:
    client = get_llm_client(Settings(openai_api_key=None))
    assert isinstance(client, NullCompletionClient)


def test_get_llm_client_treats_blank_key_as_missing() -> None:
    client = get_llm_client(Settings(openai_api_key=SecretStr("")))
    assert isinstance(client, NullCompletionClient)


def test_get_llm_client_returns_openai_when_key_present() -> None:
    settings = Settings(openai_api_key=SecretStr("test_key"), openai_model="gpt-4o")
    client = get_llm_client(settings)

    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-4o"
    assert client.max_tokens == settings.openai_max_tokens


@pytest.mark.asyncio
async def test_null_client_always_fails(paris_trip: TripContext) -> None:
    with pytest.raises(CompletionError):
        await NullCompletionClient().complete("prompt", paris_trip)


@pytest.mark.asyncio
async def test_openai_client_returns_raw_text(paris_trip: TripContext) -> None:
    """Test that OpenAIClient sends system + user messages and returns content untouched."""
    client = OpenAIClient(api_key="test_key", temperature=0.2, max_tokens=500)
    client.client = mock_openai('```json\n[{"title": "Louvre"}]\n```')

    text = await client.complete("Generate a travel itinerary", paris_trip)

    assert text.startswith("```json")
    create = client.client.chat.completions.create
    create.assert_called_once()
    kwargs = create.call_args.kwargs
    assert kwargs["temperature"] == 0.2
    assert kwargs["max_tokens"] == 500
    assert [m["role"] for m in kwargs["messages"]] == ["system", "user"]
    assert kwargs["messages"][1]["content"] == "Generate a travel itinerary"


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "  \n"])
async def test_openai_client_rejects_empty_text(
    paris_trip: TripContext, content: str | None
) -> None:
    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai(content)

    with pytest.raises(EmptyCompletionError):
        await client.complete("prompt", paris_trip)


@pytest.mark.asyncio
async def test_openai_client_wraps_api_errors(paris_trip: TripContext) -> None:
    client = OpenAIClient(api_key="test_key")
    client.client = AsyncMock()
    client.client.chat.completions.create = AsyncMock(side_effect=OpenAIError("rate limited"))

    with pytest.raises(CompletionError, match="rate limited"):
        await client.complete("prompt", paris_trip)


def test_build_system_prompt_includes_trip_context(paris_trip: TripContext) -> None:
    prompt = build_system_prompt(paris_trip)

    assert "Destination: Paris" in prompt
    assert "Dates: 2026-06-10 to 2026-06-12" in prompt
    assert "Travelers: partner" in prompt
    assert "Budget: mid-range" in prompt


def test_build_system_prompt_without_dates() -> None:
    prompt = build_system_prompt(TripContext(destination="Oslo"))
    assert "Dates: unspecified to unspecified" in prompt
