"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter

from trava.config import get_settings

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, Any]:
    """Health check for Docker/k8s.

    The engine has no hard dependencies, so this is always 200; the AI
    component reports whether a completion backend is configured.
    """
    settings = get_settings()
    api_key = settings.openai_api_key
    ai_status = "configured" if api_key and api_key.get_secret_value() else "synthetic_only"
    return {"status": "ok", "components": {"ai": ai_status}}
