"""Structured logging for itinerary generation."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredGenerationLogger:
    """Structured logger for generation outcomes."""

    def log_outcome(
        self,
        destination: str,
        source: str,
        activity_count: int,
        latency_ms: float,
        failure_reason: str | None = None,
    ) -> None:
        """Log one generation run with structured data."""
        log_data: dict[str, Any] = {
            "destination": destination,
            "source": source,
            "activity_count": activity_count,
            "latency_ms": round(latency_ms, 2),
        }

        if failure_reason:
            log_data["failure_reason"] = failure_reason

        log_msg = f"Itinerary generation: {destination} - {source} ({activity_count} activities)"

        if source == "ai":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
