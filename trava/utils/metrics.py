"""Prometheus metrics for itinerary generation."""

from prometheus_client import Counter, Histogram

generation_total = Counter(
    "itinerary_generation_total",
    "Total itinerary generations by producing path",
    ["source"],
)

ai_failures_total = Counter(
    "itinerary_ai_failures_total",
    "AI completion attempts that fell back to synthetic activities",
    ["reason"],
)

ai_latency_ms = Histogram(
    "itinerary_ai_latency_ms",
    "AI completion latency in milliseconds",
    ["outcome"],
    buckets=[250, 500, 1000, 2000, 4000, 8000, 15000, 30000],
)

recovery_stage_total = Counter(
    "itinerary_recovery_stage_total",
    "Recovery parser stage that produced activities",
    ["stage"],
)


class PrometheusGenerationMetrics:
    """Prometheus-based generation metrics implementation."""

    def record_ai_latency(self, outcome: str, latency_ms: float) -> None:
        ai_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def inc_ai_failure(self, reason: str) -> None:
        ai_failures_total.labels(reason=reason).inc()

    def inc_generation(self, source: str) -> None:
        generation_total.labels(source=source).inc()
