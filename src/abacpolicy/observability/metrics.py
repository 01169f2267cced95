"""Prometheus metrics for policy loading and evaluation."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Info, generate_latest

from abacpolicy.core.config import get_settings

# Create a custom registry
REGISTRY = CollectorRegistry()


APP_INFO = Info(
    "abacpolicy",
    "abacpolicy application info",
    registry=REGISTRY,
)

EVALUATIONS_TOTAL = Counter(
    "abacpolicy_evaluations_total",
    "Total access evaluations",
    ["decision"],
    registry=REGISTRY,
)

POLICIES_LOADED = Gauge(
    "abacpolicy_policies_loaded",
    "Policies appended to the most recently built store, by source",
    ["source"],
    registry=REGISTRY,
)


class MetricsCollector:
    """
    Collects and exposes metrics.

    Recording is a no-op while the collector is disabled.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._initialized = False
        self.enabled = enabled

    def initialize(self, version: str = "0.1.0") -> None:
        """Initialize metrics with app info."""
        if self._initialized:
            return

        APP_INFO.info({
            "version": version,
            "name": "abacpolicy",
        })
        self._initialized = True

    def record_evaluation(self, allowed: bool) -> None:
        """Record an access decision."""
        if not self.enabled:
            return
        decision = "allow" if allowed else "deny"
        EVALUATIONS_TOTAL.labels(decision=decision).inc()

    def set_policies_loaded(self, source: str, count: int) -> None:
        """Record how many policies a source contributed."""
        if not self.enabled:
            return
        POLICIES_LOADED.labels(source=source).set(count)

    def get_metrics(self) -> bytes:
        """Generate metrics in Prometheus format."""
        return generate_latest(REGISTRY)


# Global metrics collector instance
_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector."""
    global _collector
    if _collector is None:
        _collector = MetricsCollector(
            enabled=get_settings().observability.metrics_enabled
        )
    return _collector
