"""Observability module for abacpolicy."""

from abacpolicy.observability.logging import configure_logging, get_logger
from abacpolicy.observability.metrics import MetricsCollector, get_metrics_collector

__all__ = [
    "configure_logging",
    "get_logger",
    "MetricsCollector",
    "get_metrics_collector",
]
