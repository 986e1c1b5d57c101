"""Observability: per-operation store call metrics."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class StoreMetrics:
    """Dict-based counters and timers keyed by store operation."""

    def __init__(self):
        self._calls: dict[str, int] = {}
        self._errors: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    def error(self, operation: str):
        self._errors[operation] = self._errors.get(operation, 0) + 1

    @contextmanager
    def track(self, operation: str):
        """Count a call to ``operation`` and record its duration."""
        self._calls[operation] = self._calls.get(operation, 0) + 1
        start = time.monotonic()
        try:
            yield
        finally:
            self._timers.setdefault(operation, []).append(time.monotonic() - start)

    def summary(self) -> dict[str, Any]:
        """Return calls, errors and timing stats per operation."""
        timers = {}
        for name, durations in self._timers.items():
            timers[name] = {
                "count": len(durations),
                "avg": sum(durations) / len(durations),
                "max": max(durations),
            }
        return {
            "calls": dict(self._calls),
            "errors": dict(self._errors),
            "timers": timers,
        }


def log_store_summary(metrics: StoreMetrics):
    """Log the collected store metrics via structlog."""
    logger.info("store_summary", **metrics.summary())
