"""
Utility helpers for Smithy Docs MCP Server.

Includes:
- Per-tool performance metrics
- Timing utilities
"""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetrics:
    """Collected performance metrics for a tool call."""
    function_name: str
    elapsed_ms: float
    success: bool = True


class MetricsCollector:
    """Collects and aggregates performance metrics."""

    def __init__(self, max_entries_per_function: int = 1000):
        self._metrics: dict[str, list[PerformanceMetrics]] = defaultdict(list)
        self._max_entries_per_function = max_entries_per_function

    def record(self, metrics: PerformanceMetrics) -> None:
        """Record a performance metric."""
        entries = self._metrics[metrics.function_name]
        entries.append(metrics)

        # Trim old entries if needed
        if len(entries) > self._max_entries_per_function:
            self._metrics[metrics.function_name] = entries[-self._max_entries_per_function:]

    def get_stats(self, function_name: str | None = None) -> dict[str, Any]:
        """Get aggregated statistics."""
        if function_name:
            entries = self._metrics.get(function_name, [])
            return self._aggregate_entries(function_name, entries)

        return {
            name: self._aggregate_entries(name, entries)
            for name, entries in self._metrics.items()
        }

    def _aggregate_entries(self, name: str, entries: list[PerformanceMetrics]) -> dict[str, Any]:
        if not entries:
            return {"function": name, "call_count": 0}

        times = sorted(e.elapsed_ms for e in entries)
        success_count = sum(1 for e in entries if e.success)

        return {
            "function": name,
            "call_count": len(entries),
            "success_rate": success_count / len(entries),
            "avg_ms": sum(times) / len(times),
            "min_ms": times[0],
            "max_ms": times[-1],
            "p50_ms": times[len(times) // 2],
            "p95_ms": times[int(len(times) * 0.95)] if len(times) >= 20 else times[-1],
        }


class Timer:
    """
    Context manager measuring wall-clock time in milliseconds.

    Example:
        with Timer() as timer:
            await handler()
        print(timer.elapsed_ms)
    """

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000


def log_timing(operation: str, elapsed_ms: float, **extra: Any) -> None:
    """Log operation timing as key=value pairs."""
    details = " ".join(f"{key}={value}" for key, value in extra.items())
    logger.info("%s completed in %.1fms %s", operation, elapsed_ms, details)
