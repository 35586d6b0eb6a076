"""Lightweight in-process metrics for parsing and dispatch.

Metrics are best-effort in multi-worker environments (each worker has its own state).
"""

import os
import threading
from dataclasses import dataclass, field
from typing import Any

NO_MATCH = "no_match"


@dataclass
class MetricsCollector:
    """In-memory metrics collector.

    Thread-safe; each worker process maintains its own metrics state.
    """

    # Parse outcomes per command type, plus NO_MATCH
    parse_counts: dict[str, int] = field(default_factory=dict)

    # Engine dispositions (execute, needs_confirmation, needs_clarification, no_match)
    disposition_counts: dict[str, int] = field(default_factory=dict)

    # Dispatch outcomes per command type: {"ok": n, "error": n}
    dispatch_outcomes: dict[str, dict[str, int]] = field(default_factory=dict)

    # Confirmation outcomes (ok, not_found, cancelled)
    confirm_outcomes: dict[str, int] = field(default_factory=dict)

    # Latency samples for /v1/command (in milliseconds)
    command_latencies: list[float] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock)

    def record_parse(self, command_type: str | None) -> None:
        """Record one parse result; None counts as a no-match."""
        key = command_type or NO_MATCH
        with self._lock:
            self.parse_counts[key] = self.parse_counts.get(key, 0) + 1

    def record_disposition(self, disposition: str, latency_ms: float | None = None) -> None:
        with self._lock:
            self.disposition_counts[disposition] = self.disposition_counts.get(disposition, 0) + 1
            if latency_ms is not None:
                self.command_latencies.append(latency_ms)

    def record_dispatch(self, command_type: str, ok: bool) -> None:
        outcome = "ok" if ok else "error"
        with self._lock:
            counts = self.dispatch_outcomes.setdefault(command_type, {})
            counts[outcome] = counts.get(outcome, 0) + 1

    def record_confirmation(self, outcome: str) -> None:
        """Record metrics for a confirmation request.

        Args:
            outcome: Outcome of confirmation (ok, not_found, cancelled)
        """
        with self._lock:
            self.confirm_outcomes[outcome] = self.confirm_outcomes.get(outcome, 0) + 1

    def _calculate_percentile(self, sorted_values: list[float], percentile: float) -> float | None:
        if not sorted_values:
            return None

        n = len(sorted_values)
        idx = int(n * percentile)
        return sorted_values[min(idx, n - 1)]

    def get_snapshot(self) -> dict[str, Any]:
        """Get a snapshot of current metrics.

        Returns:
            Dictionary with all metrics including latency percentiles.
        """
        with self._lock:
            sorted_latencies = sorted(self.command_latencies)
            return {
                "parse_counts": dict(self.parse_counts),
                "disposition_counts": dict(self.disposition_counts),
                "dispatch_outcomes": {k: dict(v) for k, v in self.dispatch_outcomes.items()},
                "confirm_outcomes": dict(self.confirm_outcomes),
                "command_latency_ms": {
                    "p50": self._calculate_percentile(sorted_latencies, 0.5),
                    "p95": self._calculate_percentile(sorted_latencies, 0.95),
                    "count": len(sorted_latencies),
                },
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self.parse_counts.clear()
            self.disposition_counts.clear()
            self.dispatch_outcomes.clear()
            self.confirm_outcomes.clear()
            self.command_latencies.clear()


# Global metrics collector instance
_metrics_collector: MetricsCollector | None = None
_metrics_lock = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Get or create the global metrics collector instance."""
    global _metrics_collector
    with _metrics_lock:
        if _metrics_collector is None:
            _metrics_collector = MetricsCollector()
        return _metrics_collector


def is_metrics_enabled() -> bool:
    """Check if the metrics endpoint is enabled via environment variable.

    Returns:
        True if VOICECOMMANDS_ENABLE_METRICS=true, False otherwise.
    """
    return os.getenv("VOICECOMMANDS_ENABLE_METRICS", "false").lower() in ("true", "1", "yes")
