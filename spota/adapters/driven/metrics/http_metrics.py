"""In-memory sliding-window metrics for transport calls."""

from __future__ import annotations

import statistics
from collections import Counter, deque
from dataclasses import dataclass

from spota.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["Metrics"]

UNKNOWN_METHOD = "?"


@dataclass(slots=True, frozen=True)
class _Call:
    latency_ms: float
    failed: bool
    status_code: int
    method: str


class Metrics(MetricsPort):
    """Latency and failure statistics over the most recent calls.

    The summary reports mean and worst latency, the failure rate, the
    last status seen (0 when the call got no response) and how the
    window splits across HTTP methods. Totals survive window eviction.

    Not thread-safe; create one instance per event loop.
    """

    def __init__(self, *, window_size: int = 100) -> None:
        self._calls: deque[_Call] = deque(maxlen=window_size)
        self._total_seen: int = 0
        self._total_failed: int = 0

    def update(self, attempt: HttpAttemptDto) -> None:
        """Record a finished call."""
        call = _Call(
            latency_ms=max(0.0, attempt.finished_at_sec - attempt.started_at_sec) * 1_000.0,
            failed=attempt.is_failed,
            status_code=attempt.status_code or 0,
            method=attempt.method or UNKNOWN_METHOD,
        )
        self._calls.append(call)
        self._total_seen += 1
        self._total_failed += call.failed

    @property
    def total_seen(self) -> int:
        """Number of calls recorded since creation."""
        return self._total_seen

    @property
    def total_failed(self) -> int:
        """Number of failed calls recorded since creation."""
        return self._total_failed

    def by_method(self) -> dict[str, int]:
        """Count calls in the current window per HTTP method."""
        return dict(Counter(c.method for c in self._calls))

    def __str__(self) -> str:
        if not self._calls:
            return "Metrics: waiting for data …"

        latencies = [c.latency_ms for c in self._calls]
        fail_pct = sum(c.failed for c in self._calls) / len(self._calls) * 100
        methods = ",".join(f"{m}:{n}" for m, n in sorted(self.by_method().items()))

        return (
            f"latency={statistics.fmean(latencies):5.1f} ms "
            f"(max {max(latencies):.1f}) | "
            f"status={self._calls[-1].status_code:3d} | "
            f"fail={fail_pct:5.1f}% | "
            f"methods={methods} | "
            f"win={len(self._calls)}/{self._calls.maxlen} | "
            f"total={self._total_seen} ({self._total_failed} failed)"
        )
