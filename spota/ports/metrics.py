"""Per-call transport measurements and the port that receives them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["HttpAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class HttpAttemptDto:
    """Immutable snapshot of a single transport call.

    Attributes:
        started_at_sec: Monotonic time when the request left the process.
        finished_at_sec: Monotonic time when the call resolved or failed.
        is_failed: True on network error or non-2xx status.
        status_code: HTTP status code when a response arrived; None otherwise.
        method: HTTP method of the call, when known.
    """

    started_at_sec: float
    finished_at_sec: float
    is_failed: bool = False
    status_code: int | None = None
    method: str | None = None


class MetricsPort(Protocol):
    """Sink for per-call measurements reported by HttpClient."""

    def update(self, attempt: HttpAttemptDto, /) -> None: ...

    def __str__(self) -> str: ...
