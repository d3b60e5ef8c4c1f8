"""Run HTTP requests now, or forward them to a scheduler service."""

from spota.adapters.driven.http.client import HttpClient
from spota.adapters.driven.logging.logging_config import configure_logs
from spota.adapters.driven.metrics.http_metrics import Metrics
from spota.core.client import Spota
from spota.core.errors import (
    ImmediateRequestError,
    InvalidMethodError,
    InvalidRequestError,
    MissingUrlError,
    ScheduleRequestError,
    SpotaError,
)
from spota.core.request import SpotaRequest
from spota.ports.http import HttpResponse, RequestMethod, RequestPayload, TransportError
from spota.ports.schedule import RecurrenceRule, ScheduleConfig, SchedulingEnvelope

__all__ = [
    "HttpClient",
    "HttpResponse",
    "ImmediateRequestError",
    "InvalidMethodError",
    "InvalidRequestError",
    "Metrics",
    "MissingUrlError",
    "RecurrenceRule",
    "RequestMethod",
    "RequestPayload",
    "ScheduleConfig",
    "ScheduleRequestError",
    "SchedulingEnvelope",
    "Spota",
    "SpotaError",
    "SpotaRequest",
    "TransportError",
    "configure_logs",
    "spota",
]

_default_client: Spota | None = None


def __getattr__(name: str) -> Spota:
    # Built on first access; importing the package never reads SPOTA_SCHEDULER_URL
    global _default_client
    if name != "spota":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _default_client is None:
        _default_client = Spota()
    return _default_client
