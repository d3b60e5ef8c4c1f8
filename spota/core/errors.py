"""Errors raised by the Spota client and request builder."""

__all__ = [
    "ImmediateRequestError",
    "InvalidMethodError",
    "InvalidRequestError",
    "MissingUrlError",
    "ScheduleRequestError",
    "SpotaError",
]


class SpotaError(Exception):
    """Base class for every error raised by this library."""


class MissingUrlError(SpotaError, ValueError):
    """A verb method was called without a URL."""


class InvalidRequestError(SpotaError, ValueError):
    """A request was run with an empty URL."""


class InvalidMethodError(SpotaError, ValueError):
    """A request was run with an unsupported HTTP method."""


class ImmediateRequestError(SpotaError, RuntimeError):
    """The direct HTTP call failed."""


class ScheduleRequestError(SpotaError, RuntimeError):
    """The POST to the scheduler endpoint failed."""
