"""HTTP port definitions (DTOs and transport interface)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

__all__ = ["HttpResponse", "RequestMethod", "RequestPayload", "TransportError", "TransportPort"]


class RequestMethod(str, Enum):
    """HTTP methods accepted by the request builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Return True if value names one of the supported methods."""
        return isinstance(value, str) and value in cls._value2member_map_


@dataclass
class RequestPayload:
    """One HTTP request, to be executed now or by the scheduler later.

    Nothing is validated here; url and method are checked when the request
    is run.

    Attributes:
        method: HTTP method, expected to be a RequestMethod value.
        url: Target URL.
        data: Request body. None means the request carries no body.
        headers: Header name to value mapping.
        extra: Additional transport options, forwarded verbatim.
    """

    method: str
    url: str
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form of the payload.

        Extra options are merged first so the named fields always win.

        Returns:
            JSON-ready dictionary, without a "data" key when there is no body.
        """
        wire: dict[str, Any] = {
            **self.extra,
            "url": self.url,
            "method": self.method,
            "headers": dict(self.headers),
        }
        if self.data is not None:
            wire["data"] = self.data
        return wire


@dataclass(slots=True, frozen=True)
class HttpResponse:
    """Response returned by the transport, passed to callers unchanged.

    Attributes:
        status: HTTP status code.
        headers: Response headers; a case-insensitive multidict when built
            by HttpClient, so repeated headers are kept.
        data: Decoded JSON body when the response is JSON, text otherwise.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None


class TransportError(Exception):
    """Raised by a transport when a call fails (network error or non-2xx)."""


class TransportPort(Protocol):
    """Interface for the HTTP transport used by the request builder."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: Any = None,
        **extra: Any,
    ) -> HttpResponse:
        """Send one HTTP request.

        Raises:
            TransportError: If the call fails.
        """
        ...

    async def post(self, url: str, json: Any) -> HttpResponse:
        """POST a JSON body.

        Raises:
            TransportError: If the call fails.
        """
        ...
