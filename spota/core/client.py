"""Spota client: one request builder per HTTP verb."""

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

from spota.adapters.driven.config.settings import load_settings
from spota.adapters.driven.http.client import HttpClient
from spota.core.errors import MissingUrlError
from spota.core.recurrence import normalize_rule
from spota.core.request import SpotaRequest
from spota.ports.http import RequestMethod, RequestPayload, TransportPort
from spota.ports.metrics import MetricsPort
from spota.ports.schedule import RecurrenceRule, Rule

__all__ = ["Spota"]

logger = logging.getLogger(__name__)

# Option keys consumed by the builder; everything else is forwarded as-is
_NAMED_OPTIONS = frozenset({"data", "headers", "url", "method"})


class Spota:
    """Factory for SpotaRequest objects bound to a scheduler endpoint.

    The endpoint is resolved once, at construction: SPOTA_SCHEDULER_URL,
    then the scheduler_api_url argument, then the built-in default.

    Example:
        async with Spota() as client:
            await client.get("https://example.com").execute()
            await client.post("https://example.com/hook", {"x": 1}).schedule(
                {"rule": "0 0 * * *"}
            )
    """

    def __init__(
        self,
        scheduler_api_url: str | None = None,
        *,
        transport: TransportPort | None = None,
        metrics: MetricsPort | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            scheduler_api_url: Scheduler endpoint, unless overridden by
                the environment.
            transport: HTTP transport; defaults to an aiohttp HttpClient.
            metrics: Metrics collector for the default transport.

        Raises:
            ValueError: If the resolved endpoint is not a valid http(s) URL.
        """
        self.scheduler_api_url = load_settings(scheduler_api_url).scheduler_api_url
        self.transport: TransportPort = transport or HttpClient(metrics=metrics)

    async def __aenter__(self) -> "Spota":
        """Open a session shared by every request made through this client."""
        if isinstance(self.transport, HttpClient):
            await self.transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the shared session."""
        if isinstance(self.transport, HttpClient):
            await self.transport.__aexit__(exc_type, exc, tb)

    @staticmethod
    def reoccurence(
        rule_info: str | Mapping[str, Any] | RecurrenceRule,
        *,
        keep_zero: bool = False,
    ) -> Rule:
        """Build a recurrence rule for schedule().

        Cron strings pass through unchanged. Structured input keeps only
        truthy fields unless keep_zero is set, so {"hour": 0} means
        "every hour" by default. See normalize_rule().
        """
        return normalize_rule(rule_info, keep_zero=keep_zero)

    def _build(
        self,
        method: RequestMethod,
        url: str,
        data: Any = None,
        options: Mapping[str, Any] | None = None,
        *,
        has_body: bool = False,
    ) -> SpotaRequest:
        """Create a fresh builder for one request.

        Raises:
            MissingUrlError: If url is empty.
        """
        if not url:
            raise MissingUrlError("URL is required")

        options = options or {}
        body = None
        if has_body:
            body = options["data"] if options.get("data") is not None else data

        payload = RequestPayload(
            method=method.value,
            url=url,
            data=body,
            headers=dict(options.get("headers") or {}),
            extra={k: v for k, v in options.items() if k not in _NAMED_OPTIONS},
        )
        logger.debug(f"Built {method.value} request for {url}")
        return SpotaRequest(payload, self.scheduler_api_url, self.transport)

    def get(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """GET request builder. Any body is ignored."""
        return self._build(RequestMethod.GET, url, data, options)

    def post(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """POST request builder. options["data"] wins over data."""
        return self._build(RequestMethod.POST, url, data, options, has_body=True)

    def put(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """PUT request builder. options["data"] wins over data."""
        return self._build(RequestMethod.PUT, url, data, options, has_body=True)

    def patch(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """PATCH request builder. options["data"] wins over data."""
        return self._build(RequestMethod.PATCH, url, data, options, has_body=True)

    def delete(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """DELETE request builder. options["data"] wins over data."""
        return self._build(RequestMethod.DELETE, url, data, options, has_body=True)

    def head(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """HEAD request builder. Any body is ignored."""
        return self._build(RequestMethod.HEAD, url, data, options)

    def options(
        self, url: str, data: Any = None, options: Mapping[str, Any] | None = None
    ) -> SpotaRequest:
        """OPTIONS request builder. Any body is ignored."""
        return self._build(RequestMethod.OPTIONS, url, data, options)
