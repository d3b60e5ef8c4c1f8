"""HTTP client adapter (transport collaborator) with metrics integration."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Any

import aiohttp
from aiohttp import ClientResponse
from multidict import CIMultiDict

from spota.ports.http import HttpResponse, TransportError
from spota.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
JSON_SUFFIX = "+json"

# Keyword arguments of aiohttp.ClientSession.request() callers may pass through
SESSION_REQUEST_OPTIONS = frozenset(
    {
        "params",
        "cookies",
        "skip_auto_headers",
        "auth",
        "allow_redirects",
        "max_redirects",
        "compress",
        "chunked",
        "expect100",
        "read_until_eof",
        "proxy",
        "proxy_auth",
        "timeout",
        "ssl",
        "server_hostname",
        "proxy_headers",
        "trace_request_ctx",
        "read_bufsize",
        "auto_decompress",
        "max_line_size",
        "max_field_size",
    }
)


class HttpClient:
    """aiohttp-backed transport used by Spota requests.

    Features:
    - Dict and list bodies are sent as JSON, anything else as raw data.
    - 4xx/5xx responses, connection errors and timeouts raise TransportError.
    - Optional metrics collection per call.
    - Context manager for a shared session; without one, each call
      opens and closes its own session.
    """

    def __init__(self, metrics: MetricsPort | None = None) -> None:
        """Initialize HTTP client.

        Args:
            metrics: Optional metrics collector to track calls.
        """
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()
            self.session = None

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Yield the shared session, or a one-off session outside a context."""
        if self.session is not None:
            yield self.session
            return
        async with aiohttp.ClientSession() as session:
            yield session

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

        Args:
            method: HTTP method.
            url: Target URL.
            headers: Request headers.
            data: Request body; None sends no body.
            **extra: Transport options. Keys aiohttp's request() accepts are
                passed through; any other key is dropped.

        Returns:
            Decoded response.

        Raises:
            TransportError: On network error, timeout or 4xx/5xx status.
        """
        kwargs: dict[str, Any] = {}
        for key, value in extra.items():
            if key in SESSION_REQUEST_OPTIONS:
                kwargs[key] = value
            else:
                logger.debug(f"Dropping unsupported transport option {key!r}")
        if headers:
            kwargs["headers"] = headers
        if isinstance(data, (dict, list)):
            kwargs["json"] = data
        elif data is not None:
            kwargs["data"] = data

        return await self._send(method, url, kwargs)

    async def post(self, url: str, json: Any) -> HttpResponse:
        """POST a JSON body.

        Args:
            url: Target URL.
            json: JSON-serializable body.

        Returns:
            Decoded response.

        Raises:
            TransportError: On network error, timeout or 4xx/5xx status.
        """
        return await self._send("POST", url, {"json": json})

    async def _send(self, method: str, url: str, kwargs: dict[str, Any]) -> HttpResponse:
        """Issue the call, decode the response and record metrics."""
        loop = asyncio.get_running_loop()
        started = loop.time()
        status: int | None = None
        failed = True

        logger.debug(f"{method} {url}")
        try:
            async with self._session_scope() as session:
                try:
                    resp = await session.request(method, url, **kwargs)
                except (TypeError, ValueError) as e:
                    raise TransportError(f"Invalid request options: {e}") from e
                try:
                    status = resp.status
                    resp.raise_for_status()
                    response = await self._decode(resp)
                finally:
                    resp.release()
            failed = False
            return response
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(str(e) or e.__class__.__name__) from e
        finally:
            if self.metrics:
                self.metrics.update(
                    HttpAttemptDto(
                        started_at_sec=started,
                        finished_at_sec=loop.time(),
                        is_failed=failed,
                        status_code=status,
                        method=method,
                    )
                )
                logger.info(f"HTTP metrics: {self.metrics}")

    @staticmethod
    async def _decode(resp: ClientResponse) -> HttpResponse:
        """Read the body: JSON when advertised as such, text otherwise.

        A JSON content type with an undecodable body falls back to text.
        Repeated headers (Set-Cookie) are all kept.
        """
        content_type = resp.content_type
        data: Any
        if content_type == JSON_CONTENT_TYPE or content_type.endswith(JSON_SUFFIX):
            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                logger.debug(f"Response advertised as {content_type} is not JSON: {e}")
                data = await resp.text()
        else:
            data = await resp.text()
        return HttpResponse(status=resp.status, headers=CIMultiDict(resp.headers), data=data)
