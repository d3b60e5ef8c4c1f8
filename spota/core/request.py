"""Request builder: run a request now or hand it to the scheduler."""

import logging
from collections.abc import Mapping
from typing import Any

from spota.core.errors import (
    ImmediateRequestError,
    InvalidMethodError,
    InvalidRequestError,
    ScheduleRequestError,
)
from spota.ports.http import (
    HttpResponse,
    RequestMethod,
    RequestPayload,
    TransportError,
    TransportPort,
)
from spota.ports.schedule import ScheduleConfig, SchedulingEnvelope

__all__ = ["SpotaRequest"]

logger = logging.getLogger(__name__)


class SpotaRequest:
    """One pending HTTP request.

    Construction never validates or fails; the payload is checked when
    schedule() or execute() runs. Each run makes exactly one outbound
    call: to the request's own URL, or to the scheduler endpoint.
    """

    def __init__(
        self,
        payload: RequestPayload,
        scheduler_api_url: str,
        transport: TransportPort,
    ) -> None:
        """Initialize the builder.

        Args:
            payload: Request to run.
            scheduler_api_url: Endpoint receiving scheduling envelopes.
            transport: HTTP transport performing the call.
        """
        self._payload = payload
        self._scheduler_api_url = scheduler_api_url
        self._transport = transport

    @property
    def payload(self) -> RequestPayload:
        return self._payload

    @property
    def scheduler_api_url(self) -> str:
        return self._scheduler_api_url

    def __repr__(self) -> str:
        return f"SpotaRequest({self._payload.method} {self._payload.url!r})"

    def _validate(self) -> None:
        """Check the payload before any network call.

        Raises:
            InvalidRequestError: If the URL is empty.
            InvalidMethodError: If the method is not supported.
        """
        if not self._payload.url:
            raise InvalidRequestError("Request URL is required")
        if not RequestMethod.is_valid(self._payload.method):
            raise InvalidMethodError(f"Invalid HTTP method: {self._payload.method}")

    async def schedule(
        self,
        config: ScheduleConfig | Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """Run the request now, or forward it to the scheduler.

        Without a rule the request is sent directly. With one, a scheduling
        envelope (rule, request, callbackUrl) is POSTed to the scheduler
        endpoint. Either way the transport response is returned unchanged.

        Args:
            config: ScheduleConfig, or a mapping with "rule" and
                "callbackUrl" keys.

        Returns:
            Response of the request itself, or of the scheduler.

        Raises:
            InvalidRequestError: If the URL is empty.
            InvalidMethodError: If the method is not supported.
            ImmediateRequestError: If the direct call failed.
            ScheduleRequestError: If the scheduler call failed.
        """
        self._validate()
        config = ScheduleConfig.coerce(config)

        if not config.rule:
            return await self._send_now()

        envelope = SchedulingEnvelope(
            rule=config.rule,
            request=self._payload,
            callback_url=config.callback_url,
        )
        logger.info(f"Scheduling {self!r} via {self._scheduler_api_url}")
        try:
            return await self._transport.post(self._scheduler_api_url, envelope.to_json())
        except TransportError as e:
            raise ScheduleRequestError(f"Failed to schedule request: {e}") from e

    async def execute(self) -> HttpResponse:
        """Send the request immediately; same as schedule() without a rule."""
        return await self.schedule(ScheduleConfig())

    async def _send_now(self) -> HttpResponse:
        payload = self._payload
        logger.info(f"Sending {self!r} now")
        try:
            return await self._transport.request(
                payload.method,
                payload.url,
                headers=payload.headers,
                data=payload.data,
                **payload.extra,
            )
        except TransportError as e:
            raise ImmediateRequestError(f"Immediate request failed: {e}") from e
