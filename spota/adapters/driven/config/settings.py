"""Scheduler endpoint configuration from the environment and arguments."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

__all__ = ["DEFAULT_SCHEDULER_URL", "SCHEDULER_URL_ENV", "Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

SCHEDULER_URL_ENV = "SPOTA_SCHEDULER_URL"
DEFAULT_SCHEDULER_URL = "http://localhost:3001/api/scheduler"


class Settings(BaseModel):
    """Resolved configuration for one Spota client.

    Attributes:
        scheduler_api_url: Endpoint receiving scheduling envelopes.
    """

    scheduler_api_url: str = Field(
        default=DEFAULT_SCHEDULER_URL,
        description="HTTP endpoint of the external scheduler service.",
    )

    @field_validator("scheduler_api_url")
    @classmethod
    def validate_scheduler_api_url(cls, v: str) -> str:
        """Validate that the endpoint is a valid HTTP(S) URL.

        Args:
            v: Endpoint URL to validate.

        Returns:
            The URL, unchanged.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// endpoints allowed")
        except Exception as e:
            raise ValueError(f"Invalid scheduler endpoint: {e}") from e
        return v


def load_settings(scheduler_api_url: str | None = None) -> Settings:
    """Resolve the scheduler endpoint.

    Order: SPOTA_SCHEDULER_URL (when non-empty), then the explicit
    argument, then DEFAULT_SCHEDULER_URL.

    Args:
        scheduler_api_url: Endpoint passed by the caller, if any.

    Returns:
        Validated Settings object.

    Raises:
        ValueError: If the resolved endpoint is invalid.
    """
    env_url = os.getenv(SCHEDULER_URL_ENV)
    if env_url:
        source = SCHEDULER_URL_ENV
        resolved = env_url
    elif scheduler_api_url:
        source = "argument"
        resolved = scheduler_api_url
    else:
        source = "default"
        resolved = DEFAULT_SCHEDULER_URL

    settings = Settings(scheduler_api_url=resolved)
    logger.debug(f"Scheduler endpoint: {settings.scheduler_api_url} (from {source})")
    return settings
