"""Shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from spota.adapters.driven.config.settings import SCHEDULER_URL_ENV
from spota.ports.http import HttpResponse

__all__ = []


@pytest.fixture(autouse=True)
def clear_scheduler_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SPOTA_SCHEDULER_URL from leaking into tests."""
    monkeypatch.delenv(SCHEDULER_URL_ENV, raising=False)


@pytest.fixture
def transport() -> Mock:
    """Transport double recording request() and post() calls."""
    fake = Mock()
    fake.request = AsyncMock(return_value=HttpResponse(status=200, data="direct"))
    fake.post = AsyncMock(return_value=HttpResponse(status=201, data={"id": "job-1"}))
    return fake
