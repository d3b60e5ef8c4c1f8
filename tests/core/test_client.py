"""Tests for the Spota client."""

from unittest.mock import Mock

import pytest

from spota.adapters.driven.config.settings import DEFAULT_SCHEDULER_URL, SCHEDULER_URL_ENV
from spota.adapters.driven.http.client import HttpClient
from spota.core.client import Spota
from spota.core.errors import InvalidRequestError, MissingUrlError
from spota.core.request import SpotaRequest
from spota.ports.http import RequestMethod
from spota.ports.schedule import RecurrenceRule

__all__ = []

VERBS = {
    "get": RequestMethod.GET,
    "post": RequestMethod.POST,
    "put": RequestMethod.PUT,
    "patch": RequestMethod.PATCH,
    "delete": RequestMethod.DELETE,
    "head": RequestMethod.HEAD,
    "options": RequestMethod.OPTIONS,
}
BODY_VERBS = ("post", "put", "patch", "delete")
BODYLESS_VERBS = ("get", "head", "options")


@pytest.fixture
def client(transport: Mock) -> Spota:
    return Spota("http://scheduler.test/api", transport=transport)


@pytest.mark.asyncio
@pytest.mark.parametrize("verb", VERBS)
async def test_every_verb_executes_once(client: Spota, transport: Mock, verb: str) -> None:
    """Each verb should produce one transport call with its method and URL."""
    await getattr(client, verb)("http://target.test/x").execute()

    transport.request.assert_awaited_once()
    args, _ = transport.request.call_args
    assert args == (VERBS[verb].value, "http://target.test/x")


@pytest.mark.parametrize("verb", VERBS)
def test_verbs_require_url(client: Spota, verb: str) -> None:
    """Verb methods should reject an empty URL."""
    with pytest.raises(MissingUrlError, match="URL is required"):
        getattr(client, verb)("")


@pytest.mark.parametrize("verb", BODY_VERBS)
def test_option_body_wins_over_positional(client: Spota, verb: str) -> None:
    """options["data"] should override the positional body."""
    req = getattr(client, verb)("http://target.test/", {"a": 1}, {"data": {"b": 2}})

    assert req.payload.data == {"b": 2}


@pytest.mark.parametrize("verb", BODY_VERBS)
def test_positional_body_used_without_option_body(client: Spota, verb: str) -> None:
    """The positional body should be used when options carry none."""
    req = getattr(client, verb)("http://target.test/", "raw")

    assert req.payload.data == "raw"
    assert req.payload.to_dict()["data"] == "raw"


@pytest.mark.parametrize("verb", BODY_VERBS)
def test_body_verb_without_body_has_no_data_field(client: Spota, verb: str) -> None:
    """No body given means no data key at all."""
    req = getattr(client, verb)("http://target.test/")

    assert req.payload.data is None
    assert "data" not in req.payload.to_dict()


@pytest.mark.parametrize("verb", BODYLESS_VERBS)
def test_bodyless_verbs_drop_body(client: Spota, verb: str) -> None:
    """GET, HEAD and OPTIONS should never carry a body."""
    req = getattr(client, verb)("http://target.test/", {"a": 1}, {"data": {"b": 2}})

    assert req.payload.data is None
    assert "data" not in req.payload.to_dict()


def test_headers_and_extra_options(client: Spota) -> None:
    """Headers come from options; other keys are forwarded untouched."""
    req = client.get(
        "http://target.test/",
        options={"headers": {"Accept": "text/plain"}, "params": {"q": "1"}, "url": "ignored"},
    )

    assert req.payload.headers == {"Accept": "text/plain"}
    assert req.payload.extra == {"params": {"q": "1"}}
    assert req.payload.url == "http://target.test/"


def test_headers_default_to_empty(client: Spota) -> None:
    req = client.post("http://target.test/")

    assert req.payload.headers == {}


def test_each_call_returns_new_builder(client: Spota) -> None:
    first = client.get("http://target.test/")
    second = client.get("http://target.test/")

    assert isinstance(first, SpotaRequest)
    assert first is not second
    assert first.payload is not second.payload


@pytest.mark.asyncio
async def test_empty_url_payload_fails_at_run_time(client: Spota, transport: Mock) -> None:
    """A builder whose URL was cleared should fail on execute, not before."""
    req = client.get("http://target.test/")
    req.payload.url = ""

    with pytest.raises(InvalidRequestError):
        await req.execute()

    transport.request.assert_not_called()


@pytest.mark.asyncio
async def test_schedule_posts_to_configured_endpoint(client: Spota, transport: Mock) -> None:
    rule = Spota.reoccurence({"hour": 9, "minute": 30})

    await client.put("http://target.test/r", {"v": 1}).schedule({"rule": rule})

    transport.request.assert_not_called()
    (url, body), _ = transport.post.call_args
    assert url == "http://scheduler.test/api"
    assert body == {
        "rule": {"hour": 9, "minute": 30},
        "request": {
            "url": "http://target.test/r",
            "method": "PUT",
            "headers": {},
            "data": {"v": 1},
        },
    }


def test_default_endpoint(transport: Mock) -> None:
    assert Spota(transport=transport).scheduler_api_url == DEFAULT_SCHEDULER_URL


@pytest.mark.asyncio
async def test_env_overrides_constructor_argument(
    monkeypatch: pytest.MonkeyPatch, transport: Mock
) -> None:
    """SPOTA_SCHEDULER_URL should win over the explicit argument."""
    monkeypatch.setenv(SCHEDULER_URL_ENV, "http://env.test/scheduler")
    client = Spota("http://arg.test/scheduler", transport=transport)

    await client.get("http://target.test/").schedule({"rule": "0 0 * * *"})

    assert client.scheduler_api_url == "http://env.test/scheduler"
    assert transport.post.call_args.args[0] == "http://env.test/scheduler"


def test_endpoint_is_resolved_once(monkeypatch: pytest.MonkeyPatch, transport: Mock) -> None:
    """Changing the environment later should not affect an existing client."""
    client = Spota("http://arg.test/scheduler", transport=transport)
    monkeypatch.setenv(SCHEDULER_URL_ENV, "http://env.test/scheduler")

    req = client.get("http://target.test/")

    assert req.scheduler_api_url == "http://arg.test/scheduler"


def test_invalid_endpoint_is_rejected(transport: Mock) -> None:
    with pytest.raises(ValueError, match="Invalid scheduler endpoint"):
        Spota("ftp://scheduler.test/", transport=transport)


def test_reoccurence_passes_strings_through() -> None:
    assert Spota.reoccurence("0 0 * * *") == "0 0 * * *"


def test_reoccurence_drops_zero_fields() -> None:
    """0 is falsy, so hour/minute/second all stay unset."""
    rule = Spota.reoccurence({"hour": 0, "minute": 0, "second": 0})

    assert rule == RecurrenceRule()
    assert rule.to_dict() == {}


def test_reoccurence_copies_set_fields() -> None:
    rule = Spota.reoccurence({"hour": 9, "minute": 30})

    assert rule == RecurrenceRule(hour=9, minute=30)


@pytest.mark.asyncio
async def test_default_transport_is_http_client() -> None:
    """Spota should build an HttpClient and share its session in a context."""
    client = Spota()
    assert isinstance(client.transport, HttpClient)

    async with client as c:
        assert c is client
        assert client.transport.session is not None

    assert client.transport.session is None
