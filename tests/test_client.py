"""FundraisingClient / FundraisingEndpoints tests against httpx.MockTransport."""

import asyncio

import httpx
import pytest

from pledgeline.connectors.fundraising.client import FundraisingAPIError, FundraisingClient
from pledgeline.connectors.fundraising.endpoints import FundraisingEndpoints
from pledgeline.models.donation_models import DonationQuery


def _endpoints(handler) -> FundraisingEndpoints:
    client = FundraisingClient(
        api_key="secret",
        base_url="https://api.test/v1/",
        transport=httpx.MockTransport(handler),
    )
    return FundraisingEndpoints(client)


def _call(endpoints: FundraisingEndpoints, coro_factory):
    async def run():
        try:
            return await coro_factory(endpoints)
        finally:
            await endpoints.close()

    return asyncio.run(run())


def test_fetch_donations_sends_query_and_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"amount": 100, "subscriptionUuid": "s"}]})

    envelope = _call(
        _endpoints(handler),
        lambda e: e.fetch_donations(DonationQuery(profile_uuid="prof-1")),
    )

    [request] = seen
    assert request.url.path == "/v1/donations"
    assert request.url.params["profile"] == "prof-1"
    assert request.url.params["subscriptionStatus"] == "active"
    assert request.url.params["limit"] == "1000"
    assert request.headers["Authorization"] == "Bearer secret"
    assert envelope == {
        "status": 200,
        "data": {"data": [{"amount": 100, "subscriptionUuid": "s"}]},
    }


def test_fetch_profile_hits_profile_path():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/profiles/prof-9"
        return httpx.Response(200, json={"data": {"public": {"monthlyHubFundraisingGoal": 10}}})

    envelope = _call(_endpoints(handler), lambda e: e.fetch_profile("prof-9"))
    assert envelope["data"]["data"]["public"]["monthlyHubFundraisingGoal"] == 10


def test_fetch_profile_escapes_identifier():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {}})

    _call(_endpoints(handler), lambda e: e.fetch_profile("../donations?x=1"))

    [request] = seen
    assert request.url.raw_path.startswith(b"/v1/profiles/")
    assert b"donations" in request.url.raw_path
    assert request.url.path.startswith("/v1/profiles/")
    assert not request.url.params


def test_non_json_body_gives_empty_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    envelope = _call(_endpoints(handler), lambda e: e.fetch_profile("prof-1"))
    assert envelope == {"status": 200, "data": None}


def test_http_error_uses_api_message():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(
            403, json={"error": {"message": "Profile is private", "code": "forbidden"}}
        )

    with pytest.raises(FundraisingAPIError) as exc_info:
        _call(_endpoints(handler), lambda e: e.fetch_profile("prof-1"))

    assert str(exc_info.value) == "Profile is private"
    assert exc_info.value.status_code == 403
    assert exc_info.value.error_code == "forbidden"
    assert len(calls) == 1


def test_server_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    with pytest.raises(FundraisingAPIError) as exc_info:
        _call(
            _endpoints(handler),
            lambda e: e.fetch_donations(DonationQuery(profile_uuid="prof-1")),
        )

    assert exc_info.value.status_code == 503
    assert len(calls) == 1


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FundraisingAPIError, match="Connection failed"):
        _call(_endpoints(handler), lambda e: e.fetch_profile("prof-1"))
