"""
Unit tests for ResilientHTTPTransport retry and rate limiting.

The parent transport's network call is replaced so no socket is opened.
"""
from typing import List, Union

import httpx
import pytest

from apiclients.sources.client.http.resilient_transport import ResilientHTTPTransport

Outcome = Union[httpx.Response, Exception]


class CountingLimiter:
    """Stands in for an AsyncLimiter and counts acquisitions"""

    def __init__(self) -> None:
        self.acquired = 0

    async def acquire(self) -> None:
        self.acquired += 1


@pytest.fixture
def network(monkeypatch):
    """Replace the real network call with a list of outcomes, consumed in order."""
    outcomes: List[Outcome] = []
    calls: List[httpx.Request] = []

    async def fake_handle(self, request):
        calls.append(request)
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(httpx.AsyncHTTPTransport, "handle_async_request", fake_handle)
    return outcomes, calls


def _request() -> httpx.Request:
    return httpx.Request("GET", "https://api.example.com/items")


def _transport(**kwargs) -> ResilientHTTPTransport:
    kwargs.setdefault("base_delay", 0.0)
    kwargs.setdefault("max_delay", 0.0)
    return ResilientHTTPTransport(**kwargs)


@pytest.mark.unit
class TestValidation:

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"base_delay": -0.5},
            {"max_delay": -1},
            {"base_delay": 5.0, "max_delay": 1.0},
        ],
    )
    def test_invalid_settings_are_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ResilientHTTPTransport(**kwargs)


@pytest.mark.unit
class TestRetry:
    """Retry on throttling, server errors and network failures."""

    @pytest.mark.asyncio
    async def test_success_is_returned_immediately(self, network):
        outcomes, calls = network
        outcomes.append(httpx.Response(200))

        response = await _transport(max_retries=3).handle_async_request(_request())

        assert response.status_code == 200
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_retryable_status_is_retried(self, network):
        outcomes, calls = network
        outcomes.extend([httpx.Response(429), httpx.Response(503), httpx.Response(200)])

        response = await _transport(max_retries=3).handle_async_request(_request())

        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self, network):
        outcomes, calls = network
        outcomes.extend([httpx.Response(404), httpx.Response(200)])

        response = await _transport(max_retries=3).handle_async_request(_request())

        assert response.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_last_response_returned_when_retries_exhausted(self, network):
        outcomes, calls = network
        outcomes.extend([httpx.Response(500), httpx.Response(502), httpx.Response(503)])

        response = await _transport(max_retries=2).handle_async_request(_request())

        assert response.status_code == 503
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_network_error_is_retried(self, network):
        outcomes, calls = network
        outcomes.extend([httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), httpx.Response(200)])

        response = await _transport(max_retries=2).handle_async_request(_request())

        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_network_error_reraised_after_last_attempt(self, network):
        outcomes, calls = network
        outcomes.extend([httpx.ConnectError("refused"), httpx.ConnectError("refused")])

        with pytest.raises(httpx.ConnectError):
            await _transport(max_retries=1).handle_async_request(_request())
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self, network):
        outcomes, calls = network
        outcomes.append(httpx.Response(503))

        response = await _transport(max_retries=0).handle_async_request(_request())

        assert response.status_code == 503
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_rate_limiter_acquired_once_per_logical_request(self, network):
        outcomes, _ = network
        outcomes.extend([httpx.Response(429), httpx.Response(200)])
        limiter = CountingLimiter()

        await _transport(max_retries=2, rate_limiter=limiter).handle_async_request(_request())

        assert limiter.acquired == 1


@pytest.mark.unit
class TestDelay:

    def test_numeric_retry_after_wins(self):
        transport = ResilientHTTPTransport(base_delay=1.0, max_delay=2.0)
        response = httpx.Response(429, headers={"Retry-After": "7"})
        assert transport._calculate_delay(response, 0) == 7.0

    def test_http_date_retry_after_falls_back_to_backoff(self):
        transport = ResilientHTTPTransport(base_delay=1.0, max_delay=4.0)
        response = httpx.Response(503, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})
        assert 0.0 <= transport._calculate_delay(response, 1) <= 2.0

    def test_backoff_is_capped(self):
        transport = ResilientHTTPTransport(base_delay=1.0, max_delay=4.0)
        for attempt in range(10):
            assert 0.0 <= transport._calculate_delay(None, attempt) <= 4.0
