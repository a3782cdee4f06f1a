"""
Unit tests for HTTPClient request execution against a scripted transport.
"""
import json

import httpx
import pytest
from aiolimiter import AsyncLimiter

from apiclients.sources.client.http.exceptions import DecodeError, HTTPClientError, TransportError
from apiclients.sources.client.http.http_client import HTTPClient
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.resilient_transport import ResilientHTTPTransport
from tests.fixtures.http_fixtures import json_response


@pytest.mark.unit
class TestHTTPClientExecute:
    """Header, body and error handling of a single execute call."""

    @pytest.mark.asyncio
    async def test_authorization_header_is_sent(self, scripted_client):
        client, transport = scripted_client([json_response({"ok": True})], token="secret")

        response = await client.execute(HTTPRequest(url="https://api.example.com/items"))

        assert response.status == 200
        assert transport.requests[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_request_headers_override_client_headers(self, scripted_client):
        client, transport = scripted_client([json_response({})])
        client.headers["Accept"] = "application/json"

        await client.execute(HTTPRequest(url="https://api.example.com/log", headers={"Accept": "text/plain"}))

        assert transport.requests[0].headers["Accept"] == "text/plain"

    @pytest.mark.asyncio
    async def test_path_and_query_are_applied(self, scripted_client):
        client, transport = scripted_client([json_response({})])
        request = HTTPRequest(
            url="https://api.example.com/accounts/{accountId}/folders",
            path_params={"accountId": "a/1"},
            query_params={"include_items": "true", "start_position": "0"},
        )

        await client.execute(request)

        sent = transport.requests[0]
        assert sent.url.raw_path.startswith(b"/accounts/a%2F1/folders")
        assert transport.query(0) == {"include_items": "true", "start_position": "0"}

    @pytest.mark.asyncio
    async def test_dict_body_is_sent_as_json(self, scripted_client):
        client, transport = scripted_client([json_response({}, status_code=201)])
        request = HTTPRequest(url="https://api.example.com/teammates", method="POST", body={"email": "a@b.c"})

        await client.execute(request)

        assert transport.requests[0].method == "POST"
        assert transport.body(0) == {"email": "a@b.c"}
        assert transport.requests[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_form_body_is_urlencoded(self, scripted_client):
        client, transport = scripted_client([json_response({})])
        request = HTTPRequest(
            url="https://api.example.com/token",
            method="POST",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            body={"grant_type": "client_credentials"},
        )

        await client.execute(request)

        assert transport.requests[0].content == b"grant_type=client_credentials"

    @pytest.mark.asyncio
    async def test_bytes_body_is_sent_raw(self, scripted_client):
        client, transport = scripted_client([json_response({})])

        await client.execute(HTTPRequest(url="https://api.example.com/upload", method="PUT", body=b"\x00\x01"))

        assert transport.requests[0].content == b"\x00\x01"

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self, scripted_client):
        client, _ = scripted_client([json_response({"message": "nope"}, status_code=404)])

        response = await client.execute(HTTPRequest(url="https://api.example.com/missing"))

        assert response.status == 404
        assert response.is_success is False
        assert response.json() == {"message": "nope"}

    @pytest.mark.asyncio
    async def test_network_failure_becomes_transport_error(self, scripted_client):
        client, _ = scripted_client([httpx.ConnectError("connection refused")])

        with pytest.raises(TransportError) as exc_info:
            await client.execute(HTTPRequest(url="https://api.example.com/items"))

        assert exc_info.value.method == "GET"
        assert exc_info.value.url == "https://api.example.com/items"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_corrupt_gzip_body_becomes_decode_error(self, scripted_client):
        client, _ = scripted_client([
            httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not-gzip-at-all"))
        ])

        with pytest.raises(DecodeError) as exc_info:
            await client.execute(HTTPRequest(url="https://api.example.com/items"))

        assert isinstance(exc_info.value, HTTPClientError)
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_redirect_loop_becomes_transport_error(self, scripted_client):
        def redirect_to_self(request):
            return httpx.Response(302, headers={"Location": str(request.url)})

        client, _ = scripted_client([redirect_to_self] * 25)

        with pytest.raises(TransportError) as exc_info:
            await client.execute(HTTPRequest(url="https://api.example.com/loop"))

        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)
        assert exc_info.value.url == "https://api.example.com/loop"

    @pytest.mark.asyncio
    async def test_response_exposes_link_header(self, scripted_client):
        client, _ = scripted_client([
            json_response([], headers={"Link": '<https://api.example.com/items?page=2>; rel="next"'})
        ])

        response = await client.execute(HTTPRequest(url="https://api.example.com/items"))

        assert response.links["next"]["url"] == "https://api.example.com/items?page=2"
        assert response.url == "https://api.example.com/items"
        assert json.loads(response.text()) == []


@pytest.mark.unit
class TestHTTPClientLifecycle:

    def test_get_client_returns_self(self):
        client = HTTPClient(token="t")
        assert client.get_client() is client

    def test_custom_token_type(self):
        client = HTTPClient(token="t", token_type="Token")
        assert client.headers["Authorization"] == "Token t"

    def test_retries_enable_default_rate_limiter(self):
        client = HTTPClient(token="t", max_retries=2)
        assert isinstance(client.rate_limiter, AsyncLimiter)
        assert isinstance(client._build_transport(), ResilientHTTPTransport)

    def test_no_resilience_means_default_transport(self):
        client = HTTPClient(token="t")
        assert client.rate_limiter is None
        assert client._build_transport() is None

    def test_explicit_transport_wins(self, scripted_transport):
        transport = scripted_transport([])
        client = HTTPClient(token="t", max_retries=3, transport=transport)
        assert client._build_transport() is transport

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self, scripted_transport):
        transport = scripted_transport([json_response({})])
        async with HTTPClient(token="t", transport=transport) as client:
            assert client.client is not None
            await client.execute(HTTPRequest(url="https://api.example.com/ping"))
        assert client.client is None

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = HTTPClient(token="t")
        await client.close()
        await client.close()
        assert client.client is None
