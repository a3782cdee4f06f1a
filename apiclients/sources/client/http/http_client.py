import logging
from typing import Any, Dict, Optional

import httpx  # type: ignore
from aiolimiter import AsyncLimiter

from apiclients.sources.client.http.exceptions import DecodeError, TransportError
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.http_response import HTTPResponse
from apiclients.sources.client.http.resilient_transport import ResilientHTTPTransport
from apiclients.sources.client.iclient import IClient

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _body_kwargs(request: HTTPRequest) -> Dict[str, Any]:
    """httpx keyword for the request body: form fields, JSON document or raw bytes"""
    if isinstance(request.body, bytes):
        return {"content": request.body}
    if isinstance(request.body, dict):
        if FORM_CONTENT_TYPE in request.headers.get("Content-Type", "").lower():
            return {"data": request.body}
        return {"json": request.body}
    return {}


class HTTPClient(IClient):
    """
    Authenticated async client that executes HTTPRequest descriptors.

    One logical call per execute(): retries and rate limiting, when enabled,
    happen inside ResilientHTTPTransport. A non-2xx status is handed back as a
    normal HTTPResponse; a call with no usable response raises TransportError or DecodeError.

    Args:
        token: Credential placed in the Authorization header
        token_type: Authorization scheme (default: "Bearer")
        timeout: Per-request timeout in seconds
        follow_redirects: Follow 3xx responses
        rate_limiter: AsyncLimiter shared by every call; a 50 req/s limiter is created when retries are on
        max_retries: Extra attempts for throttled, 5xx or network-failed calls (0 disables retrying)
        base_delay: First backoff step in seconds
        max_delay: Upper bound for a single backoff in seconds
        transport: httpx transport to use as-is instead of building one
        logger: Logger for request tracing
    """

    DEFAULT_RATE_LIMIT = 50

    def __init__(
        self,
        token: str,
        token_type: str = "Bearer",
        timeout: float = 30.0,
        follow_redirects: bool = True,
        rate_limiter: Optional[AsyncLimiter] = None,
        max_retries: int = 0,
        base_delay: float = 1.0,
        max_delay: float = 32.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.headers: Dict[str, str] = {"Authorization": f"{token_type} {token}"}
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.rate_limiter = rate_limiter
        if self.rate_limiter is None and max_retries > 0:
            self.rate_limiter = AsyncLimiter(self.DEFAULT_RATE_LIMIT, 1)
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[httpx.AsyncClient] = None

    def get_client(self) -> "HTTPClient":
        return self

    def _build_transport(self) -> Optional[httpx.AsyncBaseTransport]:
        """Explicit transport first, then a resilient one if configured, else httpx's default"""
        if self.transport is not None:
            return self.transport
        if self.rate_limiter is None and self.max_retries == 0:
            return None
        return ResilientHTTPTransport(
            rate_limiter=self.rate_limiter,
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            logger=self.logger,
        )

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(
                transport=self._build_transport(),
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
            )
        return self.client

    async def execute(self, request: HTTPRequest, **kwargs: Any) -> HTTPResponse:
        """Send one request.

        Headers on the request override the client's own (Authorization included).

        Args:
            request: Descriptor to send
            kwargs: Passed through to httpx.AsyncClient.request

        Returns:
            HTTPResponse for whatever status the server answered with

        Raises:
            TransportError: no usable response was received (network failure, redirect loop)
            DecodeError: the body could not be decompressed or decoded
        """
        url = request.resolved_url()
        http = await self._ensure_client()
        send_kwargs: Dict[str, Any] = {
            "params": request.query_params,
            "headers": {**self.headers, **request.headers},
            **_body_kwargs(request),
            **kwargs,
        }

        self.logger.debug(f"→ {request.method} {url} params={request.query_params}")
        try:
            raw = await http.request(request.method, url, **send_kwargs)
        except httpx.DecodingError as e:
            raise DecodeError(f"Undecodable body from {request.method} {url}: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(
                f"{type(e).__name__} during {request.method} {url}: {e}",
                method=request.method,
                url=url,
            ) from e
        self.logger.debug(f"← {raw.status_code} {request.method} {url}")
        return HTTPResponse(raw)

    async def close(self) -> None:
        """Release the pooled connections; the next execute() opens a fresh client"""
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> "HTTPClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
