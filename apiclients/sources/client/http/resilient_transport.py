"""
Retry and rate limiting below HTTPClient.

Everything here happens inside a single logical request, so callers (the page
aggregator included) see one response or one exception per call.
"""

import asyncio
import logging
import random
from typing import Optional

import httpx  # type: ignore
from aiolimiter import AsyncLimiter

from apiclients.config.constants.http_status_code import is_retryable

# Failures where the request may not have reached the server, or the answer got lost
RETRYABLE_EXCEPTIONS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.RemoteProtocolError,
)


def _check_non_negative(name: str, value: object, integral: bool = False) -> None:
    kinds = (int,) if integral else (int, float)
    if isinstance(value, bool) or not isinstance(value, kinds) or value < 0:
        expected = "integer" if integral else "number"
        raise ValueError(f"{name} must be a non-negative {expected}, got: {value!r}")


class ResilientHTTPTransport(httpx.AsyncHTTPTransport):
    """
    httpx transport that throttles and retries.

    - One limiter slot per logical request, whatever the number of attempts
    - 429, 5xx and RETRYABLE_EXCEPTIONS are retried up to max_retries times
    - A numeric Retry-After sets the wait; otherwise full-jitter exponential backoff
    - Once attempts run out the last response is returned, or the last network error re-raised
    """

    def __init__(
        self,
        rate_limiter: Optional[AsyncLimiter] = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 32.0,
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ) -> None:
        _check_non_negative("max_retries", max_retries, integral=True)
        _check_non_negative("base_delay", base_delay)
        _check_non_negative("max_delay", max_delay)
        if base_delay > max_delay:
            raise ValueError(f"base_delay ({base_delay}) cannot exceed max_delay ({max_delay})")

        super().__init__(**kwargs)
        self.rate_limiter = rate_limiter
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.logger = logger or logging.getLogger(__name__)

    def _should_retry(self, response: httpx.Response, attempt: int) -> bool:
        return attempt < self.max_retries and is_retryable(response.status_code)

    def _calculate_delay(self, response: Optional[httpx.Response], attempt: int) -> float:
        """Seconds to wait before attempt `attempt + 1`. HTTP-date Retry-After values are ignored."""
        header = response.headers.get("Retry-After") if response is not None else None
        if header:
            try:
                return float(header)
            except ValueError:
                self.logger.debug(f"Ignoring non-numeric Retry-After {header!r}")

        ceiling = min(self.max_delay, self.base_delay * (2 ** attempt))
        return random.uniform(0, ceiling)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self.rate_limiter is not None:
            await self.rate_limiter.acquire()

        total = self.max_retries + 1
        for attempt in range(total):
            try:
                response = await super().handle_async_request(request)
            except RETRYABLE_EXCEPTIONS as e:
                if attempt == self.max_retries:
                    self.logger.error(
                        f"{request.method} {request.url}: {type(e).__name__} on every one of {total} attempts"
                    )
                    raise
                wait = self._calculate_delay(None, attempt)
                self.logger.warning(
                    f"{request.method} {request.url}: {type(e).__name__}, "
                    f"attempt {attempt + 1}/{total}, next try in {wait:.2f}s"
                )
                await asyncio.sleep(wait)
                continue

            if not self._should_retry(response, attempt):
                if self.max_retries and is_retryable(response.status_code):
                    self.logger.error(
                        f"{request.method} {request.url}: HTTP {response.status_code} "
                        f"still failing after {total} attempts"
                    )
                return response

            wait = self._calculate_delay(response, attempt)
            # Free the connection held by the discarded response
            await response.aclose()
            self.logger.warning(
                f"{request.method} {request.url}: HTTP {response.status_code}, "
                f"attempt {attempt + 1}/{total}, next try in {wait:.2f}s"
            )
            await asyncio.sleep(wait)

        raise RuntimeError("retry loop ended without a response")
