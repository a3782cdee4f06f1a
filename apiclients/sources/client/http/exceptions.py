"""Error taxonomy shared by every HTTP-backed client."""

from typing import Any, Optional


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""


class TransportError(HTTPClientError):
    """The request never produced a response (connection failure, timeout, protocol error)."""

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class DecodeError(HTTPClientError):
    """The response body could not be parsed into the declared type."""


class ApiError(HTTPClientError):
    """The server answered with a non-2xx status.

    Attributes:
        status: HTTP status code
        detail: The server's error payload, parsed JSON when possible, raw text otherwise
        method: HTTP method of the failed request
        url: URL of the failed request
    """

    def __init__(
        self,
        status: int,
        detail: Any = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.status = status
        self.detail = detail
        self.method = method
        self.url = url
        super().__init__(f"HTTP {status} for {method} {url}: {detail}")
