import json
from typing import Any, Dict

import httpx  # type: ignore

from apiclients.config.constants.http_status_code import is_success


class HTTPResponse:
    """HTTP response
    Args:
        response: The underlying httpx response
    """

    def __init__(self, response: httpx.Response) -> None:
        self.response = response

    @property
    def status(self) -> int:
        """Status code of the response"""
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        """Response headers"""
        return self.response.headers

    @property
    def url(self) -> str:
        """Final URL of the request that produced this response"""
        return str(self.response.request.url)

    @property
    def links(self) -> Dict[str, Dict[str, str]]:
        """Parsed RFC 8288 Link header, keyed by rel"""
        return self.response.links

    @property
    def is_success(self) -> bool:
        return is_success(self.status)

    def json(self) -> Any:
        """Decode the body as JSON. Raises json.JSONDecodeError on malformed bodies."""
        return json.loads(self.response.content)

    def text(self) -> str:
        """Body decoded as text"""
        return self.response.text

    def bytes(self) -> bytes:
        """Raw body"""
        return self.response.content

    def __repr__(self) -> str:
        return f"HTTPResponse(status={self.status}, url={self.url!r})"
