"""
Full-collection pagination.

A PageFetcher performs one paginated request and splits the response into the
page's typed items and an optional continuation token. A PageAggregator drives
the fetcher until a page comes back without a token.

How the token is read from a response and written into the next request
differs per API family, so both are delegated to a PaginationStrategy:

- NextPageTokenPagination: token in the JSON body (Zoom `next_page_token`)
- StartPositionPagination: DocuSign `nextUri` / `endPosition` with `start_position`
- LinkHeaderPagination: RFC 8288 `Link: <...>; rel="next"` (SendGrid, Gusto)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Protocol, TypeVar, Union
from urllib.parse import parse_qs, urlsplit

from apiclients.sources.client.http.decoding import decode_json, validate_as
from apiclients.sources.client.http.exceptions import DecodeError
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.http_response import HTTPResponse

T = TypeVar("T")

PageToken = Union[str, int]


class RequestExecutor(Protocol):
    """Anything that can execute an HTTPRequest (HTTPClient and vendor REST clients)"""

    async def execute(self, request: HTTPRequest) -> HTTPResponse:
        ...


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a collection and the token for the next one, if any"""

    items: List[T]
    next_token: Optional[PageToken] = None

    @property
    def is_last(self) -> bool:
        return self.next_token is None


def _query_value(url: str, name: str) -> Optional[str]:
    """First value of query parameter `name` in `url`, or None"""
    values = parse_qs(urlsplit(url).query).get(name)
    return values[0] if values else None


class PaginationStrategy(ABC):
    """
    How one API family encodes continuation.

    Args:
        items_field: Body field holding the page's items; None when the body is the item array
    """

    def __init__(self, items_field: Optional[str] = None) -> None:
        self.items_field = items_field

    def extract_items(self, payload: Any) -> List[Any]:
        """Raw (undecoded) items of a page"""
        if self.items_field is None:
            items = payload
        else:
            if not isinstance(payload, dict):
                raise DecodeError(f"Expected a JSON object with '{self.items_field}', got {type(payload).__name__}")
            # A collection field the server omits is an empty page
            items = payload.get(self.items_field)
            if items is None:
                items = []
        if not isinstance(items, list):
            raise DecodeError(f"Expected a JSON array of items, got {type(items).__name__}")
        return items

    @abstractmethod
    def extract_token(self, response: HTTPResponse, payload: Any) -> Optional[PageToken]:
        """Continuation token for the next page, None when this page is the last"""

    @abstractmethod
    def inject(self, request: HTTPRequest, token: PageToken) -> HTTPRequest:
        """Next page's request. Must be pure: same inputs, equal output, no mutation."""


class NextPageTokenPagination(PaginationStrategy):
    """Opaque cursor returned in the body and echoed back as a query parameter.
    An empty token means there are no more pages.
    """

    def __init__(
        self,
        items_field: Optional[str] = None,
        token_field: str = "next_page_token",
        param: str = "next_page_token",
    ) -> None:
        super().__init__(items_field)
        self.token_field = token_field
        self.param = param

    def extract_token(self, response: HTTPResponse, payload: Any) -> Optional[PageToken]:
        if not isinstance(payload, dict):
            return None
        token = payload.get(self.token_field)
        if token is None or token == "":
            return None
        return token

    def inject(self, request: HTTPRequest, token: PageToken) -> HTTPRequest:
        return request.with_query(**{self.param: str(token)})


class StartPositionPagination(PaginationStrategy):
    """DocuSign result-set paging.

    More pages exist only while the body carries a non-empty `nextUri`. The next
    start position is read from `nextUri`, falling back to `endPosition + 1`.
    """

    def __init__(self, items_field: Optional[str] = None, param: str = "start_position") -> None:
        super().__init__(items_field)
        self.param = param

    def extract_token(self, response: HTTPResponse, payload: Any) -> Optional[PageToken]:
        if not isinstance(payload, dict):
            return None
        next_uri = payload.get("nextUri")
        if not next_uri:
            return None

        start = _query_value(next_uri, self.param)
        if start:
            return int(start) if start.isdigit() else start

        end_position = payload.get("endPosition")
        try:
            return int(end_position) + 1
        except (TypeError, ValueError) as e:
            raise DecodeError(
                f"nextUri {next_uri!r} has no {self.param} and endPosition {end_position!r} is not a number"
            ) from e

    def inject(self, request: HTTPRequest, token: PageToken) -> HTTPRequest:
        return request.with_query(**{self.param: str(token)})


class LinkHeaderPagination(PaginationStrategy):
    """Paging advertised through the `Link` response header.

    The token is the value of `param` (for example `offset` or `page`) in the
    `rel="next"` target. No next link means no more pages.
    """

    def __init__(self, param: str, items_field: Optional[str] = None) -> None:
        super().__init__(items_field)
        self.param = param

    def extract_token(self, response: HTTPResponse, payload: Any) -> Optional[PageToken]:
        next_link = response.links.get("next")
        if not next_link or not next_link.get("url"):
            return None
        value = _query_value(next_link["url"], self.param)
        if value is None:
            raise DecodeError(f"Link rel=next {next_link['url']!r} carries no '{self.param}' parameter")
        return value

    def inject(self, request: HTTPRequest, token: PageToken) -> HTTPRequest:
        return request.with_query(**{self.param: str(token)})


class PageFetcher(Generic[T]):
    """
    Fetches and decodes a single page.

    Args:
        client: Executes the request (HTTPClient or a vendor REST client)
        strategy: Where the items and the continuation token live
        item_type: Type each raw item is validated into
        logger: Optional logger instance

    Raises (from fetch):
        TransportError: no response was received
        ApiError: non-2xx response
        DecodeError: the body is not valid JSON or its items do not match item_type
    """

    def __init__(
        self,
        client: RequestExecutor,
        strategy: PaginationStrategy,
        item_type: Any,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client
        self.strategy = strategy
        self.item_type = item_type
        self.logger = logger or logging.getLogger(__name__)

    async def fetch(self, request: HTTPRequest) -> Page[T]:
        response = await self.client.execute(request)
        payload = decode_json(response)
        raw_items = self.strategy.extract_items(payload)
        items = validate_as(raw_items, List[self.item_type], response.url)
        return Page(items=items, next_token=self.strategy.extract_token(response, payload))


class PageAggregator(Generic[T]):
    """
    Follows a paginated collection to the end and concatenates its items.

    Termination is decided by the continuation token alone: an empty page that
    still carries a token is followed, and a full page without one is the last.
    Any page failure propagates immediately; items gathered so far are dropped.
    """

    def __init__(self, fetcher: PageFetcher[T], logger: Optional[logging.Logger] = None) -> None:
        self.fetcher = fetcher
        self.strategy = fetcher.strategy
        self.logger = logger or fetcher.logger

    async def fetch_all(self, initial_request: HTTPRequest) -> List[T]:
        """Every item of the collection, in server order"""
        items: List[T] = []
        request = initial_request
        pages = 0

        while True:
            page = await self.fetcher.fetch(request)
            pages += 1
            items.extend(page.items)
            self.logger.debug(
                f"Page {pages} of {initial_request.url}: {len(page.items)} items, next token {page.next_token!r}"
            )
            if page.next_token is None:
                break
            request = self.strategy.inject(request, page.next_token)

        self.logger.debug(f"Fetched {len(items)} items from {initial_request.url} in {pages} pages")
        return items


async def fetch_all(
    client: RequestExecutor,
    request: HTTPRequest,
    strategy: PaginationStrategy,
    item_type: Any,
    logger: Optional[logging.Logger] = None,
) -> List[Any]:
    """Shorthand for PageAggregator(PageFetcher(...)).fetch_all(request)"""
    fetcher: PageFetcher[Any] = PageFetcher(client, strategy, item_type, logger=logger)
    return await PageAggregator(fetcher).fetch_all(request)
