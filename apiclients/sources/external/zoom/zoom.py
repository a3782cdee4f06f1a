import logging
from typing import Any, Dict, List, Optional

from apiclients.sources.client.http.decoding import decode_empty, decode_model
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.pagination import NextPageTokenPagination, fetch_all
from apiclients.sources.client.http.query import QueryBuilder
from apiclients.sources.client.zoom.zoom import ZoomClient
from apiclients.sources.external.zoom.models import ListSipPhonesResponse, SipPhone, SipPhoneRequest

SIP_PHONES_PAGINATION = NextPageTokenPagination(items_field="phones")


class ZoomDataSource:
    """Zoom API client wrapper.
    - Uses HTTP client passed as `ZoomClient`
    - All methods return typed models or raise ApiError / DecodeError / TransportError
    """

    def __init__(self, client: ZoomClient, logger: Optional[logging.Logger] = None) -> None:
        """Initialize with ZoomClient."""
        self._client = client.get_client()
        try:
            self.base_url = self._client.get_base_url().rstrip("/")
        except AttributeError as exc:
            raise ValueError("HTTP client does not have get_base_url method") from exc
        self.logger = logger or logging.getLogger(__name__)

    def get_data_source(self) -> "ZoomDataSource":
        """Get the data source instance."""
        return self

    # ========================================================================
    # SIP PHONE APIs
    # ========================================================================

    def _sip_phones_request(
        self,
        page_number: Optional[int],
        search_key: Optional[str],
        page_size: Optional[int],
        next_page_token: Optional[str],
    ) -> HTTPRequest:
        query = (
            QueryBuilder()
            .add("next_page_token", next_page_token)
            .add_positive("page_number", page_number)
            .add_positive("page_size", page_size)
            .add("search_key", search_key)
            .build()
        )
        return HTTPRequest(method="GET", url=self.base_url + "/sip_phones", query_params=query)

    async def list_sip_phones(
        self,
        page_number: Optional[int] = None,
        search_key: Optional[str] = None,
        page_size: Optional[int] = None,
        next_page_token: Optional[str] = None,
    ) -> ListSipPhonesResponse:
        """List SIP phones on an account
        HTTP GET /sip_phones

        Args:
            page_number: Deprecated by Zoom, use next_page_token
            search_key: User name or email; limits the result to that user's SIP phone
            page_size: Number of records returned per page
            next_page_token: Token for the next page (expires after 15 minutes)

        Returns:
            ListSipPhonesResponse

        """
        request = self._sip_phones_request(page_number, search_key, page_size, next_page_token)
        return decode_model(await self._client.execute(request), ListSipPhonesResponse)

    async def list_all_sip_phones(
        self,
        search_key: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> List[SipPhone]:
        """Every SIP phone on the account, following next_page_token to the end."""
        request = self._sip_phones_request(None, search_key, page_size, None)
        return await fetch_all(self._client, request, SIP_PHONES_PAGINATION, SipPhone, self.logger)

    async def create_sip_phone(self, body: SipPhoneRequest) -> None:
        """Enable SIP phone for a user
        HTTP POST /sip_phones
        """
        request = HTTPRequest(
            method="POST",
            url=self.base_url + "/sip_phones",
            headers={"Content-Type": "application/json"},
            body=_request_body(body),
        )
        decode_empty(await self._client.execute(request))

    async def delete_sip_phone(self, phone_id: str) -> None:
        """Delete a SIP phone
        HTTP DELETE /sip_phones/{phoneId}
        """
        request = HTTPRequest(
            method="DELETE",
            url=self.base_url + "/sip_phones/{phoneId}",
            path_params={"phoneId": phone_id},
        )
        decode_empty(await self._client.execute(request))

    async def update_sip_phone(self, phone_id: str, body: SipPhoneRequest) -> None:
        """Update a SIP phone
        HTTP PATCH /sip_phones/{phoneId}
        """
        request = HTTPRequest(
            method="PATCH",
            url=self.base_url + "/sip_phones/{phoneId}",
            headers={"Content-Type": "application/json"},
            path_params={"phoneId": phone_id},
            body=_request_body(body),
        )
        decode_empty(await self._client.execute(request))


def _request_body(body: SipPhoneRequest) -> Dict[str, Any]:
    return body.model_dump(exclude_none=True)
