"""SendGrid data source: teammates and teammate access requests."""

import logging
from typing import Dict, List, Optional

from apiclients.sources.client.http.decoding import decode_empty, decode_list, decode_model
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.pagination import LinkHeaderPagination, fetch_all
from apiclients.sources.client.http.query import QueryBuilder
from apiclients.sources.client.sendgrid.sendgrid import SendGridClient
from apiclients.sources.external.sendgrid.models import (
    PendingTeammatesResponse,
    ScopeRequest,
    ScopeRequestApproval,
    Teammate,
    TeammateInviteRequest,
    TeammateInviteResponse,
    TeammatesResponse,
    TeammateUpdateRequest,
)

# SendGrid pages with limit/offset and returns the next offset in the Link header
TEAMMATES_PAGINATION = LinkHeaderPagination(param="offset", items_field="result")
SCOPES_REQUESTS_PAGINATION = LinkHeaderPagination(param="offset")


def _subuser_headers(on_behalf_of: Optional[str], json_body: bool = False) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    if on_behalf_of:
        headers["on-behalf-of"] = on_behalf_of
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


class SendGridDataSource:
    """SendGrid v3 API wrapper.

    Every method accepts `on_behalf_of` to act as a subuser (sent as the
    `on-behalf-of` header).
    """

    def __init__(self, client: SendGridClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client.get_client()
        try:
            self.base_url = self._client.get_base_url().rstrip("/")
        except AttributeError as exc:
            raise ValueError("HTTP client does not have get_base_url method") from exc
        self.logger = logger or logging.getLogger(__name__)

    def get_data_source(self) -> "SendGridDataSource":
        return self

    # ========================================================================
    # TEAMMATES
    # ========================================================================

    def _teammates_request(self, limit: Optional[int], offset: Optional[int], on_behalf_of: Optional[str]) -> HTTPRequest:
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/teammates",
            headers=_subuser_headers(on_behalf_of),
            query_params=QueryBuilder().add_positive("limit", limit).add_positive("offset", offset).build(),
        )

    async def get_teammates(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        on_behalf_of: Optional[str] = None,
    ) -> TeammatesResponse:
        """Retrieve all current teammates (one page).
        HTTP GET /teammates

        Args:
            limit: Number of items to return
            offset: Paging offset
            on_behalf_of: Subuser to act as
        """
        request = self._teammates_request(limit, offset, on_behalf_of)
        return decode_model(await self._client.execute(request), TeammatesResponse)

    async def get_all_teammates(self, limit: Optional[int] = None, on_behalf_of: Optional[str] = None) -> List[Teammate]:
        """Every teammate, following the Link header's next offset."""
        request = self._teammates_request(limit, None, on_behalf_of)
        return await fetch_all(self._client, request, TEAMMATES_PAGINATION, Teammate, self.logger)

    async def invite_teammate(self, body: TeammateInviteRequest, on_behalf_of: Optional[str] = None) -> TeammateInviteResponse:
        """Invite a teammate by email. Invites expire after 7 days.
        HTTP POST /teammates
        """
        request = HTTPRequest(
            method="POST",
            url=self.base_url + "/teammates",
            headers=_subuser_headers(on_behalf_of, json_body=True),
            body=body.model_dump(),
        )
        return decode_model(await self._client.execute(request), TeammateInviteResponse)

    async def resend_teammate_invite(self, token: str, on_behalf_of: Optional[str] = None) -> TeammateInviteResponse:
        """Resend a teammate invitation, resetting its expiration date.
        HTTP POST /teammates/pending/{token}/resend
        """
        request = HTTPRequest(
            method="POST",
            url=self.base_url + "/teammates/pending/{token}/resend",
            headers=_subuser_headers(on_behalf_of),
            path_params={"token": token},
        )
        return decode_model(await self._client.execute(request), TeammateInviteResponse)

    async def get_pending_teammates(self, on_behalf_of: Optional[str] = None) -> PendingTeammatesResponse:
        """Retrieve all pending teammate invitations.
        HTTP GET /teammates/pending
        """
        request = HTTPRequest(
            method="GET",
            url=self.base_url + "/teammates/pending",
            headers=_subuser_headers(on_behalf_of),
        )
        return decode_model(await self._client.execute(request), PendingTeammatesResponse)

    async def delete_pending_teammate(self, token: str, on_behalf_of: Optional[str] = None) -> None:
        """Delete a pending teammate invite.
        HTTP DELETE /teammates/pending/{token}
        """
        request = HTTPRequest(
            method="DELETE",
            url=self.base_url + "/teammates/pending/{token}",
            headers=_subuser_headers(on_behalf_of),
            path_params={"token": token},
        )
        decode_empty(await self._client.execute(request))

    async def get_teammate(self, username: str, on_behalf_of: Optional[str] = None) -> Teammate:
        """Retrieve a specific teammate by username.
        HTTP GET /teammates/{username}
        """
        request = HTTPRequest(
            method="GET",
            url=self.base_url + "/teammates/{username}",
            headers=_subuser_headers(on_behalf_of),
            path_params={"username": username},
        )
        return decode_model(await self._client.execute(request), Teammate)

    async def delete_teammate(self, username: str, on_behalf_of: Optional[str] = None) -> None:
        """Delete a teammate. Only the parent user or an admin teammate can do this.
        HTTP DELETE /teammates/{username}
        """
        request = HTTPRequest(
            method="DELETE",
            url=self.base_url + "/teammates/{username}",
            headers=_subuser_headers(on_behalf_of),
            path_params={"username": username},
        )
        decode_empty(await self._client.execute(request))

    async def update_teammate(
        self,
        username: str,
        body: TeammateUpdateRequest,
        on_behalf_of: Optional[str] = None,
    ) -> Teammate:
        """Update a teammate's permissions.
        HTTP PATCH /teammates/{username}
        """
        request = HTTPRequest(
            method="PATCH",
            url=self.base_url + "/teammates/{username}",
            headers=_subuser_headers(on_behalf_of, json_body=True),
            path_params={"username": username},
            body=body.model_dump(),
        )
        return decode_model(await self._client.execute(request), Teammate)

    # ========================================================================
    # ACCESS (SCOPE) REQUESTS
    # ========================================================================

    def _scopes_requests_request(self, limit: Optional[int], offset: Optional[int]) -> HTTPRequest:
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/scopes/requests",
            query_params=QueryBuilder().add_positive("limit", limit).add_positive("offset", offset).build(),
        )

    async def get_scopes_requests(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[ScopeRequest]:
        """Retrieve recent access requests (one page).
        HTTP GET /scopes/requests
        """
        request = self._scopes_requests_request(limit, offset)
        return decode_list(await self._client.execute(request), ScopeRequest)

    async def get_all_scopes_requests(self, limit: Optional[int] = None) -> List[ScopeRequest]:
        """Every access request, following the Link header's next offset."""
        request = self._scopes_requests_request(limit, None)
        return await fetch_all(self._client, request, SCOPES_REQUESTS_PAGINATION, ScopeRequest, self.logger)

    async def approve_scopes_request(self, request_id: str) -> ScopeRequestApproval:
        """Approve an access attempt. Only teammate admins may approve.
        HTTP PATCH /scopes/requests/{request_id}/approve
        """
        request = HTTPRequest(
            method="PATCH",
            url=self.base_url + "/scopes/requests/{request_id}/approve",
            path_params={"request_id": request_id},
        )
        return decode_model(await self._client.execute(request), ScopeRequestApproval)

    async def deny_scopes_request(self, request_id: str) -> None:
        """Deny an attempt to access your account.
        HTTP DELETE /scopes/requests/{request_id}
        """
        request = HTTPRequest(
            method="DELETE",
            url=self.base_url + "/scopes/requests/{request_id}",
            path_params={"request_id": request_id},
        )
        decode_empty(await self._client.execute(request))
