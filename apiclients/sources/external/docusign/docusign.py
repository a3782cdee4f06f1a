"""DocuSign data source.

Wrapper methods for the DocuSign eSignature folders and diagnostics
(request log) endpoints. Collection calls come in two forms: a single-page
call and a `*_all_*` variant that follows `start_position` paging to the end.
"""

import logging
from typing import List, Optional

from apiclients.sources.client.docusign.docusign import DocuSignClient
from apiclients.sources.client.http.decoding import decode_empty, decode_model, ensure_success
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.pagination import StartPositionPagination, fetch_all
from apiclients.sources.client.http.query import QueryBuilder
from apiclients.sources.external.docusign.models import (
    ApiRequestLogsResult,
    DiagnosticsSettingsInformation,
    Folder,
    FolderItem,
    FolderItemsResponse,
    FoldersRequest,
    FoldersResponse,
)

FOLDERS_PAGINATION = StartPositionPagination(items_field="folders")
FOLDER_ITEMS_PAGINATION = StartPositionPagination(items_field="folderItems")


class DocuSignDataSource:
    """DocuSign API wrapper.

    Attributes:
        client: DocuSignClient holding the authenticated REST client
    """

    def __init__(self, client: DocuSignClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client.get_client()
        try:
            self.base_url = self._client.get_base_url().rstrip("/")
        except AttributeError as exc:
            raise ValueError("HTTP client does not have get_base_url method") from exc
        self.logger = logger or logging.getLogger(__name__)

    def get_data_source(self) -> "DocuSignDataSource":
        return self

    # ========================================================================
    # FOLDERS
    # ========================================================================

    def _list_folders_request(
        self,
        account_id: str,
        include: Optional[str],
        include_items: Optional[bool],
        start_position: Optional[int],
        template: Optional[str],
        user_filter: Optional[str],
    ) -> HTTPRequest:
        query = (
            QueryBuilder()
            .add("include", include)
            .add("include_items", include_items)
            .add("start_position", start_position)
            .add("template", template)
            .add("user_filter", user_filter)
            .build()
        )
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/v2.1/accounts/{accountId}/folders",
            path_params={"accountId": account_id},
            query_params=query,
        )

    async def list_folders(
        self,
        account_id: str,
        include: Optional[str] = None,
        include_items: Optional[bool] = None,
        start_position: Optional[int] = None,
        template: Optional[str] = None,
        user_filter: Optional[str] = None,
    ) -> FoldersResponse:
        """Gets a list of the folders for the account, including the folder hierarchy.
        HTTP GET /v2.1/accounts/{accountId}/folders

        Args:
            account_id: The external account number or account ID GUID
            include: Comma-separated folder types: envelope_folders, template_folders, shared_template_folders
            include_items: Include folder items in the response (server default false)
            start_position: Position within the total result set to start from
            template: `include` returns template folders too, `only` returns only them
            user_filter: all, owned_by_me or shared_with_me

        Returns:
            FoldersResponse for one page
        """
        request = self._list_folders_request(
            account_id, include, include_items, start_position, template, user_filter
        )
        return decode_model(await self._client.execute(request), FoldersResponse)

    async def list_all_folders(
        self,
        account_id: str,
        include: Optional[str] = None,
        include_items: Optional[bool] = None,
        start_position: Optional[int] = None,
        template: Optional[str] = None,
        user_filter: Optional[str] = None,
    ) -> List[Folder]:
        """Every folder of the account, following result-set paging to the end."""
        request = self._list_folders_request(
            account_id, include, include_items, start_position, template, user_filter
        )
        return await fetch_all(self._client, request, FOLDERS_PAGINATION, Folder, self.logger)

    def _folder_items_request(
        self,
        account_id: str,
        folder_id: str,
        from_date: Optional[str],
        include_items: Optional[bool],
        owner_email: Optional[str],
        owner_name: Optional[str],
        search_text: Optional[str],
        start_position: Optional[int],
        status: Optional[str],
        to_date: Optional[str],
    ) -> HTTPRequest:
        query = (
            QueryBuilder()
            .add("from_date", from_date)
            .add("include_items", include_items)
            .add("owner_email", owner_email)
            .add("owner_name", owner_name)
            .add("search_text", search_text)
            .add("start_position", start_position)
            .add("status", status)
            .add("to_date", to_date)
            .build()
        )
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/v2.1/accounts/{accountId}/folders/{folderId}",
            path_params={"accountId": account_id, "folderId": folder_id},
            query_params=query,
        )

    async def get_folder_items(
        self,
        account_id: str,
        folder_id: str,
        from_date: Optional[str] = None,
        include_items: Optional[bool] = None,
        owner_email: Optional[str] = None,
        owner_name: Optional[str] = None,
        search_text: Optional[str] = None,
        start_position: Optional[int] = None,
        status: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> FolderItemsResponse:
        """Gets a list of the envelopes in the specified folder.
        HTTP GET /v2.1/accounts/{accountId}/folders/{folderId}

        Args:
            account_id: The external account number or account ID GUID
            folder_id: The folder ID
            from_date: Only items created on or after this UTC date
            include_items: Include folder items in the response
            owner_email: Filter by owner email
            owner_name: Filter by owner name
            search_text: Free-text filter
            start_position: Position within the total result set to start from
            status: Envelope status filter
            to_date: Only items created on or before this UTC date
        """
        request = self._folder_items_request(
            account_id, folder_id, from_date, include_items, owner_email,
            owner_name, search_text, start_position, status, to_date,
        )
        return decode_model(await self._client.execute(request), FolderItemsResponse)

    async def get_all_folder_items(
        self,
        account_id: str,
        folder_id: str,
        from_date: Optional[str] = None,
        include_items: Optional[bool] = None,
        owner_email: Optional[str] = None,
        owner_name: Optional[str] = None,
        search_text: Optional[str] = None,
        start_position: Optional[int] = None,
        status: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> List[FolderItem]:
        """Every item in the folder, across all result-set pages."""
        request = self._folder_items_request(
            account_id, folder_id, from_date, include_items, owner_email,
            owner_name, search_text, start_position, status, to_date,
        )
        return await fetch_all(self._client, request, FOLDER_ITEMS_PAGINATION, FolderItem, self.logger)

    async def move_envelopes(
        self,
        account_id: str,
        folder_id: str,
        body: FoldersRequest,
    ) -> FoldersResponse:
        """Moves envelopes from their current folder to the specified folder.
        HTTP PUT /v2.1/accounts/{accountId}/folders/{folderId}

        Use `recyclebin` as folder_id to delete. Moving an in-process envelope
        (sent or delivered) to the recycle bin voids it.
        """
        request = HTTPRequest(
            method="PUT",
            url=self.base_url + "/v2.1/accounts/{accountId}/folders/{folderId}",
            headers={"Content-Type": "application/json"},
            path_params={"accountId": account_id, "folderId": folder_id},
            body=body.model_dump(by_alias=True, exclude_none=True),
        )
        return decode_model(await self._client.execute(request), FoldersResponse)

    def _search_folder_request(
        self,
        account_id: str,
        search_folder_id: str,
        all: Optional[bool],
        count: Optional[int],
        from_date: Optional[str],
        include_recipients: Optional[bool],
        order: Optional[str],
        order_by: Optional[str],
        start_position: Optional[int],
        to_date: Optional[str],
    ) -> HTTPRequest:
        query = (
            QueryBuilder()
            .add("all", all)
            .add_positive("count", count)
            .add("from_date", from_date)
            .add("include_recipients", include_recipients)
            .add("order", order)
            .add("order_by", order_by)
            .add("start_position", start_position)
            .add("to_date", to_date)
            .build()
        )
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/v2.1/accounts/{accountId}/search_folders/{searchFolderId}",
            path_params={"accountId": account_id, "searchFolderId": search_folder_id},
            query_params=query,
        )

    async def search_folder_contents(
        self,
        account_id: str,
        search_folder_id: str,
        all: Optional[bool] = None,
        count: Optional[int] = None,
        from_date: Optional[str] = None,
        include_recipients: Optional[bool] = None,
        order: Optional[str] = None,
        order_by: Optional[str] = None,
        start_position: Optional[int] = None,
        to_date: Optional[str] = None,
    ) -> FolderItemsResponse:
        """Gets a list of envelopes in folders matching the specified criteria.
        HTTP GET /v2.1/accounts/{accountId}/search_folders/{searchFolderId}

        Deprecated by DocuSign in v2.1 in favour of Envelopes::listStatusChanges.

        Args:
            search_folder_id: drafts, awaiting_my_signature, completed or out_for_signature
            count: Records per page, 1 to 100
            order: asc or desc
            order_by: action_required, created, completed, sent, signer_list, status or subject
        """
        request = self._search_folder_request(
            account_id, search_folder_id, all, count, from_date,
            include_recipients, order, order_by, start_position, to_date,
        )
        return decode_model(await self._client.execute(request), FolderItemsResponse)

    async def search_all_folder_contents(
        self,
        account_id: str,
        search_folder_id: str,
        all: Optional[bool] = None,
        count: Optional[int] = None,
        from_date: Optional[str] = None,
        include_recipients: Optional[bool] = None,
        order: Optional[str] = None,
        order_by: Optional[str] = None,
        start_position: Optional[int] = None,
        to_date: Optional[str] = None,
    ) -> List[FolderItem]:
        """Every envelope matching the search, across all result-set pages."""
        request = self._search_folder_request(
            account_id, search_folder_id, all, count, from_date,
            include_recipients, order, order_by, start_position, to_date,
        )
        return await fetch_all(self._client, request, FOLDER_ITEMS_PAGINATION, FolderItem, self.logger)

    # ========================================================================
    # DIAGNOSTICS / REQUEST LOGS
    # ========================================================================

    async def get_request_logs(self, encoding: Optional[str] = None) -> ApiRequestLogsResult:
        """Gets the API request logging log files.
        HTTP GET /v2.1/diagnostics/request_logs
        """
        request = HTTPRequest(
            method="GET",
            url=self.base_url + "/v2.1/diagnostics/request_logs",
            query_params=QueryBuilder().add("encoding", encoding).build(),
        )
        return decode_model(await self._client.execute(request), ApiRequestLogsResult)

    async def delete_request_logs(self) -> None:
        """Deletes the request log files.
        HTTP DELETE /v2.1/diagnostics/request_logs
        """
        request = HTTPRequest(method="DELETE", url=self.base_url + "/v2.1/diagnostics/request_logs")
        decode_empty(await self._client.execute(request))

    async def get_request_log(self, request_log_id: str) -> bytes:
        """Gets a request logging log file as raw bytes.
        HTTP GET /v2.1/diagnostics/request_logs/{requestLogId}
        """
        request = HTTPRequest(
            method="GET",
            url=self.base_url + "/v2.1/diagnostics/request_logs/{requestLogId}",
            headers={"Accept": "text/plain"},
            path_params={"requestLogId": request_log_id},
        )
        response = ensure_success(await self._client.execute(request))
        return response.bytes()

    async def get_request_log_settings(self) -> DiagnosticsSettingsInformation:
        """Gets the API request logging settings.
        HTTP GET /v2.1/diagnostics/settings
        """
        request = HTTPRequest(method="GET", url=self.base_url + "/v2.1/diagnostics/settings")
        return decode_model(await self._client.execute(request), DiagnosticsSettingsInformation)

    async def update_request_log_settings(
        self,
        body: DiagnosticsSettingsInformation,
    ) -> DiagnosticsSettingsInformation:
        """Enables or disables API request logging for troubleshooting.
        HTTP PUT /v2.1/diagnostics/settings
        """
        request = HTTPRequest(
            method="PUT",
            url=self.base_url + "/v2.1/diagnostics/settings",
            headers={"Content-Type": "application/json"},
            body=body.model_dump(by_alias=True, exclude_none=True),
        )
        return decode_model(await self._client.execute(request), DiagnosticsSettingsInformation)
