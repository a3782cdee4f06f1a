from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


class DocuSignModel(BaseModel):
    """Base for DocuSign payloads: camelCase on the wire, unknown fields ignored"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ResultSetPage(DocuSignModel):
    """Paging fields DocuSign attaches to every list response (all sent as strings)"""

    result_set_size: Optional[str] = Field(default=None, alias="resultSetSize")
    start_position: Optional[str] = Field(default=None, alias="startPosition")
    end_position: Optional[str] = Field(default=None, alias="endPosition")
    total_set_size: Optional[str] = Field(default=None, alias="totalSetSize")
    next_uri: Optional[str] = Field(default=None, alias="nextUri")
    previous_uri: Optional[str] = Field(default=None, alias="previousUri")


class FolderItem(DocuSignModel):
    """An envelope or template listed inside a folder"""

    envelope_id: Optional[str] = Field(default=None, alias="envelopeId")
    template_id: Optional[str] = Field(default=None, alias="templateId")
    name: Optional[str] = None
    subject: Optional[str] = None
    status: Optional[str] = None
    owner_name: Optional[str] = Field(default=None, alias="ownerName")
    owner_email: Optional[str] = Field(default=None, alias="ownerEmail")
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    sender_email: Optional[str] = Field(default=None, alias="senderEmail")
    created_date_time: Optional[str] = Field(default=None, alias="createdDateTime")
    sent_date_time: Optional[str] = Field(default=None, alias="sentDateTime")
    completed_date_time: Optional[str] = Field(default=None, alias="completedDateTime")
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    uri: Optional[str] = None


class Folder(DocuSignModel):
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    name: Optional[str] = None
    type: Optional[str] = None
    owner_user_name: Optional[str] = Field(default=None, alias="ownerUserName")
    owner_email: Optional[str] = Field(default=None, alias="ownerEmail")
    parent_folder_id: Optional[str] = Field(default=None, alias="parentFolderId")
    item_count: Optional[str] = Field(default=None, alias="itemCount")
    has_sub_folders: Optional[str] = Field(default=None, alias="hasSubFolders")
    uri: Optional[str] = None
    folders: List["Folder"] = Field(default_factory=list)
    folder_items: List[FolderItem] = Field(default_factory=list, alias="folderItems")


class FoldersResponse(ResultSetPage):
    folders: List[Folder] = Field(default_factory=list)


class FolderItemsResponse(ResultSetPage):
    folder_items: List[FolderItem] = Field(default_factory=list, alias="folderItems")


class FoldersRequest(DocuSignModel):
    """Body of the move-envelopes call"""

    envelope_ids: List[str] = Field(default_factory=list, alias="envelopeIds")
    from_folder_id: Optional[str] = Field(default=None, alias="fromFolderId")


class ApiRequestLog(DocuSignModel):
    request_log_id: Optional[str] = Field(default=None, alias="requestLogId")
    created_date_time: Optional[str] = Field(default=None, alias="createdDateTime")
    description: Optional[str] = None
    status: Optional[str] = None


class ApiRequestLogsResult(DocuSignModel):
    api_request_logs: List[ApiRequestLog] = Field(default_factory=list, alias="apiRequestLogs")


class DiagnosticsSettingsInformation(DocuSignModel):
    api_request_logging: Optional[str] = Field(default=None, alias="apiRequestLogging")
    api_request_log_max_entries: Optional[str] = Field(default=None, alias="apiRequestLogMaxEntries")
    api_request_log_remaining_entries: Optional[str] = Field(default=None, alias="apiRequestLogRemainingEntries")
