from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


class SendGridModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Teammate(SendGridModel):
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_type: Optional[str] = Field(default=None, description="owner, admin or teammate")
    is_admin: Optional[bool] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    scopes: List[str] = Field(default_factory=list)


class TeammatesResponse(SendGridModel):
    result: List[Teammate] = Field(default_factory=list)


class PendingTeammate(SendGridModel):
    email: Optional[str] = None
    scopes: List[str] = Field(default_factory=list)
    is_admin: Optional[bool] = None
    token: Optional[str] = Field(default=None, description="Invitation token")
    expiration_date: Optional[int] = Field(default=None, description="Unix timestamp the invitation expires at")


class PendingTeammatesResponse(SendGridModel):
    result: List[PendingTeammate] = Field(default_factory=list)


class TeammateInviteRequest(SendGridModel):
    email: str
    scopes: List[str] = Field(default_factory=list)
    is_admin: bool = False


class TeammateInviteResponse(SendGridModel):
    token: Optional[str] = None
    email: Optional[str] = None
    scopes: List[str] = Field(default_factory=list)
    is_admin: Optional[bool] = None


class TeammateUpdateRequest(SendGridModel):
    """Set is_admin true to promote; otherwise pass every scope the teammate should hold"""

    scopes: List[str] = Field(default_factory=list)
    is_admin: bool = False


class ScopeRequest(SendGridModel):
    id: Optional[int] = None
    scope_group_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ScopeRequestApproval(SendGridModel):
    scope_group_name: Optional[str] = None
