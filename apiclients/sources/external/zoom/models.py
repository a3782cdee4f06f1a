from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field  # type: ignore


class SipPhone(BaseModel):
    """A SIP phone (Phone System Integration) registration"""

    model_config = ConfigDict(extra="ignore")

    phone_id: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    domain: Optional[str] = None
    register_server: Optional[str] = None
    registration_expire_time: Optional[int] = None
    password: Optional[str] = None
    authorization_name: Optional[str] = None
    transport_protocol: Optional[str] = Field(default=None, description="UDP, TCP, TLS or AUTO")
    proxy_server: Optional[str] = None
    voice_mail: Optional[str] = None


class ListSipPhonesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    next_page_token: Optional[str] = None
    page_count: Optional[int] = None
    page_number: Optional[int] = None
    page_size: Optional[int] = None
    total_records: Optional[int] = None
    phones: List[SipPhone] = Field(default_factory=list)


class SipPhoneRequest(BaseModel):
    """Body for enabling (all of user_email, user_name, password, authorization_name,
    domain and register_server required by Zoom) or updating a SIP phone"""

    model_config = ConfigDict(extra="forbid")

    user_email: Optional[str] = None
    user_name: Optional[str] = None
    password: Optional[str] = None
    authorization_name: Optional[str] = None
    domain: Optional[str] = None
    register_server: Optional[str] = None
    registration_expire_time: Optional[int] = None
    transport_protocol: Optional[str] = None
    proxy_server: Optional[str] = None
    voice_mail: Optional[str] = None
