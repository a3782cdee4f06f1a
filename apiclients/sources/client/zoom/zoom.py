import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from apiclients.config.configuration_service import ConfigurationService
from apiclients.config.constants.service import AuthType, DefaultEndpoints, config_node_constants
from apiclients.sources.client.http.http_client import HTTPClient
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.http_response import HTTPResponse
from apiclients.sources.client.iclient import IClient

# ======================================================================
# STATIC TOKEN CLIENT
# ======================================================================

class ZoomRESTClientViaToken(HTTPClient):
    """
    Zoom REST client using a pre-generated OAuth token.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        token_type: str = "Bearer",
        **kwargs: Any,
    ) -> None:
        super().__init__(token, token_type, **kwargs)
        self.base_url = base_url.rstrip("/")
        self.headers.update({"Content-Type": "application/json"})

    def get_base_url(self) -> str:
        return self.base_url

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> HTTPResponse:
        """Issue a request against a path relative to the base URL"""
        req = HTTPRequest(
            method=method,
            url=self.base_url + path,
            query_params=params or {},
            body=body,
        )
        return await self.execute(req)


# ======================================================================
# CONFIG
# ======================================================================

@dataclass
class ZoomTokenConfig:
    token: str
    base_url: str = DefaultEndpoints.ZOOM_BASE_URL.value
    timeout: float = 30.0
    max_retries: int = 0

    def create_client(self, logger: Optional[logging.Logger] = None) -> ZoomRESTClientViaToken:
        return ZoomRESTClientViaToken(
            self.base_url,
            self.token,
            timeout=self.timeout,
            max_retries=self.max_retries,
            logger=logger,
        )


# ======================================================================
# TOP-LEVEL CLIENT WRAPPER
# ======================================================================

class ZoomClient(IClient):
    def __init__(self, client: ZoomRESTClientViaToken) -> None:
        self.client = client

    def get_client(self) -> ZoomRESTClientViaToken:
        return self.client

    @classmethod
    def build_with_config(cls, config: ZoomTokenConfig, logger: Optional[logging.Logger] = None) -> "ZoomClient":
        return cls(config.create_client(logger))

    @classmethod
    async def build_from_services(cls, logger: logging.Logger, config_service: ConfigurationService) -> "ZoomClient":
        conf = await config_service.get_config(config_node_constants.ZOOM.value) or {}
        auth = conf.get("auth", {})
        if not auth:
            raise ValueError("Failed to get Zoom connector configuration")

        auth_type = auth.get("authType", AuthType.TOKEN.value)
        if auth_type != AuthType.TOKEN.value:
            raise ValueError(f"Unsupported Zoom auth type: {auth_type}. Provide an access token.")
        if not auth.get("token"):
            raise ValueError("Zoom token is missing from the connector configuration")

        config = ZoomTokenConfig(
            token=auth["token"],
            base_url=auth.get("baseUrl", DefaultEndpoints.ZOOM_BASE_URL.value),
            max_retries=conf.get("maxRetries", 0),
        )
        return cls.build_with_config(config, logger)
