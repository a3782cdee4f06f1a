"""DocuSign eSignature REST client.

Token-authenticated HTTP client for the DocuSign REST API, plus the config
model and builder used by DocuSignDataSource.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field  # type: ignore

from apiclients.config.configuration_service import ConfigurationService
from apiclients.config.constants.service import DefaultEndpoints, config_node_constants
from apiclients.sources.client.http.http_client import HTTPClient
from apiclients.sources.client.iclient import IClient


class DocuSignRESTClientViaToken(HTTPClient):
    """DocuSign client authenticated with an existing OAuth access token.

    Args:
        access_token: OAuth access token (obtained outside this client)
        base_path: REST base path, e.g. https://na3.docusign.net/restapi
    """

    def __init__(
        self,
        access_token: str,
        base_path: str = DefaultEndpoints.DOCUSIGN_BASE_PATH.value,
        **kwargs: Any,
    ) -> None:
        super().__init__(access_token, "Bearer", **kwargs)
        if "demo" in base_path:
            self.logger.warning("Using DocuSign demo environment. Switch to production before go-live.")
        self.base_path = base_path.rstrip("/")
        self.headers.update({"Accept": "application/json"})

    def get_base_url(self) -> str:
        return self.base_path


class DocuSignTokenConfig(BaseModel):
    """Configuration for DocuSign REST client via access token"""

    access_token: str
    base_path: str = DefaultEndpoints.DOCUSIGN_BASE_PATH.value
    timeout: float = 30.0
    max_retries: int = Field(default=0, ge=0)

    def create_client(self, logger: Optional[logging.Logger] = None) -> DocuSignRESTClientViaToken:
        return DocuSignRESTClientViaToken(
            access_token=self.access_token,
            base_path=self.base_path,
            timeout=self.timeout,
            max_retries=self.max_retries,
            logger=logger,
        )


class DocuSignClient(IClient):
    """Builder and holder for the DocuSign REST client"""

    def __init__(self, client: DocuSignRESTClientViaToken) -> None:
        self.client = client

    def get_client(self) -> DocuSignRESTClientViaToken:
        return self.client

    @classmethod
    def build_with_config(cls, config: DocuSignTokenConfig, logger: Optional[logging.Logger] = None) -> "DocuSignClient":
        return cls(config.create_client(logger))

    @classmethod
    async def build_from_services(
        cls,
        logger: logging.Logger,
        config_service: ConfigurationService,
    ) -> "DocuSignClient":
        """Build the client from the connector configuration stored in the config service"""
        config = await config_service.get_config(config_node_constants.DOCUSIGN.value)
        if not config:
            raise ValueError("Failed to get DocuSign connector configuration")

        auth: Dict[str, Any] = config.get("auth", {})
        token = auth.get("token") or auth.get("accessToken")
        if not token:
            raise ValueError("DocuSign access token is missing from the connector configuration")

        token_config = DocuSignTokenConfig(
            access_token=token,
            base_path=auth.get("baseUrl") or DefaultEndpoints.DOCUSIGN_BASE_PATH.value,
            max_retries=config.get("maxRetries", 0),
        )
        return cls.build_with_config(token_config, logger)
