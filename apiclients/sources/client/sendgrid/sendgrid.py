import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field  # type: ignore

from apiclients.config.configuration_service import ConfigurationService
from apiclients.config.constants.service import DefaultEndpoints, config_node_constants
from apiclients.sources.client.http.http_client import HTTPClient
from apiclients.sources.client.iclient import IClient


class SendGridRESTClientViaApiKey(HTTPClient):
    """SendGrid v3 REST client. The API key is sent as a bearer token."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DefaultEndpoints.SENDGRID_BASE_URL.value,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key, "Bearer", **kwargs)
        self.base_url = base_url.rstrip("/")
        self.headers.update({"Accept": "application/json"})

    def get_base_url(self) -> str:
        return self.base_url


class SendGridApiKeyConfig(BaseModel):
    """Configuration for SendGrid REST client via API key"""

    api_key: str
    base_url: str = DefaultEndpoints.SENDGRID_BASE_URL.value
    timeout: float = 30.0
    max_retries: int = Field(default=0, ge=0)

    def create_client(self, logger: Optional[logging.Logger] = None) -> SendGridRESTClientViaApiKey:
        return SendGridRESTClientViaApiKey(
            self.api_key,
            self.base_url,
            timeout=self.timeout,
            max_retries=self.max_retries,
            logger=logger,
        )


class SendGridClient(IClient):
    def __init__(self, client: SendGridRESTClientViaApiKey) -> None:
        self.client = client

    def get_client(self) -> SendGridRESTClientViaApiKey:
        return self.client

    @classmethod
    def build_with_config(
        cls,
        config: SendGridApiKeyConfig,
        logger: Optional[logging.Logger] = None,
    ) -> "SendGridClient":
        return cls(config.create_client(logger))

    @classmethod
    async def build_from_services(
        cls,
        logger: logging.Logger,
        config_service: ConfigurationService,
    ) -> "SendGridClient":
        config = await config_service.get_config(config_node_constants.SENDGRID.value)
        if not config:
            raise ValueError("Failed to get SendGrid connector configuration")

        auth: Dict[str, Any] = config.get("auth", {})
        api_key = auth.get("apiKey") or auth.get("token")
        if not api_key:
            raise ValueError("SendGrid API key is missing from the connector configuration")

        return cls.build_with_config(
            SendGridApiKeyConfig(
                api_key=api_key,
                base_url=auth.get("baseUrl") or DefaultEndpoints.SENDGRID_BASE_URL.value,
                max_retries=config.get("maxRetries", 0),
            ),
            logger,
        )
