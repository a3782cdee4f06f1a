import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field  # type: ignore

from apiclients.config.configuration_service import ConfigurationService
from apiclients.config.constants.service import DefaultEndpoints, config_node_constants
from apiclients.sources.client.http.http_client import HTTPClient
from apiclients.sources.client.iclient import IClient


class GustoRESTClientViaToken(HTTPClient):
    """Gusto payroll REST client using a pre-issued OAuth access token."""

    def __init__(
        self,
        token: str,
        base_url: str = DefaultEndpoints.GUSTO_BASE_URL.value,
        **kwargs: Any,
    ) -> None:
        super().__init__(token, "Bearer", **kwargs)
        self.base_url = base_url.rstrip("/")
        self.headers.update({"Accept": "application/json"})

    def get_base_url(self) -> str:
        return self.base_url


class GustoTokenConfig(BaseModel):
    """Configuration for Gusto REST client via access token
    Args:
        token: OAuth access token
        base_url: API host; https://api.gusto-demo.com for the demo environment
    """

    token: str
    base_url: str = DefaultEndpoints.GUSTO_BASE_URL.value
    timeout: float = 30.0
    max_retries: int = Field(default=0, ge=0)

    def create_client(self, logger: Optional[logging.Logger] = None) -> GustoRESTClientViaToken:
        return GustoRESTClientViaToken(
            self.token,
            self.base_url,
            timeout=self.timeout,
            max_retries=self.max_retries,
            logger=logger,
        )


class GustoClient(IClient):
    def __init__(self, client: GustoRESTClientViaToken) -> None:
        self.client = client

    def get_client(self) -> GustoRESTClientViaToken:
        return self.client

    @classmethod
    def build_with_config(cls, config: GustoTokenConfig, logger: Optional[logging.Logger] = None) -> "GustoClient":
        return cls(config.create_client(logger))

    @classmethod
    async def build_from_services(
        cls,
        logger: logging.Logger,
        config_service: ConfigurationService,
    ) -> "GustoClient":
        config = await config_service.get_config(config_node_constants.GUSTO.value)
        if not config:
            raise ValueError("Failed to get Gusto connector configuration")

        auth: Dict[str, Any] = config.get("auth", {})
        if not auth.get("token"):
            raise ValueError("Gusto token is missing from the connector configuration")

        return cls.build_with_config(
            GustoTokenConfig(
                token=auth["token"],
                base_url=auth.get("baseUrl") or DefaultEndpoints.GUSTO_BASE_URL.value,
                max_retries=config.get("maxRetries", 0),
            ),
            logger,
        )
