import logging
import os
from typing import Any, Dict, Optional, Tuple, Union

import dotenv
from cachetools import LRUCache

from apiclients.config.constants.service import AuthType, config_node_constants
from apiclients.config.key_value_store import KeyValueStore

dotenv.load_dotenv()

ConfigValue = Union[str, int, float, bool, dict, list, None]

# connector path -> (token env var, base URL env var)
_CONNECTOR_ENV_VARS: Dict[str, Tuple[str, str]] = {
    config_node_constants.DOCUSIGN.value: ("DOCUSIGN_ACCESS_TOKEN", "DOCUSIGN_BASE_PATH"),
    config_node_constants.GUSTO.value: ("GUSTO_ACCESS_TOKEN", "GUSTO_BASE_URL"),
    config_node_constants.SENDGRID.value: ("SENDGRID_API_KEY", "SENDGRID_BASE_URL"),
    config_node_constants.ZOOM.value: ("ZOOM_ACCESS_TOKEN", "ZOOM_BASE_URL"),
}


class ConfigurationService:
    """Service to read connector configuration from a key-value store with caching."""

    def __init__(self, logger: logging.Logger, key_value_store: KeyValueStore, cache_size: int = 1000) -> None:
        self.logger = logger
        self.store = key_value_store
        self.cache: LRUCache = LRUCache(maxsize=cache_size)
        self.logger.debug("🔧 ConfigurationService initialized (cache size %d)", cache_size)

    async def get_config(self, key: str, default: ConfigValue = None, use_cache: bool = True) -> ConfigValue:
        """Get configuration value with LRU cache and environment variable fallback"""
        if use_cache and key in self.cache:
            self.logger.debug("📦 Cache hit for key: %s", key)
            return self.cache[key]

        try:
            value = await self.store.get_key(key)
        except Exception as e:
            self.logger.error("❌ Failed to get config %s: %s", key, str(e))
            value = None

        if value is None:
            env_fallback = self._get_env_fallback(key)
            if env_fallback is None:
                self.logger.debug("📦 No value for key: %s", key)
                return default
            self.logger.debug("📦 Using environment variable fallback for key: %s", key)
            value = env_fallback

        self.cache[key] = value
        return value

    def _get_env_fallback(self, key: str) -> Optional[Dict[str, Any]]:
        """Connector config built from environment variables, when the token variable is set"""
        env_vars = _CONNECTOR_ENV_VARS.get(key)
        if env_vars is None:
            return None
        token_var, base_url_var = env_vars
        token = os.getenv(token_var)
        if not token:
            return None

        auth: Dict[str, Any] = {"authType": AuthType.TOKEN.value, "token": token}
        base_url = os.getenv(base_url_var)
        if base_url:
            auth["baseUrl"] = base_url
        return {"auth": auth}

    async def set_config(self, key: str, value: ConfigValue) -> bool:
        """Store a configuration value and refresh the cache"""
        try:
            await self.store.create_key(key, value, overwrite=True)
        except Exception as e:
            self.logger.error("❌ Failed to set config %s: %s", key, str(e))
            return False
        self.cache[key] = value
        self.logger.debug("✅ Successfully set config for key: %s", key)
        return True

    async def delete_config(self, key: str) -> bool:
        """Delete a configuration value. Store failures are logged and reported as False."""
        self.cache.pop(key, None)
        try:
            success = await self.store.delete_key(key)
        except Exception as e:
            self.logger.error("❌ Failed to delete config %s: %s", key, str(e))
            return False
        if not success:
            self.logger.warning("⚠️ Key %s was not present", key)
        return success

    def clear_cache(self) -> None:
        """Clear the in-memory LRU cache"""
        self.cache.clear()
        self.logger.info("📦 In-memory configuration cache cleared")

    async def close(self) -> None:
        """Release the underlying store"""
        await self.store.close()
