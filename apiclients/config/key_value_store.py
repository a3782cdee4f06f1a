import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class KeyValueStore(ABC):
    """Async key-value store backing the ConfigurationService"""

    @abstractmethod
    async def create_key(self, key: str, value: Any, overwrite: bool = True) -> None:
        """Store `value` under `key`. Raises KeyError if it exists and overwrite is False."""

    @abstractmethod
    async def get_key(self, key: str) -> Optional[Any]:
        """Value stored under `key`, or None"""

    @abstractmethod
    async def update_value(self, key: str, value: Any) -> None:
        """Replace the value of an existing key. Raises KeyError if it is missing."""

    @abstractmethod
    async def delete_key(self, key: str) -> bool:
        """Remove `key`; False if it was not present"""

    async def close(self) -> None:
        """Release any resources held by the store"""


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and single-process setups"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def create_key(self, key: str, value: Any, overwrite: bool = True) -> None:
        if not overwrite and key in self._data:
            raise KeyError(f"Key already exists: {key}")
        self._data[key] = copy.deepcopy(value)

    async def get_key(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value)

    async def update_value(self, key: str, value: Any) -> None:
        if key not in self._data:
            raise KeyError(f"Key does not exist: {key}")
        self._data[key] = copy.deepcopy(value)

    async def delete_key(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return True
