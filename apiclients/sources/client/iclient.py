from abc import ABC, abstractmethod
from typing import Any


class IClient(ABC):
    """Interface every vendor and transport client implements"""

    @abstractmethod
    def get_client(self) -> Any:
        """Return the object that actually executes requests"""
