from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class ProviderError(Exception):
    """Raised when a remote provider call fails"""

    def __init__(self, message: str, status_code: Optional[int] = None, method: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.method = method
