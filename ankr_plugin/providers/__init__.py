from .ankr import AnkrProvider, AnkrProviderError
from .base import Provider, ProviderError

__all__ = ["AnkrProvider", "AnkrProviderError", "Provider", "ProviderError"]
