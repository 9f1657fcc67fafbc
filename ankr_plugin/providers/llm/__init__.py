from typing import Dict, Type, Optional

from .base import (
    LLMProvider,
    LLMMessage,
    LLMResponse,
    LLMProviderError,
    ToolCall,
    ToolDefinition,
    ToolParameter,
    ToolParameterType,
)
from .anthropic import AnthropicProvider

PROVIDER_ALIAS_MAP: Dict[str, str] = {
    "claude": "anthropic",
}


def canonical_provider_name(name: str) -> str:
    """Normalize provider aliases to their canonical identifier."""

    return PROVIDER_ALIAS_MAP.get(name.lower(), name.lower())


# Registry of available LLM providers
PROVIDER_REGISTRY: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
}


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create_provider(
        provider_name: str,
        api_key: str,
        model: Optional[str] = None,
        **kwargs,
    ) -> LLMProvider:
        """Create an LLM provider instance."""

        provider_key = canonical_provider_name(provider_name)
        if provider_key not in PROVIDER_REGISTRY:
            available_providers = ", ".join(PROVIDER_REGISTRY.keys())
            raise ValueError(
                f"Unsupported provider '{provider_name}'. "
                f"Available providers: {available_providers}"
            )

        if not model:
            raise ValueError(f"No model provided for provider '{provider_key}'.")

        return PROVIDER_REGISTRY[provider_key](api_key=api_key, model=model, **kwargs)


def get_llm_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    **kwargs,
) -> LLMProvider:
    """Instantiate the extraction LLM provider according to configuration overrides."""

    from ...config import settings

    resolved_provider = canonical_provider_name((provider_name or "").strip() or settings.llm_provider)

    if resolved_provider == "anthropic":
        api_key = settings.anthropic_api_key
    else:
        api_key = None

    if not api_key:
        raise ValueError(f"No API key configured for provider: {resolved_provider}")

    resolved_model = (model or "").strip() or settings.llm_model

    return LLMProviderFactory.create_provider(
        provider_name=resolved_provider,
        api_key=api_key,
        model=resolved_model,
        **kwargs,
    )


__all__ = [
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "LLMProviderError",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
    "ToolParameterType",
    "AnthropicProvider",
    "LLMProviderFactory",
    "get_llm_provider",
    "PROVIDER_REGISTRY",
    "canonical_provider_name",
]
