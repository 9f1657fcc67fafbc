import os

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


BASE_DIR = Path(__file__).resolve().parents[1]

ANKR_API_KEY_SETTING = "ANKR_API_KEY"
DEFAULT_ANKR_ENDPOINT = "https://rpc.ankr.com/multichain/"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log renderer: json or console")

    # Ankr Advanced API
    ankr_api_key: str = Field(default="", description="Ankr multichain API key")
    ankr_endpoint: str = Field(
        default=DEFAULT_ANKR_ENDPOINT,
        description="Base URL of the Ankr multichain endpoint; the API key is appended",
    )
    request_timeout_seconds: int = Field(default=30, description="Request timeout")

    # LLM Provider Settings
    llm_provider: str = Field(default="anthropic", description="LLM provider used for parameter extraction")
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    llm_model: str = Field(default="claude-sonnet-4-20250514", description="Model used for parameter extraction")
    max_tokens: int = Field(default=1024, description="Maximum tokens for the extraction response")
    temperature: float = Field(default=0.0, description="LLM temperature for extraction")

    # Conversation state
    recent_messages_limit: int = Field(
        default=10,
        ge=1,
        description="Number of recent messages rendered into the extraction prompt",
    )
    max_rooms: int = Field(
        default=1000,
        ge=1,
        description="Conversation rooms kept in memory before the least recently used is dropped",
    )

    @property
    def has_ankr_key(self) -> bool:
        return bool(self.ankr_api_key)

    @property
    def has_anthropic_key(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def has_llm_key(self) -> bool:
        """Check if we have an API key for the configured LLM provider"""
        if self.llm_provider.lower() in ["anthropic", "claude"]:
            return self.has_anthropic_key
        return False


class AnkrConfig(BaseModel):
    """Resolved Ankr configuration for a single handler invocation."""

    ankr_api_key: str = Field(min_length=1)
    ankr_endpoint: str = Field(default=DEFAULT_ANKR_ENDPOINT)

    @property
    def rpc_url(self) -> str:
        return f"{self.ankr_endpoint}{self.ankr_api_key}"


def resolve_ankr_api_key(runtime: Any = None) -> str:
    """Resolve the API key: runtime setting, then environment, then settings default."""

    if runtime is not None:
        value = runtime.get_setting(ANKR_API_KEY_SETTING)
        if value:
            return str(value)
    return os.getenv(ANKR_API_KEY_SETTING) or settings.ankr_api_key


def validate_ankr_config(runtime: Any = None) -> AnkrConfig:
    """Build the Ankr configuration or raise ConfigurationError."""

    api_key = resolve_ankr_api_key(runtime)
    if not api_key or not api_key.strip():
        raise ConfigurationError(f"{ANKR_API_KEY_SETTING} not found in environment variables")

    try:
        return AnkrConfig(ankr_api_key=api_key.strip(), ankr_endpoint=settings.ankr_endpoint)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Failed to validate ANKR configuration: {e}") from e


# Global settings instance
settings = Settings()
