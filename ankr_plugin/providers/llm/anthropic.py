from typing import List, Dict, Any, Optional
import time

import anthropic
from anthropic import AsyncAnthropic

from .base import (
    LLMProvider, LLMMessage, LLMResponse,
    LLMProviderError, LLMProviderAPIError, LLMProviderAuthError, LLMProviderRateLimitError,
    ToolDefinition, ToolCall
)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM Provider implementation with native tool calling support"""

    supports_tools: bool = True

    def __init__(self, api_key: str, model: Optional[str] = None, **kwargs):
        if not model:
            raise ValueError("AnthropicProvider requires a model to be specified")

        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs) -> None:
        """Initialize the Anthropic client"""
        try:
            self.client = AsyncAnthropic(api_key=self.api_key, **kwargs)
        except Exception as e:
            self.logger.error(f"Failed to initialize Anthropic client: {e}")
            raise LLMProviderAuthError(f"Failed to initialize Anthropic client: {e}")

    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        tools: Optional[List[ToolDefinition]] = None,
        tool_choice: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a response from Claude with optional tool calling"""
        start_time = time.time()

        try:
            anthropic_messages = []
            system_message = None

            for msg in messages:
                if msg.role == "system":
                    system_message = msg.content
                else:
                    anthropic_messages.append({"role": msg.role, "content": msg.content or ""})

            request_params: Dict[str, Any] = {
                "model": self.model,
                "messages": anthropic_messages,
                "max_tokens": max_tokens or 1024,
            }

            if system_message:
                request_params["system"] = system_message

            if temperature is not None:
                request_params["temperature"] = temperature

            if tools:
                request_params["tools"] = [t.to_anthropic_format() for t in tools]
                if tool_choice:
                    request_params["tool_choice"] = {"type": "tool", "name": tool_choice}

            request_params.update(kwargs)

            response = await self.client.messages.create(**request_params)

            content = ""
            tool_calls = []

            if response.content:
                for block in response.content:
                    if getattr(block, "type", None) == "tool_use":
                        tool_calls.append(ToolCall(
                            id=block.id,
                            name=block.name,
                            arguments=dict(block.input or {}),
                        ))
                    elif hasattr(block, "text"):
                        content += block.text

            return LLMResponse(
                content=content if content else None,
                tool_calls=tool_calls if tool_calls else None,
                tokens_used=response.usage.output_tokens if getattr(response, "usage", None) else None,
                model=self.model,
                finish_reason=getattr(response, "stop_reason", None),
                response_time_ms=self._measure_time(start_time),
            )

        except anthropic.AuthenticationError as e:
            await self._handle_error(LLMProviderAuthError(f"Authentication failed: {e}"), "generate_response")
        except anthropic.RateLimitError as e:
            await self._handle_error(LLMProviderRateLimitError(f"Rate limit exceeded: {e}"), "generate_response")
        except anthropic.APIError as e:
            await self._handle_error(LLMProviderAPIError(f"API error: {e}"), "generate_response")
        except Exception as e:
            await self._handle_error(LLMProviderError(f"Unexpected error: {e}"), "generate_response")

    async def health_check(self) -> Dict[str, Any]:
        """Check if Anthropic API is healthy"""
        try:
            start_time = time.time()

            response = await self.generate_response(
                messages=[LLMMessage(role="user", content="Hello")],
                max_tokens=10,
                temperature=0
            )

            return {
                "status": "healthy",
                "provider": "anthropic",
                "model": self.model,
                "response_time_ms": self._measure_time(start_time),
                "test_response_length": len(response.content or ""),
            }

        except LLMProviderAuthError:
            return {
                "status": "error",
                "provider": "anthropic",
                "model": self.model,
                "error": "Authentication failed"
            }
        except LLMProviderRateLimitError:
            return {
                "status": "error",
                "provider": "anthropic",
                "model": self.model,
                "error": "Rate limit exceeded"
            }
        except Exception as e:
            return {
                "status": "error",
                "provider": "anthropic",
                "model": self.model,
                "error": str(e)
            }
