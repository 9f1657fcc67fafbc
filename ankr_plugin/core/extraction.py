"""
Parameter extraction: turns the composed prompt into a candidate request object.

The candidate is untrusted; the handler pipeline re-validates it against the
same request schema before any remote call is made.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..config import settings
from ..providers.llm import LLMMessage, LLMProvider, get_llm_provider
from .schema import RequestSchema

_JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

EXTRACTION_SYSTEM_PROMPT = (
    "You extract structured request parameters for blockchain data lookups. "
    "Only use values stated in the conversation."
)


class ExtractionError(Exception):
    """Raised when the model returns nothing that can be read as parameters."""
    pass


def parse_json_block(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Read the first JSON object from a markdown code block or bare text."""
    if not text:
        return None

    candidates = [match.group(1) for match in _JSON_BLOCK_RE.finditer(text)]
    bare = _JSON_OBJECT_RE.search(text)
    if bare:
        candidates.append(bare.group(0))

    for raw in candidates:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


class ParameterExtractor(ABC):
    """Extracts a candidate request object from the composed prompt."""

    @abstractmethod
    async def extract(self, context: str, schema: RequestSchema) -> Dict[str, Any]:
        pass


class LLMParameterExtractor(ParameterExtractor):
    """
    Extraction through an LLM provider's tool calling.

    The request schema is offered as the only tool and the model is required to
    call it; the tool arguments are the candidate object. Text answers are
    accepted when they contain a JSON block.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._provider = provider
        self.max_tokens = max_tokens or settings.max_tokens
        self.temperature = settings.temperature if temperature is None else temperature
        self.logger = logger or logging.getLogger(__name__)

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = get_llm_provider()
        return self._provider

    async def extract(self, context: str, schema: RequestSchema) -> Dict[str, Any]:
        tool = schema.to_tool_definition()
        use_tools = self.provider.supports_tools

        response = await self.provider.generate_response(
            messages=[
                LLMMessage(role="system", content=EXTRACTION_SYSTEM_PROMPT),
                LLMMessage(role="user", content=context),
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            tools=[tool] if use_tools else None,
            tool_choice=tool.name if use_tools else None,
        )

        for call in response.tool_calls or []:
            if call.name == tool.name:
                return dict(call.arguments)

        parsed = parse_json_block(response.content)
        if parsed is not None:
            return parsed

        self.logger.warning(f"No parameters extracted for {schema.name}")
        raise ExtractionError(f"Could not extract parameters for {schema.name}")
