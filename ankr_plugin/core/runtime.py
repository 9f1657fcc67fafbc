"""
Host agent runtime interfaces.

Action handlers only need four things from the host: settings lookup,
conversation state composition, state refresh, and structured extraction.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, Union

from pydantic import BaseModel, Field

from ..config import settings
from .extraction import LLMParameterExtractor, ParameterExtractor
from .prompts import RECENT_MESSAGES_KEY
from .schema import RequestSchema

State = Dict[str, Any]


class MessageContent(BaseModel):
    text: str = ""


class Memory(BaseModel):
    """A single chat message as seen by the runtime."""
    content: MessageContent = Field(default_factory=MessageContent)
    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    agent_id: Optional[str] = None
    room_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def from_text(cls, text: str, **kwargs: Any) -> "Memory":
        return cls(content=MessageContent(text=text), **kwargs)


class HandlerResult(BaseModel):
    """Payload delivered to the handler callback, on success or failure."""
    text: str
    content: Dict[str, Any] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.content.get("success"))


HandlerCallback = Callable[[HandlerResult], Union[Awaitable[Any], Any]]


class AgentRuntime(ABC):
    """Interface the host runtime exposes to action handlers."""

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def compose_state(self, message: Memory) -> State:
        pass

    @abstractmethod
    async def update_recent_message_state(self, state: State) -> State:
        pass

    @abstractmethod
    async def generate_object(self, context: str, schema: RequestSchema) -> Dict[str, Any]:
        pass


class InMemoryRuntime(AgentRuntime):
    """
    Minimal runtime keeping recent messages per room in memory.

    Used by the HTTP host and the CLI harness. Extraction is delegated to the
    injected extractor (LLM tool calling by default).
    """

    def __init__(
        self,
        settings_overrides: Optional[Dict[str, str]] = None,
        extractor: Optional[ParameterExtractor] = None,
        history_limit: Optional[int] = None,
        max_rooms: Optional[int] = None,
        agent_id: Optional[str] = None,
    ):
        self._settings = dict(settings_overrides or {})
        self._extractor = extractor
        self._history_limit = history_limit or settings.recent_messages_limit
        self._max_rooms = max_rooms or settings.max_rooms
        self._rooms: "OrderedDict[str, Deque[Memory]]" = OrderedDict()
        self.agent_id = agent_id or str(uuid.uuid4())

    @property
    def extractor(self) -> ParameterExtractor:
        if self._extractor is None:
            self._extractor = LLMParameterExtractor()
        return self._extractor

    def get_setting(self, key: str) -> Optional[str]:
        return self._settings.get(key)

    def remember(self, message: Memory) -> None:
        room = self._rooms.get(message.room_id)
        if room is None:
            room = self._rooms[message.room_id] = deque(maxlen=self._history_limit)
            # Least recently used rooms go first
            while len(self._rooms) > self._max_rooms:
                self._rooms.popitem(last=False)
        else:
            self._rooms.move_to_end(message.room_id)
        if message not in room:
            room.append(message)

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    def _render_recent(self, room_id: Optional[str]) -> str:
        if room_id is None:
            return ""
        return "\n".join(
            f"{message.user_id}: {message.content.text}"
            for message in self._rooms.get(room_id, ())
        )

    async def compose_state(self, message: Memory) -> State:
        self.remember(message)
        return {
            "agentId": self.agent_id,
            "roomId": message.room_id,
            "userId": message.user_id,
            RECENT_MESSAGES_KEY: self._render_recent(message.room_id),
        }

    async def update_recent_message_state(self, state: State) -> State:
        updated = dict(state)
        updated[RECENT_MESSAGES_KEY] = self._render_recent(state.get("roomId"))
        return updated

    async def generate_object(self, context: str, schema: RequestSchema) -> Dict[str, Any]:
        return await self.extractor.extract(context, schema)
