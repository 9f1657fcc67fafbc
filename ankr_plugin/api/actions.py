"""
HTTP surface for the action registry.

Runs one action per request against a shared in-memory runtime, so messages
posted with the same ``room_id`` form one conversation.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..actions import ActionRegistry, build_registry
from ..core.runtime import HandlerResult, InMemoryRuntime, Memory
from ..errors import APIError, ConfigurationError, PluginError, ValidationError

router = APIRouter(prefix="/actions")
_logger = logging.getLogger(__name__)

_registry: Optional[ActionRegistry] = None
_runtime: Optional[InMemoryRuntime] = None


def get_registry() -> ActionRegistry:
    global _registry
    if _registry is None:
        _registry = build_registry()
    return _registry


def get_runtime() -> InMemoryRuntime:
    global _runtime
    if _runtime is None:
        _runtime = InMemoryRuntime()
    return _runtime


class ActionRunRequest(BaseModel):
    text: str = Field(..., min_length=1, description="User message the parameters are extracted from")
    room_id: Optional[str] = Field(default=None, description="Conversation id; omit to start a new one")
    user_id: Optional[str] = Field(default=None, description="Sender id")


class ActionRunResponse(BaseModel):
    action: str
    success: bool
    text: str
    content: Dict[str, Any] = Field(default_factory=dict)


def _status_for(error: PluginError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ConfigurationError):
        return 503
    if isinstance(error, APIError):
        return 502
    return 500


@router.get("")
async def list_actions(registry: ActionRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
    """Manifest of every registered action"""
    return registry.manifest()


@router.post("/{name}")
async def run_action(
    name: str,
    body: ActionRunRequest,
    registry: ActionRegistry = Depends(get_registry),
    runtime: InMemoryRuntime = Depends(get_runtime),
) -> ActionRunResponse:
    """Run one action against a chat message"""

    action = registry.get(name)
    if action is None:
        raise HTTPException(status_code=404, detail=f"Unknown action '{name}'")

    message_fields: Dict[str, Any] = {}
    if body.room_id:
        message_fields["room_id"] = body.room_id
    if body.user_id:
        message_fields["user_id"] = body.user_id
    message = Memory.from_text(body.text, agent_id=runtime.agent_id, **message_fields)

    delivered: List[HandlerResult] = []

    try:
        await action.handler(runtime, message, callback=delivered.append)
    except PluginError as e:
        detail = delivered[-1].text if delivered else e.message
        _logger.warning(f"Action {action.name} failed: {e.message}")
        raise HTTPException(status_code=_status_for(e), detail=detail)

    result = delivered[-1]
    return ActionRunResponse(
        action=action.name,
        success=result.success,
        text=result.text,
        content=result.content,
    )
