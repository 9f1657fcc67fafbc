"""
Action manifest and registry.

An action is what the host agent sees: a unique name, synonyms used for
intent matching, a description, example utterances, an applicability
predicate and the handler pipeline instance.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from ..core.pipeline import ActionDescriptor, AnkrActionHandler, ProviderFactory, create_ankr_handler
from ..core.runtime import AgentRuntime, Memory, State
from ..providers.ankr import AnkrProvider

ValidateFn = Callable[[AgentRuntime, Memory, Optional[State]], Awaitable[bool]]


@dataclass(frozen=True)
class ActionExample:
    """One turn of an example conversation."""
    user: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"user": self.user, "content": {"text": self.text}}


async def always_applicable(runtime: AgentRuntime, message: Memory, state: Optional[State] = None) -> bool:
    return True


def user_examples(*texts: str) -> List[List[ActionExample]]:
    """Single-turn user examples, one conversation per utterance."""
    return [[ActionExample(user="user", text=text)] for text in texts]


@dataclass
class Action:
    """A named, independently invocable query capability."""
    name: str
    similes: List[str]
    description: str
    examples: List[List[ActionExample]]
    handler: AnkrActionHandler
    validate: ValidateFn = always_applicable

    @property
    def descriptor(self) -> ActionDescriptor:
        return self.handler.descriptor

    def to_manifest(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "similes": list(self.similes),
            "description": self.description,
            "examples": [[turn.to_dict() for turn in conversation] for conversation in self.examples],
        }


def define_action(
    name: str,
    similes: Iterable[str],
    description: str,
    examples: List[List[ActionExample]],
    descriptor: ActionDescriptor,
    provider_factory: ProviderFactory = AnkrProvider,
) -> Action:
    return Action(
        name=name,
        similes=list(similes),
        description=description,
        examples=examples,
        handler=create_ankr_handler(descriptor, provider_factory=provider_factory),
    )


class ActionRegistry:
    """
    Registry of actions the host can invoke.

    Lookup accepts the action name or any of its similes, case-insensitively.
    """

    def __init__(self, actions: Iterable[Action] = (), logger: Optional[logging.Logger] = None):
        self._actions: Dict[str, Action] = {}
        self.logger = logger or logging.getLogger(__name__)
        for action in actions:
            self.register(action)

    def register(self, action: Action) -> None:
        """Register an action; names must be unique."""
        if action.name in self._actions:
            raise ValueError(f"Action already registered: {action.name}")
        self._actions[action.name] = action
        self.logger.debug(f"Registered action {action.name}")

    def get(self, name: str) -> Optional[Action]:
        key = name.strip().upper()
        if key in self._actions:
            return self._actions[key]
        for action in self._actions.values():
            if key in action.similes:
                return action
        return None

    def has_action(self, name: str) -> bool:
        return self.get(name) is not None

    def names(self) -> List[str]:
        return list(self._actions)

    def all(self) -> List[Action]:
        return list(self._actions.values())

    def manifest(self) -> List[Dict[str, Any]]:
        return [action.to_manifest() for action in self._actions.values()]

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self):
        return iter(self._actions.values())
