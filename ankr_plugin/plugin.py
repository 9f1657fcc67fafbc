"""Plugin object handed to the host agent runtime."""

from dataclasses import dataclass, field
from typing import List

from .actions import ACTIONS, Action, ActionRegistry

PLUGIN_NAME = "plugin-ankr"
PLUGIN_DESCRIPTION = "Ankr Plugin for web3"


@dataclass
class Plugin:
    name: str
    description: str
    actions: List[Action] = field(default_factory=list)

    def registry(self) -> ActionRegistry:
        return ActionRegistry(self.actions)


ankr_plugin = Plugin(
    name=PLUGIN_NAME,
    description=PLUGIN_DESCRIPTION,
    actions=list(ACTIONS),
)
