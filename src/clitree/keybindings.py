"""Tree picker keybindings manager."""

from __future__ import annotations

from typing import Literal

from clitree.keys import KeyId, matches_key

TreeAction = Literal[
    "cursorUp",
    "cursorDown",
    "descend",
    "ascend",
    "toggle",
    "quit",
]

TREE_ACTIONS: tuple[TreeAction, ...] = (
    "cursorUp",
    "cursorDown",
    "descend",
    "ascend",
    "toggle",
    "quit",
)

TreeKeybindingsConfig = dict[TreeAction, KeyId | list[KeyId]]

DEFAULT_TREE_KEYBINDINGS: dict[TreeAction, KeyId | list[KeyId]] = {
    "cursorUp": ["up", "k"],
    "cursorDown": ["down", "j"],
    "descend": ["right", "l"],
    "ascend": ["left", "h", "backspace", "delete"],
    "toggle": "space",
    # enter ends the session rather than activating the current node
    "quit": ["ctrl+c", "q", "enter"],
}

# Overrides that give enter the conventional activate meaning instead
ENTER_ACTIVATES_KEYBINDINGS: TreeKeybindingsConfig = {
    "descend": ["right", "l", "enter"],
    "quit": ["ctrl+c", "q"],
}


class TreeKeybindingsManager:
    """Manages keybindings for the tree picker."""

    def __init__(self, config: TreeKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[TreeAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: TreeKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_TREE_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, keys in config.items():
            if action not in TREE_ACTIONS:
                raise ValueError(f"unknown tree action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: TreeAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def action_for(self, data: str) -> TreeAction | None:
        """Return the first action bound to *data*, in declaration order."""
        for action in TREE_ACTIONS:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: TreeAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: TreeKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_tree_keybindings: TreeKeybindingsManager | None = None


def get_tree_keybindings() -> TreeKeybindingsManager:
    global _global_tree_keybindings
    if _global_tree_keybindings is None:
        _global_tree_keybindings = TreeKeybindingsManager()
    return _global_tree_keybindings


def set_tree_keybindings(manager: TreeKeybindingsManager) -> None:
    global _global_tree_keybindings
    _global_tree_keybindings = manager
