"""Keybindings for the suggestion dropdown."""

from __future__ import annotations

from typing import Literal

from pi.richtext.keys import KeyId, matches_key

SuggestionAction = Literal[
    "selectUp",
    "selectDown",
    "selectConfirm",
    "selectCancel",
]

SuggestionKeybindingsConfig = dict[SuggestionAction, KeyId | list[KeyId]]

DEFAULT_SUGGESTION_KEYBINDINGS: dict[SuggestionAction, KeyId | list[KeyId]] = {
    "selectUp": "ArrowUp",
    "selectDown": "ArrowDown",
    "selectConfirm": ["Enter", "Tab"],
    "selectCancel": "Escape",
}


class SuggestionKeybindingsManager:
    """Maps suggestion actions to the keys that trigger them."""

    def __init__(
        self, config: SuggestionKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[SuggestionAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: SuggestionKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_SUGGESTION_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, key: str, action: SuggestionAction) -> bool:
        """Check if a key press triggers a specific action."""
        return any(matches_key(key, bound) for bound in self._action_to_keys.get(action, []))

    def action_for(self, key: str) -> SuggestionAction | None:
        """The first action bound to ``key``, if any."""
        for action in self._action_to_keys:
            if self.matches(key, action):
                return action
        return None

    def get_keys(self, action: SuggestionAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: SuggestionKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_suggestion_keybindings: SuggestionKeybindingsManager | None = None


def get_suggestion_keybindings() -> SuggestionKeybindingsManager:
    global _global_suggestion_keybindings
    if _global_suggestion_keybindings is None:
        _global_suggestion_keybindings = SuggestionKeybindingsManager()
    return _global_suggestion_keybindings


def set_suggestion_keybindings(manager: SuggestionKeybindingsManager) -> None:
    global _global_suggestion_keybindings
    _global_suggestion_keybindings = manager
