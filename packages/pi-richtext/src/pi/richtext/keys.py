"""Key identifiers for host keyboard events.

Hosts report keys by their DOM-style names (``"ArrowDown"``, ``"Enter"``).
Short terminal-style aliases (``"down"``, ``"esc"``) are accepted in
keybinding configuration and normalized here.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants."""

    arrow_up = "ArrowUp"
    arrow_down = "ArrowDown"
    arrow_left = "ArrowLeft"
    arrow_right = "ArrowRight"
    enter = "Enter"
    tab = "Tab"
    escape = "Escape"
    backspace = "Backspace"
    delete = "Delete"
    home = "Home"
    end = "End"
    asterisk = "*"


_ALIASES: dict[str, KeyId] = {
    "up": Key.arrow_up,
    "down": Key.arrow_down,
    "left": Key.arrow_left,
    "right": Key.arrow_right,
    "enter": Key.enter,
    "return": Key.enter,
    "tab": Key.tab,
    "escape": Key.escape,
    "esc": Key.escape,
    "backspace": Key.backspace,
    "delete": Key.delete,
    "home": Key.home,
    "end": Key.end,
}


def normalize_key(key: str) -> KeyId:
    """Map an alias to its DOM key name; other keys are returned unchanged."""
    if len(key) == 1:
        return key
    return _ALIASES.get(key.lower(), key)


def matches_key(key: str, key_id: KeyId) -> bool:
    """Check whether a reported key corresponds to ``key_id``."""
    return normalize_key(key) == normalize_key(key_id)
