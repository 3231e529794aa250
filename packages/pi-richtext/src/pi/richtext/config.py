"""Editor configuration with JSON loading.

Options can be built directly, from a dict using either snake_case keys
or the original component prop names, or from a JSON file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pi.richtext.errors import ConfigurationError
from pi.richtext.types import SuggestionItem

DEFAULT_TRIGGER = "{{"
DEFAULT_CLOSING = "}}"

VARIABLE_STYLE = "template-variable"
MARKDOWN_SYNTAX_STYLE = "markdown-syntax"
BOLD_STYLE = "bold"

# Original prop names -> option fields
_PROP_ALIASES: dict[str, str] = {
    "suggestionTrigger": "trigger",
    "suggestionClosing": "closing",
    "highlightDelay": "highlight_delay",
    "retriggerDelay": "retrigger_delay",
    "matchDescription": "match_description",
    "markdownShortcuts": "markdown_shortcuts",
    "anchorPadding": "anchor_padding",
    "variableStyle": "variable_style",
}

_SUGGESTION_LIST = TypeAdapter(list[SuggestionItem])


@dataclass
class EditorOptions:
    """Recognized editor options."""

    trigger: str = DEFAULT_TRIGGER
    closing: str = DEFAULT_CLOSING
    suggestions: list[SuggestionItem] = field(default_factory=list)
    highlight_delay: float = 0.01
    retrigger_delay: float = 0.1
    match_description: bool = False
    markdown_shortcuts: bool = True
    anchor_padding: int = 5
    variable_style: str = VARIABLE_STYLE

    def __post_init__(self) -> None:
        if not self.trigger:
            raise ConfigurationError("trigger must be a non-empty string")
        if not self.closing:
            raise ConfigurationError("closing must be a non-empty string")
        if self.trigger == self.closing:
            raise ConfigurationError(
                f"trigger and closing must differ (both are {self.trigger!r})"
            )
        if self.highlight_delay < 0 or self.retrigger_delay < 0:
            raise ConfigurationError("debounce delays must not be negative")
        if not self.variable_style:
            raise ConfigurationError("variable_style must be a non-empty string")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorOptions:
        """Build options from a mapping, accepting original prop names."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _PROP_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown editor option: {key!r}")
            kwargs[name] = value

        if "suggestions" in kwargs:
            kwargs["suggestions"] = _validate_suggestions(kwargs["suggestions"])
        return cls(**kwargs)


def _validate_suggestions(raw: Any) -> list[SuggestionItem]:
    try:
        return _SUGGESTION_LIST.validate_python(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid suggestion list: {e}") from e


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e


def load_suggestions(path: str | Path) -> list[SuggestionItem]:
    """Load a JSON array of suggestion items."""
    return _validate_suggestions(_read_json(path))


def load_options(path: str | Path) -> EditorOptions:
    """Load editor options from a JSON object."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return EditorOptions.from_dict(data)
