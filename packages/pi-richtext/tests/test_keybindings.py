"""Tests for pi.richtext.keys and pi.richtext.keybindings."""

from __future__ import annotations

from pi.richtext.keybindings import (
    DEFAULT_SUGGESTION_KEYBINDINGS,
    SuggestionKeybindingsManager,
    get_suggestion_keybindings,
    set_suggestion_keybindings,
)
from pi.richtext.keys import Key, matches_key, normalize_key


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class TestKeys:
    """Key name normalization."""

    def test_aliases_normalize_to_dom_names(self) -> None:
        assert normalize_key("down") == Key.arrow_down
        assert normalize_key("esc") == Key.escape
        assert normalize_key("Return") == Key.enter

    def test_single_characters_unchanged(self) -> None:
        assert normalize_key("*") == "*"
        assert normalize_key("A") == "A"

    def test_matches_key(self) -> None:
        assert matches_key("ArrowUp", "up") is True
        assert matches_key("Escape", Key.escape) is True
        assert matches_key("a", "A") is False


# ---------------------------------------------------------------------------
# SuggestionKeybindingsManager
# ---------------------------------------------------------------------------


class TestDefaultSuggestionKeybindings:
    """Default bindings for the dropdown."""

    def test_defaults(self) -> None:
        kb = SuggestionKeybindingsManager()
        assert kb.get_keys("selectUp") == ["ArrowUp"]
        assert kb.get_keys("selectDown") == ["ArrowDown"]
        assert kb.get_keys("selectConfirm") == ["Enter", "Tab"]
        assert kb.get_keys("selectCancel") == ["Escape"]

    def test_all_actions_present(self) -> None:
        assert set(DEFAULT_SUGGESTION_KEYBINDINGS) == {
            "selectUp", "selectDown", "selectConfirm", "selectCancel",
        }

    def test_action_for(self) -> None:
        kb = SuggestionKeybindingsManager()
        assert kb.action_for("Tab") == "selectConfirm"
        assert kb.action_for("Escape") == "selectCancel"
        assert kb.action_for("x") is None


class TestCustomSuggestionKeybindings:
    """User configuration overrides defaults per action."""

    def test_override_single_action(self) -> None:
        kb = SuggestionKeybindingsManager({"selectConfirm": "Enter"})
        assert kb.matches("Enter", "selectConfirm") is True
        assert kb.matches("Tab", "selectConfirm") is False
        assert kb.get_keys("selectUp") == ["ArrowUp"]

    def test_aliases_in_config(self) -> None:
        kb = SuggestionKeybindingsManager({"selectCancel": ["esc", "q"]})
        assert kb.matches("Escape", "selectCancel") is True
        assert kb.matches("q", "selectCancel") is True

    def test_set_config_rebuilds_from_defaults(self) -> None:
        kb = SuggestionKeybindingsManager({"selectUp": "k"})
        kb.set_config({"selectDown": "j"})
        assert kb.get_keys("selectUp") == ["ArrowUp"]
        assert kb.get_keys("selectDown") == ["j"]


class TestGlobalSuggestionKeybindings:
    """get_suggestion_keybindings / set_suggestion_keybindings manage a global instance."""

    def teardown_method(self) -> None:
        set_suggestion_keybindings(SuggestionKeybindingsManager())

    def test_get_returns_singleton(self) -> None:
        assert get_suggestion_keybindings() is get_suggestion_keybindings()

    def test_set_replaces_instance(self) -> None:
        custom = SuggestionKeybindingsManager({"selectDown": "j"})
        set_suggestion_keybindings(custom)
        assert get_suggestion_keybindings() is custom
