"""Suggestion session state.

A session is an immutable snapshot; every transition returns a new one.
Handlers receive the current session and return the next, so there is
no captured mutable state to go stale between events.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pi.richtext.types import SuggestionItem


@dataclass(frozen=True)
class Anchor:
    """Where the renderer should place the dropdown."""

    top: float
    left: float


@dataclass(frozen=True)
class SuggestionSession:
    is_open: bool = False
    trigger_start: int | None = None
    query: str = ""
    filtered_items: tuple[SuggestionItem, ...] = ()
    selected_index: int = 0
    anchor: Anchor | None = None
    # Trigger start of the last open session, kept after Escape or blur so
    # reopening at the same place can restore the selected index.
    last_trigger_start: int | None = None

    @property
    def selected_item(self) -> SuggestionItem | None:
        if not self.is_open or not 0 <= self.selected_index < len(self.filtered_items):
            return None
        return self.filtered_items[self.selected_index]

    @property
    def resume_start(self) -> int | None:
        """Trigger start this session is (or was last) anchored at."""
        return self.trigger_start if self.is_open else self.last_trigger_start

    def close(self) -> SuggestionSession:
        """Close, remembering where the session was for a later reopen."""
        if not self.is_open:
            return self
        return replace(
            self,
            is_open=False,
            trigger_start=None,
            anchor=None,
            last_trigger_start=self.trigger_start,
        )

    def move(self, delta: int) -> SuggestionSession:
        """Move the selection cursor, clamped to the item range (no wrap)."""
        if not self.is_open or not self.filtered_items:
            return self
        index = max(0, min(self.selected_index + delta, len(self.filtered_items) - 1))
        if index == self.selected_index:
            return self
        return replace(self, selected_index=index)


CLOSED_SESSION = SuggestionSession()
