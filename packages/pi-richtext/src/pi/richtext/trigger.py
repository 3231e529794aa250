"""Trigger detection: decides whether a suggestion session is open.

Detection is recomputed from the document text and caret on every
event, so running it twice on the same state yields the same session.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from pi.richtext.config import EditorOptions
from pi.richtext.document import Bounds, DocumentAdapter, Selection
from pi.richtext.filtering import filter_suggestions
from pi.richtext.session import Anchor, SuggestionSession
from pi.richtext.types import SuggestionItem

logger = logging.getLogger(__name__)

BoundsLookup = Callable[[int], Bounds | None]


def find_open_trigger(text: str, cursor: int, trigger: str, closing: str) -> int | None:
    """Start of the rightmost trigger before ``cursor`` not yet closed, or None.

    A trigger that ends exactly at the cursor (just typed) is the
    rightmost one, so it is found by the same scan.
    """
    start = text.rfind(trigger, 0, cursor)
    if start == -1:
        return None
    if closing in text[start + len(trigger) : cursor]:
        return None
    return start


class TriggerDetector:
    """Turns document state into the next suggestion session."""

    def __init__(
        self,
        options: EditorOptions,
        suggestions: Sequence[SuggestionItem] | None = None,
    ) -> None:
        self._options = options
        self._suggestions: tuple[SuggestionItem, ...] = tuple(
            options.suggestions if suggestions is None else suggestions
        )

    @property
    def suggestions(self) -> tuple[SuggestionItem, ...]:
        return self._suggestions

    def set_suggestions(self, suggestions: Sequence[SuggestionItem]) -> None:
        self._suggestions = tuple(suggestions)

    def on_document_event(
        self, document: DocumentAdapter, previous: SuggestionSession
    ) -> SuggestionSession:
        return self.detect(
            document.get_text(),
            document.get_selection(),
            previous,
            document.get_bounds,
        )

    def detect(
        self,
        text: str,
        selection: Selection | None,
        previous: SuggestionSession,
        bounds_at: BoundsLookup | None = None,
    ) -> SuggestionSession:
        if selection is None:
            return previous
        if selection.length > 0:
            return self._close(previous, "range selection")

        trigger = self._options.trigger
        cursor = min(selection.index, len(text))
        start = find_open_trigger(text, cursor, trigger, self._options.closing)
        if start is None:
            return self._close(previous, "no open trigger")

        query = text[start + len(trigger) : cursor]
        items = filter_suggestions(
            self._suggestions,
            query,
            match_description=self._options.match_description,
        )

        selected_index = 0
        if previous.resume_start == start and previous.query == query:
            selected_index = min(previous.selected_index, max(len(items) - 1, 0))

        if not previous.is_open:
            logger.debug("Opening suggestion session at %d (query %r)", start, query)

        return SuggestionSession(
            is_open=True,
            trigger_start=start,
            query=query,
            filtered_items=items,
            selected_index=selected_index,
            anchor=self._anchor(bounds_at, start),
            last_trigger_start=start,
        )

    def _anchor(self, bounds_at: BoundsLookup | None, start: int) -> Anchor | None:
        if bounds_at is None:
            return None
        bounds = bounds_at(start)
        if bounds is None:
            return None
        return Anchor(
            top=bounds.top + bounds.height + self._options.anchor_padding,
            left=bounds.left,
        )

    @staticmethod
    def _close(previous: SuggestionSession, reason: str) -> SuggestionSession:
        if previous.is_open:
            logger.debug("Closing suggestion session: %s", reason)
        return previous.close()
