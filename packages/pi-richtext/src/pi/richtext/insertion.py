"""Insertion engine: replaces the triggered span with a chosen suggestion."""

from __future__ import annotations

import logging

from pi.richtext.config import EditorOptions
from pi.richtext.document import DocumentAdapter
from pi.richtext.errors import StaleRangeError
from pi.richtext.session import CLOSED_SESSION, SuggestionSession
from pi.richtext.types import SuggestionItem

logger = logging.getLogger(__name__)


class InsertionEngine:
    """Rewrites ``trigger + query`` into ``trigger + value + closing``.

    The delete and insert are one logical step: if the insert fails after
    the delete went through, the deleted text is put back.
    """

    def __init__(self, document: DocumentAdapter, options: EditorOptions) -> None:
        self._document = document
        self._options = options

    def template_for(self, item: SuggestionItem) -> str:
        return f"{self._options.trigger}{item.value}{self._options.closing}"

    def replaced_length(self, trigger_start: int, query: str) -> int:
        """Length of the span starting at the trigger that the insertion replaces."""
        selection = self._document.get_selection()
        if selection is not None and selection.index >= trigger_start:
            return selection.index - trigger_start
        # Caret gone or moved before the trigger: use the span the session saw
        return len(self._options.trigger) + len(query)

    def insert(self, item: SuggestionItem, session: SuggestionSession) -> SuggestionSession:
        """Apply ``item`` and return the closed session.

        On a stale range nothing is changed and ``session`` is returned as is.
        """
        if not session.is_open or session.trigger_start is None:
            logger.debug("Ignoring insertion of %r without an open session", item.value)
            return session

        start = session.trigger_start
        delete_length = self.replaced_length(start, session.query)
        removed = self._document.get_text()[start : start + delete_length]
        template = self.template_for(item)

        try:
            self._document.delete_text(start, delete_length, "api")
        except StaleRangeError as e:
            logger.warning("Skipping insertion of %r: %s", item.value, e)
            return session

        try:
            self._document.insert_text(start, template, "api")
        except StaleRangeError as e:
            logger.warning("Rolling back insertion of %r: %s", item.value, e)
            self._document.insert_text(start, removed, "api")
            return session

        self._document.set_selection(start + len(template), 0, "api")
        logger.debug("Inserted %r at %d", template, start)
        return CLOSED_SESSION
