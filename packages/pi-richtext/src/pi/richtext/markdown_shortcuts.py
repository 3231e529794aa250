"""Markdown-style ``*text*`` bold shortcut.

Typing ``*`` auto-pairs the asterisk. On every text change the document
is rescanned for strict single-asterisk regions, whose interiors are
bolded and whose delimiters get the markdown-syntax style. Regions this
processor created are tracked: when a bounding asterisk is deleted, or
a region stops matching, its formatting is removed. Bold applied by any
other means is never touched.
"""

from __future__ import annotations

import logging

from pi.richtext.config import BOLD_STYLE, MARKDOWN_SYNTAX_STYLE
from pi.richtext.document import DocumentAdapter, KeyEvent, Selection, require_selection
from pi.richtext.errors import MissingSelectionError, StaleRangeError
from pi.richtext.keys import Key, matches_key
from pi.richtext.patterns import BoldShortcutRegion, find_bold_regions

logger = logging.getLogger(__name__)


def changed_window(old: str, new: str) -> tuple[int, int, int]:
    """Locate the single edit turning ``old`` into ``new``.

    Returns ``(start, old_end, new_end)``: ``old[start:old_end]`` was
    replaced by ``new[start:new_end]``.
    """
    limit = min(len(old), len(new))
    start = 0
    while start < limit and old[start] == new[start]:
        start += 1
    suffix = 0
    while suffix < limit - start and old[-1 - suffix] == new[-1 - suffix]:
        suffix += 1
    return start, len(old) - suffix, len(new) - suffix


def _map_position(position: int, start: int, old_end: int, new_end: int) -> int:
    if position < start:
        return position
    if position >= old_end:
        return position + new_end - old_end
    return start


class MarkdownShortcutProcessor:
    def __init__(
        self,
        document: DocumentAdapter,
        *,
        bold_style: str = BOLD_STYLE,
        syntax_style: str = MARKDOWN_SYNTAX_STYLE,
    ) -> None:
        self._document = document
        self._bold_style = bold_style
        self._syntax_style = syntax_style
        self._regions: tuple[BoldShortcutRegion, ...] = ()
        self._last_text = document.get_text()

    @property
    def regions(self) -> tuple[BoldShortcutRegion, ...]:
        """Regions currently formatted by this processor."""
        return self._regions

    # ------------------------------------------------------------------
    # Asterisk key
    # ------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> None:
        if matches_key(event.key, Key.asterisk) and self.handle_asterisk():
            event.prevent_default()

    def handle_asterisk(self) -> bool:
        """Insert an asterisk the shortcut way. Returns False when there is no caret."""
        try:
            selection = require_selection(self._document)
        except MissingSelectionError:
            logger.debug("Asterisk pressed without a caret")
            return False

        if selection.length > 0:
            self._wrap(selection)
            return True

        text = self._document.get_text()
        index = selection.index
        before = text[index - 1 : index]
        after = text[index : index + 1]

        if after == "*" and any(region.end - 1 == index for region in find_bold_regions(text)):
            # Closing delimiter of a pair: type through it
            self._document.set_selection(index + 1, 0, "api")
        elif before == "*" or after == "*":
            self._document.insert_text(index, "*", "api")
            self._document.set_selection(index + 1, 0, "api")
        else:
            self._document.insert_text(index, "**", "api")
            self._document.set_selection(index + 1, 0, "api")
        return True

    def _wrap(self, selection: Selection) -> None:
        index = selection.index
        selected = self._document.get_text()[index : index + selection.length]

        self._document.delete_text(index, selection.length, "api")
        self._document.insert_text(index, f"*{selected}*", "api")

        region = BoldShortcutRegion(index, index + len(selected) + 2)
        # Only a strict single-asterisk pair is formatted; rescan owns the rest
        if region in find_bold_regions(self._document.get_text()):
            self._apply(region)
        self._document.set_selection(region.end, 0, "api")

    # ------------------------------------------------------------------
    # Rescan
    # ------------------------------------------------------------------

    def rescan(self) -> tuple[BoldShortcutRegion, ...]:
        """Synchronize formatting with the regions present in the text."""
        text = self._document.get_text()
        start, old_end, new_end = changed_window(self._last_text, text)

        stale: list[BoldShortcutRegion] = []
        survivors: list[BoldShortcutRegion] = []
        for region in self._regions:
            moved = BoldShortcutRegion(
                _map_position(region.start, start, old_end, new_end),
                _map_position(region.end, start, old_end, new_end),
            )
            opening_deleted = start <= region.start < old_end
            closing_deleted = start <= region.end - 1 < old_end
            if opening_deleted or closing_deleted:
                logger.debug("Delimiter of bold region %s deleted", region)
                stale.append(moved)
            else:
                survivors.append(moved)

        current = find_bold_regions(text)
        current_set = set(current)
        stale.extend(region for region in survivors if region not in current_set)

        for region in stale:
            self._clear(region, len(text))
        for region in current:
            self._apply(region)

        self._regions = tuple(current)
        self._last_text = text
        return self._regions

    def _apply(self, region: BoldShortcutRegion) -> None:
        self._format(region.interior_start, region.interior_length, self._bold_style, True)
        self._format(region.start, 1, self._syntax_style, True)
        self._format(region.end - 1, 1, self._syntax_style, True)

    def _clear(self, region: BoldShortcutRegion, text_length: int) -> None:
        start = max(0, min(region.start, text_length))
        end = max(start, min(region.end, text_length))
        if end == start:
            return
        self._format(start, end - start, self._bold_style, False)
        self._format(start, end - start, self._syntax_style, False)

    def _format(self, start: int, length: int, style: str, enabled: bool) -> None:
        try:
            self._document.format_range(start, length, style, enabled, "silent")
        except StaleRangeError as e:
            logger.warning("Skipping %s format on stale range: %s", style, e)
