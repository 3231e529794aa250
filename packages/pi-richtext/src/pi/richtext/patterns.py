"""Literal-delimited template patterns and span types.

Trigger and closing sequences are always escaped as literal text before
being compiled, so delimiters like ``[[`` or ``$(`` behave as typed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

# Exactly one asterisk, asterisk-free content, exactly one asterisk.
BOLD_SHORTCUT_RE = re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)")


class HighlightSpan(NamedTuple):
    """Half-open ``[start, end)`` range of one complete trigger...closing match."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


class BoldShortcutRegion(NamedTuple):
    """A ``*text*`` region: ``start`` is the opening asterisk, ``end`` is one past the closing one."""

    start: int
    end: int

    @property
    def interior_start(self) -> int:
        return self.start + 1

    @property
    def interior_length(self) -> int:
        return self.end - self.start - 2


@dataclass(frozen=True)
class TemplateMatch:
    """A match found around a cursor position."""

    match: str
    start: int
    end: int


def template_regex(trigger: str, closing: str) -> re.Pattern[str]:
    """Compile ``trigger(.*?)closing`` with both delimiters taken literally."""
    return re.compile(f"{re.escape(trigger)}(.*?){re.escape(closing)}")


class TemplatePattern:
    """Scans text for complete ``trigger...closing`` spans."""

    def __init__(self, trigger: str, closing: str) -> None:
        self.trigger = trigger
        self.closing = closing
        self._regex = template_regex(trigger, closing)

    @property
    def regex(self) -> re.Pattern[str]:
        return self._regex

    def find_spans(self, text: str) -> list[HighlightSpan]:
        """Non-overlapping leftmost matches, in document order."""
        return [HighlightSpan(m.start(), m.end()) for m in self._regex.finditer(text)]

    def is_match(self, text: str) -> bool:
        return self._regex.search(text) is not None

    def extract_matches(self, text: str) -> list[str]:
        return [m.group(0) for m in self._regex.finditer(text)]

    def get_match_at_cursor(self, text: str, cursor: int) -> TemplateMatch | None:
        """Return the match containing ``cursor`` (both ends inclusive)."""
        for m in self._regex.finditer(text):
            if m.start() <= cursor <= m.end():
                return TemplateMatch(match=m.group(0), start=m.start(), end=m.end())
            if m.start() > cursor:
                break
        return None

    def is_cursor_in_match(self, text: str, cursor: int) -> bool:
        return self.get_match_at_cursor(text, cursor) is not None


def find_bold_regions(text: str) -> list[BoldShortcutRegion]:
    """All strict single-asterisk regions in ``text``."""
    return [BoldShortcutRegion(m.start(), m.end()) for m in BOLD_SHORTCUT_RE.finditer(text)]
