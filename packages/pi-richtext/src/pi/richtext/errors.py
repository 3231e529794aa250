"""Error kinds raised by the rich-text core.

Per-event errors are recovered where they occur; only
``ConfigurationError`` is meant to reach the host application.
"""

from __future__ import annotations


class RichTextError(Exception):
    """Base class for all rich-text core errors."""


class StaleRangeError(RichTextError, IndexError):
    """A range no longer fits the buffer (usually after a concurrent edit)."""

    def __init__(self, start: int, length: int, text_length: int) -> None:
        self.start = start
        self.length = length
        self.text_length = text_length
        msg = (
            f"Range [{start}, {start + length}) is outside the document "
            f"(length {text_length})"
        )
        super().__init__(msg)


class MissingSelectionError(RichTextError):
    """An operation needed a caret but the document has no selection."""


class ConfigurationError(RichTextError, ValueError):
    """Invalid editor configuration."""
