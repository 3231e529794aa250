"""In-memory rich-text buffer implementing the document adapter contract.

Text is plain; inline styles are stored as one style set per character.
Key presses go through capture listeners, then editor-level listeners,
then the buffer's own default editing, mirroring how a browser editor
dispatches keydown events.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from pi.richtext.config import BOLD_STYLE, MARKDOWN_SYNTAX_STYLE, VARIABLE_STYLE
from pi.richtext.document import (
    BlurEvent,
    BlurHandler,
    Bounds,
    ChangeEvent,
    ChangeHandler,
    ChangeSource,
    KeyEvent,
    KeyHandler,
    Selection,
    SelectionChangeEvent,
    SelectionHandler,
    Unsubscribe,
)
from pi.richtext.errors import ConfigurationError, StaleRangeError

DEFAULT_FORMATS: tuple[str, ...] = (
    BOLD_STYLE,
    "italic",
    "underline",
    VARIABLE_STYLE,
    MARKDOWN_SYNTAX_STYLE,
)

H = TypeVar("H")


def _subscribe(handlers: list[H], handler: H) -> Unsubscribe:
    handlers.append(handler)

    def unsubscribe() -> None:
        if handler in handlers:
            handlers.remove(handler)

    return unsubscribe


def _map_insert(position: int, index: int, count: int) -> int:
    return position + count if index <= position else position


def _map_delete(position: int, index: int, count: int) -> int:
    if position <= index:
        return position
    if position >= index + count:
        return position - count
    return index


class TextDocument:
    """A headless editable document with inline styles and events."""

    def __init__(
        self,
        text: str = "",
        *,
        formats: Iterable[str] = DEFAULT_FORMATS,
        line_height: float = 20.0,
        char_width: float = 8.0,
    ) -> None:
        self._text = text
        self._styles: list[set[str]] = [set() for _ in text]
        self._selection: Selection | None = None
        self._last_selection: Selection | None = None
        self._formats: set[str] = set()
        self._line_height = line_height
        self._char_width = char_width

        self._change_handlers: list[ChangeHandler] = []
        self._selection_handlers: list[SelectionHandler] = []
        self._blur_handlers: list[BlurHandler] = []
        self._capture_listeners: list[KeyHandler] = []
        self._key_listeners: list[KeyHandler] = []

        for name in formats:
            self.register_format(name)

    # ------------------------------------------------------------------
    # Text access
    # ------------------------------------------------------------------

    @property
    def length(self) -> int:
        return len(self._text)

    def get_text(self, index: int = 0, length: int | None = None) -> str:
        if length is None:
            return self._text[index:]
        return self._text[index : index + length]

    def set_text(self, text: str, source: ChangeSource = "api") -> None:
        """Replace the whole content."""
        if self._text:
            self.delete_text(0, len(self._text), source)
        if text:
            self.insert_text(0, text, source)

    def _check_range(self, start: int, length: int) -> None:
        if start < 0 or length < 0 or start + length > len(self._text):
            raise StaleRangeError(start, length, len(self._text))

    def insert_text(
        self,
        index: int,
        text: str,
        source: ChangeSource = "api",
        formats: Iterable[str] = (),
    ) -> None:
        self._check_range(index, 0)
        if not text:
            return

        styles = set(formats)
        unknown = styles - self._formats
        if unknown:
            raise ConfigurationError(f"Unregistered formats: {sorted(unknown)}")

        self._text = self._text[:index] + text + self._text[index:]
        self._styles[index:index] = [set(styles) for _ in text]

        previous = self._selection
        if previous is not None:
            start = _map_insert(previous.index, index, len(text))
            end = _map_insert(previous.index + previous.length, index, len(text))
            self._selection = Selection(start, end - start)

        self._emit_change(ChangeEvent("insert", index, len(text), source))
        self._emit_selection(previous, source)

    def delete_text(self, index: int, length: int, source: ChangeSource = "api") -> None:
        self._check_range(index, length)
        if length == 0:
            return

        self._text = self._text[:index] + self._text[index + length :]
        del self._styles[index : index + length]

        previous = self._selection
        if previous is not None:
            start = _map_delete(previous.index, index, length)
            end = _map_delete(previous.index + previous.length, index, length)
            self._selection = Selection(start, end - start)

        self._emit_change(ChangeEvent("delete", index, length, source))
        self._emit_selection(previous, source)

    # ------------------------------------------------------------------
    # Selection and focus
    # ------------------------------------------------------------------

    @property
    def focused(self) -> bool:
        return self._selection is not None

    def get_selection(self) -> Selection | None:
        return self._selection

    def set_selection(self, index: int, length: int = 0, source: ChangeSource = "api") -> None:
        self._check_range(index, length)
        previous = self._selection
        self._selection = Selection(index, length)
        self._emit_selection(previous, source)

    def focus(self) -> None:
        """Give the document a caret, restoring the last one it had."""
        if self._selection is not None:
            return
        restored = self._last_selection or Selection(len(self._text))
        if restored.index + restored.length > len(self._text):
            restored = Selection(len(self._text))
        self.set_selection(restored.index, restored.length, "api")

    def blur(self, *, into_suggestions: bool = False) -> None:
        """Drop the caret and notify blur listeners."""
        if self._selection is None:
            return
        previous = self._selection
        self._last_selection = previous
        self._selection = None
        self._emit_selection(previous, "user")
        event = BlurEvent(into_suggestions=into_suggestions)
        for handler in list(self._blur_handlers):
            handler(event)

    def get_bounds(self, index: int) -> Bounds | None:
        """Monospace caret rectangle; None for an index outside the text."""
        if index < 0 or index > len(self._text):
            return None
        line = self._text.count("\n", 0, index)
        column = index - (self._text.rfind("\n", 0, index) + 1)
        return Bounds(
            top=line * self._line_height,
            left=column * self._char_width,
            height=self._line_height,
        )

    # ------------------------------------------------------------------
    # Inline formats
    # ------------------------------------------------------------------

    def register_format(self, name: str) -> None:
        if not name:
            raise ConfigurationError("Format name must not be empty")
        self._formats.add(name)

    def is_format_registered(self, name: str) -> bool:
        return name in self._formats

    def format_range(
        self,
        start: int,
        length: int,
        style: str,
        enabled: bool,
        source: ChangeSource = "api",
    ) -> None:
        if style not in self._formats:
            raise ConfigurationError(f"Format {style!r} is not registered")
        self._check_range(start, length)
        if length == 0:
            return

        changed = False
        for styles in self._styles[start : start + length]:
            if enabled and style not in styles:
                styles.add(style)
                changed = True
            elif not enabled and style in styles:
                styles.discard(style)
                changed = True

        if changed:
            self._emit_change(ChangeEvent("format", start, length, source))

    def get_format(self, index: int) -> frozenset[str]:
        if index < 0 or index >= len(self._styles):
            return frozenset()
        return frozenset(self._styles[index])

    def styled_ranges(self, style: str) -> list[tuple[int, int]]:
        """Maximal half-open runs carrying ``style``."""
        runs: list[tuple[int, int]] = []
        run_start: int | None = None
        for i, styles in enumerate(self._styles):
            if style in styles:
                if run_start is None:
                    run_start = i
            elif run_start is not None:
                runs.append((run_start, i))
                run_start = None
        if run_start is not None:
            runs.append((run_start, len(self._styles)))
        return runs

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_change(self, handler: ChangeHandler) -> Unsubscribe:
        return _subscribe(self._change_handlers, handler)

    def on_selection_change(self, handler: SelectionHandler) -> Unsubscribe:
        return _subscribe(self._selection_handlers, handler)

    def on_blur(self, handler: BlurHandler) -> Unsubscribe:
        return _subscribe(self._blur_handlers, handler)

    def add_key_listener(self, handler: KeyHandler, *, capture: bool = False) -> Unsubscribe:
        listeners = self._capture_listeners if capture else self._key_listeners
        return _subscribe(listeners, handler)

    def _emit_change(self, event: ChangeEvent) -> None:
        for handler in list(self._change_handlers):
            handler(event)

    def _emit_selection(self, previous: Selection | None, source: ChangeSource) -> None:
        if previous == self._selection:
            return
        event = SelectionChangeEvent(self._selection, previous, source)
        for handler in list(self._selection_handlers):
            handler(event)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def press_key(self, key: str) -> KeyEvent:
        """Dispatch a key press through the listener chain."""
        event = KeyEvent(key)
        for listener in [*self._capture_listeners, *self._key_listeners]:
            listener(event)
            if event.propagation_stopped:
                break
        if not event.default_prevented:
            self._default_key_action(key)
        return event

    def type_text(self, text: str) -> None:
        """Press one key per character."""
        for char in text:
            self.press_key(char)

    def _default_key_action(self, key: str) -> None:
        selection = self._selection
        if selection is None:
            return

        actions: dict[str, Callable[[Selection], None]] = {
            "Backspace": self._backspace,
            "Delete": self._forward_delete,
            "ArrowLeft": self._move_left,
            "ArrowRight": self._move_right,
            "Home": self._line_start,
            "End": self._line_end,
            "Enter": lambda sel: self._type("\n", sel),
            "Tab": lambda sel: self._type("\t", sel),
        }
        action = actions.get(key)
        if action is not None:
            action(selection)
        elif len(key) == 1:
            self._type(key, selection)

    def _type(self, chars: str, selection: Selection) -> None:
        if not selection.is_collapsed:
            self.delete_text(selection.index, selection.length, "user")
        self.insert_text(selection.index, chars, "user")

    def _backspace(self, selection: Selection) -> None:
        if not selection.is_collapsed:
            self.delete_text(selection.index, selection.length, "user")
        elif selection.index > 0:
            self.delete_text(selection.index - 1, 1, "user")

    def _forward_delete(self, selection: Selection) -> None:
        if not selection.is_collapsed:
            self.delete_text(selection.index, selection.length, "user")
        elif selection.index < len(self._text):
            self.delete_text(selection.index, 1, "user")

    def _move_left(self, selection: Selection) -> None:
        index = selection.index if selection.length else max(0, selection.index - 1)
        self.set_selection(index, 0, "user")

    def _move_right(self, selection: Selection) -> None:
        end = selection.index + selection.length
        index = end if selection.length else min(len(self._text), end + 1)
        self.set_selection(index, 0, "user")

    def _line_start(self, selection: Selection) -> None:
        self.set_selection(self._text.rfind("\n", 0, selection.index) + 1, 0, "user")

    def _line_end(self, selection: Selection) -> None:
        end = self._text.find("\n", selection.index)
        self.set_selection(len(self._text) if end == -1 else end, 0, "user")
