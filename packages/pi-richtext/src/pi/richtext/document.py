"""Document adapter contract consumed by the rich-text core.

The core never owns the document; it reads and mutates the host buffer
only through this interface. ``TextDocument`` in ``pi.richtext.buffer``
is the in-memory implementation used by tests and headless hosts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Protocol, runtime_checkable

from pi.richtext.errors import MissingSelectionError

# "user": typed by a person. "api": programmatic mutation from the core or
# host. "silent": formatting passes that must not be observed as edits.
ChangeSource = Literal["user", "api", "silent"]

ChangeKind = Literal["insert", "delete", "format"]

Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class Selection:
    index: int
    length: int = 0

    @property
    def is_collapsed(self) -> bool:
        return self.length == 0


@dataclass(frozen=True)
class Bounds:
    """Caret rectangle in host coordinates."""

    top: float
    left: float
    height: float


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    index: int
    length: int
    source: ChangeSource


@dataclass(frozen=True)
class SelectionChangeEvent:
    selection: Selection | None
    previous: Selection | None
    source: ChangeSource


@dataclass(frozen=True)
class BlurEvent:
    """Focus left the document; ``into_suggestions`` when it moved into the dropdown."""

    into_suggestions: bool = False


class KeyEvent:
    """A key press travelling through the listener chain."""

    __slots__ = ("key", "default_prevented", "propagation_stopped")

    def __init__(self, key: str) -> None:
        self.key = key
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def __repr__(self) -> str:
        return f"KeyEvent({self.key!r})"


ChangeHandler = Callable[[ChangeEvent], None]
SelectionHandler = Callable[[SelectionChangeEvent], None]
BlurHandler = Callable[[BlurEvent], None]
KeyHandler = Callable[[KeyEvent], None]


@runtime_checkable
class DocumentAdapter(Protocol):
    """Interface over a host rich-text buffer."""

    # Text and selection

    def get_text(self) -> str:
        """Get the full plain text."""
        ...

    def get_selection(self) -> Selection | None:
        """Current selection, or None when the document has no caret."""
        ...

    def set_selection(self, index: int, length: int = 0, source: ChangeSource = "api") -> None: ...

    def insert_text(self, index: int, text: str, source: ChangeSource = "api") -> None:
        """Insert text. Raises StaleRangeError when index is outside the text."""
        ...

    def delete_text(self, index: int, length: int, source: ChangeSource = "api") -> None:
        """Delete a range. Raises StaleRangeError when the range is outside the text."""
        ...

    def get_bounds(self, index: int) -> Bounds | None:
        """Caret rectangle at index, used to anchor the suggestion dropdown."""
        ...

    # Inline formats

    def register_format(self, name: str) -> None:
        """Register a named inline style. Registering twice is a no-op."""
        ...

    def format_range(
        self,
        start: int,
        length: int,
        style: str,
        enabled: bool,
        source: ChangeSource = "api",
    ) -> None:
        """Apply or remove an inline style over a range."""
        ...

    # Focus

    def focus(self) -> None: ...

    # Subscriptions (each returns an unsubscribe callable)

    def on_change(self, handler: ChangeHandler) -> Unsubscribe: ...

    def on_selection_change(self, handler: SelectionHandler) -> Unsubscribe: ...

    def on_blur(self, handler: BlurHandler) -> Unsubscribe: ...

    def add_key_listener(self, handler: KeyHandler, *, capture: bool = False) -> Unsubscribe:
        """Listen for key presses.

        Capture listeners run before editor-level listeners, which run
        before the document's own key handling. A listener that calls
        ``prevent_default`` suppresses the default editing behavior;
        ``stop_propagation`` skips the remaining listeners.
        """
        ...


def require_selection(document: DocumentAdapter) -> Selection:
    """The document's selection; raises MissingSelectionError when there is no caret."""
    selection = document.get_selection()
    if selection is None:
        raise MissingSelectionError("Document has no selection")
    return selection
