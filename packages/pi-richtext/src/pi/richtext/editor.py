"""Dynamic text editor: trigger suggestions, live highlighting and bold shortcuts.

Binds the suggestion session, highlighter and markdown processor to one
document adapter. Document events are turned into jobs on a single
``EventPipeline``, so work triggered by a mutation (detection, rescans,
repaints) runs after that mutation has fully committed, never in the
middle of it.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, TypeVar

from pi.richtext.config import BOLD_STYLE, MARKDOWN_SYNTAX_STYLE, EditorOptions
from pi.richtext.document import (
    BlurEvent,
    ChangeEvent,
    DocumentAdapter,
    KeyEvent,
    SelectionChangeEvent,
    Unsubscribe,
)
from pi.richtext.highlight import PatternHighlighter
from pi.richtext.insertion import InsertionEngine
from pi.richtext.keybindings import SuggestionKeybindingsManager
from pi.richtext.keys import Key, matches_key
from pi.richtext.markdown_shortcuts import MarkdownShortcutProcessor
from pi.richtext.navigation import KeyboardNavigationController, NavigationResult
from pi.richtext.patterns import BoldShortcutRegion, HighlightSpan
from pi.richtext.scheduling import Debouncer, EventPipeline
from pi.richtext.session import CLOSED_SESSION, SuggestionSession
from pi.richtext.trigger import TriggerDetector
from pi.richtext.types import SuggestionItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DynamicTextEditor:
    """Suggestion, highlighting and shortcut behavior for one document."""

    def __init__(
        self,
        document: DocumentAdapter,
        options: EditorOptions | None = None,
        *,
        keybindings: SuggestionKeybindingsManager | None = None,
        on_session_change: Callable[[SuggestionSession], None] | None = None,
    ) -> None:
        self.options = options or EditorOptions()
        self.on_session_change = on_session_change
        self._document = document
        self._session = CLOSED_SESSION

        for style in (self.options.variable_style, BOLD_STYLE, MARKDOWN_SYNTAX_STYLE):
            document.register_format(style)

        self._pipeline = EventPipeline()
        self._detector = TriggerDetector(self.options)
        self._inserter = InsertionEngine(document, self.options)
        self._highlighter = PatternHighlighter(document, self.options, self._pipeline.submit)
        self._markdown = (
            MarkdownShortcutProcessor(document) if self.options.markdown_shortcuts else None
        )
        self._navigation = KeyboardNavigationController(
            document,
            get_session=lambda: self._session,
            on_result=self._apply_navigation,
            keybindings=keybindings,
        )
        self._retrigger = Debouncer(self._on_retrigger, self.options.retrigger_delay)

        self._subscriptions: list[Unsubscribe] = [
            document.on_change(self._on_change),
            document.on_selection_change(self._on_selection_change),
            document.on_blur(self._on_blur),
        ]
        if self._markdown is not None:
            self._subscriptions.append(document.add_key_listener(self._on_key))

        self._pipeline.submit("initial", self._initial_pass)

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------

    @property
    def document(self) -> DocumentAdapter:
        return self._document

    @property
    def session(self) -> SuggestionSession:
        return self._session

    @property
    def highlight_spans(self) -> tuple[HighlightSpan, ...]:
        return self._highlighter.spans

    @property
    def bold_regions(self) -> tuple[BoldShortcutRegion, ...]:
        return self._markdown.regions if self._markdown is not None else ()

    @property
    def suggestions(self) -> tuple[SuggestionItem, ...]:
        return self._detector.suggestions

    @property
    def navigation_attached(self) -> bool:
        return self._navigation.attached

    # ------------------------------------------------------------------
    # Renderer intents
    # ------------------------------------------------------------------

    def select(self, item: SuggestionItem) -> None:
        """Insert ``item`` for the open session (pointer selection)."""
        self._run_step("insert", lambda: self._insert(item))

    def navigate(self, delta: int) -> None:
        self._set_session(self._session.move(delta))

    def close(self) -> None:
        self._set_session(self._session.close())

    def blur(self, *, into_suggestions: bool = False) -> None:
        """Close the session unless focus moved into the dropdown."""
        if not into_suggestions:
            self._run_step("blur", self.close)

    def set_suggestions(self, suggestions: Sequence[SuggestionItem]) -> None:
        self._detector.set_suggestions(suggestions)
        if self._session.is_open:
            self._run_step("detect", self._detect)

    def flush(self) -> None:
        """Run pending debounced work now."""
        self._retrigger.flush()
        self._highlighter.flush()

    def dispose(self) -> None:
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self._navigation.detach()
        self._highlighter.cancel()
        self._retrigger.cancel()
        self._pipeline.clear()
        logger.debug("Editor detached from document")

    # ------------------------------------------------------------------
    # Document events
    # ------------------------------------------------------------------

    def _on_change(self, event: ChangeEvent) -> None:
        if event.source == "silent" or event.kind == "format":
            return
        self._pipeline.submit("detect", self._detect)
        if self._markdown is not None:
            self._pipeline.submit("markdown", self._markdown.rescan)
        self._highlighter.schedule()

    def _on_selection_change(self, event: SelectionChangeEvent) -> None:
        if event.source == "silent" or event.selection is None:
            return
        self._pipeline.submit("detect", self._detect)

    def _on_blur(self, event: BlurEvent) -> None:
        self.blur(into_suggestions=event.into_suggestions)

    def _on_key(self, event: KeyEvent) -> None:
        if self._markdown is None or not matches_key(event.key, Key.asterisk):
            return
        if self._pipeline.running:
            # Key dispatched from inside a job: let the literal asterisk through
            return
        markdown = self._markdown
        self._run_step("asterisk", lambda: markdown.handle_key(event))

    def _on_retrigger(self) -> None:
        self._pipeline.submit("retrigger", self._detect)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _run_step(self, name: str, step: Callable[[], T]) -> T | None:
        """Run ``step`` on the pipeline; None when it had to be queued."""
        results: list[T] = []
        self._pipeline.submit(name, lambda: results.append(step()))
        return results[0] if results else None

    def _initial_pass(self) -> None:
        self._highlighter.repaint()
        if self._markdown is not None:
            self._markdown.rescan()

    def _detect(self) -> None:
        self._set_session(self._detector.on_document_event(self._document, self._session))

    def _insert(self, item: SuggestionItem) -> None:
        session = self._inserter.insert(item, self._session)
        self._set_session(session)
        if not session.is_open:
            self._retrigger.trigger()

    def _apply_navigation(self, result: NavigationResult) -> None:
        if result.outcome == "confirm":
            if result.item is None:
                logger.debug("Confirm with no matching suggestion")
                return
            item = result.item
            self._run_step("insert", lambda: self._insert(item))
        elif result.outcome == "cancel":
            self._set_session(result.session)
            self._document.focus()
        else:
            self._set_session(result.session)

    def _set_session(self, session: SuggestionSession) -> None:
        if session == self._session:
            return
        self._session = session
        self._navigation.sync(session)
        if self.on_session_change is not None:
            self.on_session_change(session)
