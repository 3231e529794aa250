"""Keyboard navigation of the suggestion dropdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from pi.richtext.document import DocumentAdapter, KeyEvent, Unsubscribe
from pi.richtext.keybindings import SuggestionKeybindingsManager, get_suggestion_keybindings
from pi.richtext.session import SuggestionSession
from pi.richtext.types import SuggestionItem

logger = logging.getLogger(__name__)

NavigationOutcome = Literal["ignored", "moved", "confirm", "cancel"]


@dataclass(frozen=True)
class NavigationResult:
    session: SuggestionSession
    outcome: NavigationOutcome
    item: SuggestionItem | None = None


def reduce_key(
    session: SuggestionSession,
    key: str,
    keybindings: SuggestionKeybindingsManager | None = None,
) -> NavigationResult:
    """Compute the effect of one key press on an open session."""
    if not session.is_open:
        return NavigationResult(session, "ignored")

    kb = keybindings or get_suggestion_keybindings()
    action = kb.action_for(key)

    if action == "selectDown":
        return NavigationResult(session.move(1), "moved")
    if action == "selectUp":
        return NavigationResult(session.move(-1), "moved")
    if action == "selectConfirm":
        return NavigationResult(session, "confirm", session.selected_item)
    if action == "selectCancel":
        return NavigationResult(session.close(), "cancel")
    return NavigationResult(session, "ignored")


class KeyboardNavigationController:
    """Captures dropdown keys at the document level while a session is open.

    The capture listener is attached when ``sync`` sees an open session
    and detached as soon as it sees a closed one, so normal typing is
    never intercepted. Handled keys never reach the document's own key
    handling.
    """

    def __init__(
        self,
        document: DocumentAdapter,
        get_session: Callable[[], SuggestionSession],
        on_result: Callable[[NavigationResult], None],
        keybindings: SuggestionKeybindingsManager | None = None,
    ) -> None:
        self._document = document
        self._get_session = get_session
        self._on_result = on_result
        self._keybindings = keybindings
        self._unsubscribe: Unsubscribe | None = None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def sync(self, session: SuggestionSession) -> None:
        if session.is_open and self._unsubscribe is None:
            self._unsubscribe = self._document.add_key_listener(self.handle_key, capture=True)
            logger.debug("Keyboard navigation attached")
        elif not session.is_open:
            self.detach()

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.debug("Keyboard navigation detached")

    def handle_key(self, event: KeyEvent) -> None:
        result = reduce_key(self._get_session(), event.key, self._keybindings)
        if result.outcome == "ignored":
            return
        event.prevent_default()
        event.stop_propagation()
        self._on_result(result)
