"""Live highlighting of complete ``trigger...closing`` spans."""

from __future__ import annotations

import logging
from typing import Callable

from pi.richtext.config import EditorOptions
from pi.richtext.document import DocumentAdapter
from pi.richtext.errors import StaleRangeError
from pi.richtext.patterns import HighlightSpan, TemplatePattern
from pi.richtext.scheduling import Debouncer

logger = logging.getLogger(__name__)

Submit = Callable[[str, Callable[[], None]], None]


class PatternHighlighter:
    """Keeps the variable style on exactly the template spans of the document.

    Each repaint clears the style over the whole text and re-applies it
    to every match, so stale highlights never survive a repaint.
    Repaints requested through ``schedule`` are debounced; when the timer
    fires the repaint is handed to ``submit`` (the editor's event
    pipeline) so it never runs in the middle of another mutation.
    """

    def __init__(
        self,
        document: DocumentAdapter,
        options: EditorOptions,
        submit: Submit | None = None,
    ) -> None:
        self._document = document
        self._style = options.variable_style
        self._pattern = TemplatePattern(options.trigger, options.closing)
        self._submit = submit
        self._spans: tuple[HighlightSpan, ...] = ()
        self._debouncer = Debouncer(self._on_timer, options.highlight_delay)

    @property
    def pattern(self) -> TemplatePattern:
        return self._pattern

    @property
    def spans(self) -> tuple[HighlightSpan, ...]:
        """Spans applied by the last repaint."""
        return self._spans

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def repaint(self, text: str | None = None) -> tuple[HighlightSpan, ...]:
        if text is None:
            text = self._document.get_text()
        spans = self._pattern.find_spans(text)

        self._format(HighlightSpan(0, len(text)), enabled=False)
        for span in spans:
            self._format(span, enabled=True)

        self._spans = tuple(spans)
        logger.debug("Repainted %d template spans", len(spans))
        return self._spans

    def _format(self, span: HighlightSpan, *, enabled: bool) -> None:
        try:
            self._document.format_range(span.start, span.length, self._style, enabled, "silent")
        except StaleRangeError as e:
            logger.warning("Skipping stale highlight range %s: %s", span, e)

    def schedule(self) -> None:
        """Request a debounced repaint."""
        self._debouncer.trigger()

    def _on_timer(self) -> None:
        if self._submit is not None:
            self._submit("highlight", self.repaint)
        else:
            self.repaint()

    def flush(self) -> None:
        """Run a pending repaint now."""
        self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()
