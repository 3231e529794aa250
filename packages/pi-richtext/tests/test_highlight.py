"""Tests for pi.richtext.highlight -- live template highlighting."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import pytest

from pi.richtext.buffer import TextDocument
from pi.richtext.config import VARIABLE_STYLE, EditorOptions
from pi.richtext.document import ChangeEvent
from pi.richtext.highlight import PatternHighlighter
from pi.richtext.patterns import HighlightSpan


def _highlighter(
    text: str, **kwargs: object
) -> tuple[TextDocument, PatternHighlighter]:
    doc = TextDocument(text)
    return doc, PatternHighlighter(doc, EditorOptions(**kwargs))


# ---------------------------------------------------------------------------
# Repaint
# ---------------------------------------------------------------------------


class TestRepaint:
    """Full clear-and-reapply passes."""

    def test_highlights_exact_spans(self) -> None:
        doc, hl = _highlighter("Hello {{name}} and {{x}}")
        spans = hl.repaint()
        assert spans == (HighlightSpan(6, 14), HighlightSpan(19, 24))
        assert doc.styled_ranges(VARIABLE_STYLE) == [(6, 14), (19, 24)]

    def test_repaint_is_idempotent(self) -> None:
        doc, hl = _highlighter("a {{b}} c")
        first = hl.repaint()
        assert hl.repaint() == first
        assert doc.styled_ranges(VARIABLE_STYLE) == [(2, 7)]

    def test_stale_highlight_is_removed(self) -> None:
        doc, hl = _highlighter("{{a}} tail")
        hl.repaint()
        doc.delete_text(4, 1)
        hl.repaint()
        assert doc.get_text() == "{{a} tail"
        assert doc.styled_ranges(VARIABLE_STYLE) == []

    def test_highlight_follows_edits(self) -> None:
        doc, hl = _highlighter("{{a}}")
        hl.repaint()
        doc.insert_text(0, "xy ")
        hl.repaint()
        assert doc.styled_ranges(VARIABLE_STYLE) == [(3, 8)]

    def test_unclosed_trigger_not_highlighted(self) -> None:
        doc, hl = _highlighter("{{open")
        assert hl.repaint() == ()
        assert doc.styled_ranges(VARIABLE_STYLE) == []

    def test_formatting_is_silent(self) -> None:
        doc, hl = _highlighter("{{a}}")
        events: list[ChangeEvent] = []
        doc.on_change(events.append)
        hl.repaint()
        assert events
        assert all(e.kind == "format" and e.source == "silent" for e in events)

    def test_custom_style_and_delimiters(self) -> None:
        doc = TextDocument("x [[y]]", formats=["var"])
        hl = PatternHighlighter(doc, EditorOptions(trigger="[[", closing="]]", variable_style="var"))
        hl.repaint()
        assert doc.styled_ranges("var") == [(2, 7)]

    def test_stale_ranges_are_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        doc, hl = _highlighter("short")
        with caplog.at_level(logging.WARNING, logger="pi.richtext.highlight"):
            spans = hl.repaint("this text is longer {{x}}")
        assert spans == (HighlightSpan(20, 25),)
        assert "stale" in caplog.text
        assert doc.styled_ranges(VARIABLE_STYLE) == []


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


class TestSchedule:
    """Debounced repaints."""

    def test_without_loop_repaints_immediately(self) -> None:
        doc, hl = _highlighter("{{a}}")
        hl.schedule()
        assert doc.styled_ranges(VARIABLE_STYLE) == [(0, 5)]

    def test_timer_submits_to_pipeline(self) -> None:
        doc = TextDocument("{{a}}")
        jobs: list[tuple[str, Callable[[], object]]] = []
        hl = PatternHighlighter(doc, EditorOptions(), lambda name, job: jobs.append((name, job)))
        hl.schedule()
        assert [name for name, _ in jobs] == ["highlight"]
        assert doc.styled_ranges(VARIABLE_STYLE) == []
        jobs[0][1]()
        assert doc.styled_ranges(VARIABLE_STYLE) == [(0, 5)]

    @pytest.mark.asyncio
    async def test_schedule_debounces(self) -> None:
        doc, hl = _highlighter("{{a}}", highlight_delay=0.01)
        repaints: list[int] = []
        doc.on_change(lambda e: repaints.append(e.index))
        hl.schedule()
        hl.schedule()
        hl.schedule()
        assert hl.pending is True
        assert doc.styled_ranges(VARIABLE_STYLE) == []
        await asyncio.sleep(0.05)
        assert hl.pending is False
        assert doc.styled_ranges(VARIABLE_STYLE) == [(0, 5)]
        assert len(repaints) == 1

    @pytest.mark.asyncio
    async def test_flush_runs_pending_repaint(self) -> None:
        doc, hl = _highlighter("{{a}}", highlight_delay=10)
        hl.schedule()
        hl.flush()
        assert hl.pending is False
        assert doc.styled_ranges(VARIABLE_STYLE) == [(0, 5)]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_repaint(self) -> None:
        doc, hl = _highlighter("{{a}}", highlight_delay=0.01)
        hl.schedule()
        hl.cancel()
        await asyncio.sleep(0.03)
        assert doc.styled_ranges(VARIABLE_STYLE) == []
