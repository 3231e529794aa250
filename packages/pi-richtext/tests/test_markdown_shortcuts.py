"""Tests for pi.richtext.markdown_shortcuts -- the *text* bold shortcut."""

from __future__ import annotations

from pi.richtext.buffer import TextDocument
from pi.richtext.config import BOLD_STYLE, MARKDOWN_SYNTAX_STYLE
from pi.richtext.document import KeyEvent, Selection
from pi.richtext.markdown_shortcuts import MarkdownShortcutProcessor, changed_window
from pi.richtext.patterns import BoldShortcutRegion


def _processor(text: str, caret: int | None = None) -> tuple[TextDocument, MarkdownShortcutProcessor]:
    doc = TextDocument(text)
    if caret is not None:
        doc.set_selection(caret)
    return doc, MarkdownShortcutProcessor(doc)


# ---------------------------------------------------------------------------
# changed_window
# ---------------------------------------------------------------------------


class TestChangedWindow:
    """Locating the single edit between two texts."""

    def test_insertion(self) -> None:
        assert changed_window("abc", "abXc") == (2, 2, 3)

    def test_deletion(self) -> None:
        assert changed_window("*bold*", "*bold") == (5, 6, 5)

    def test_replacement(self) -> None:
        assert changed_window("a123b", "aXb") == (1, 4, 2)

    def test_identical(self) -> None:
        assert changed_window("same", "same") == (4, 4, 4)


# ---------------------------------------------------------------------------
# Asterisk key
# ---------------------------------------------------------------------------


class TestAsterisk:
    """Auto-pairing, wrapping and typing through."""

    def test_auto_pairs_with_caret_between(self) -> None:
        doc, md = _processor("", caret=0)
        assert md.handle_asterisk() is True
        assert doc.get_text() == "**"
        assert doc.get_selection() == Selection(1)

    def test_no_caret_is_noop(self) -> None:
        doc, md = _processor("text")
        assert md.handle_asterisk() is False
        assert doc.get_text() == "text"

    def test_wraps_selection(self) -> None:
        doc = TextDocument("make bold")
        doc.set_selection(5, 4)
        md = MarkdownShortcutProcessor(doc)
        assert md.handle_asterisk() is True
        assert doc.get_text() == "make *bold*"
        assert doc.get_selection() == Selection(11)
        assert doc.styled_ranges(BOLD_STYLE) == [(6, 10)]
        assert doc.styled_ranges(MARKDOWN_SYNTAX_STYLE) == [(5, 6), (10, 11)]

    def test_wrapping_selection_with_inner_asterisk_formats_strict_pairs_only(self) -> None:
        doc = TextDocument("a*b")
        doc.set_selection(0, 3)
        md = MarkdownShortcutProcessor(doc)
        assert md.handle_asterisk() is True
        assert doc.get_text() == "*a*b*"
        assert doc.styled_ranges(BOLD_STYLE) == []
        assert md.rescan() == (BoldShortcutRegion(0, 3),)
        assert doc.styled_ranges(BOLD_STYLE) == [(1, 2)]
        assert doc.styled_ranges(MARKDOWN_SYNTAX_STYLE) == [(0, 1), (2, 3)]

    def test_wrapping_next_to_asterisk_leaves_no_bold(self) -> None:
        doc = TextDocument("*x")
        doc.set_selection(1, 1)
        md = MarkdownShortcutProcessor(doc)
        assert md.handle_asterisk() is True
        assert doc.get_text() == "**x*"
        assert md.rescan() == ()
        assert doc.styled_ranges(BOLD_STYLE) == []
        doc.delete_text(3, 1)
        assert md.rescan() == ()
        assert doc.get_text() == "**x"
        assert doc.styled_ranges(BOLD_STYLE) == []
        assert doc.styled_ranges(MARKDOWN_SYNTAX_STYLE) == []

    def test_types_through_closing_asterisk(self) -> None:
        doc, md = _processor("*bold*", caret=5)
        assert md.handle_asterisk() is True
        assert doc.get_text() == "*bold*"
        assert doc.get_selection() == Selection(6)

    def test_adjacent_asterisk_inserts_single(self) -> None:
        doc, md = _processor("a*", caret=2)
        md.handle_asterisk()
        assert doc.get_text() == "a**"
        assert doc.get_selection() == Selection(3)

    def test_handle_key_prevents_default(self) -> None:
        doc, md = _processor("", caret=0)
        event = KeyEvent("*")
        md.handle_key(event)
        assert event.default_prevented is True

    def test_handle_key_ignores_other_keys(self) -> None:
        doc, md = _processor("", caret=0)
        event = KeyEvent("a")
        md.handle_key(event)
        assert event.default_prevented is False
        assert doc.get_text() == ""

    def test_key_listener_integration(self) -> None:
        doc, md = _processor("", caret=0)
        doc.add_key_listener(md.handle_key)
        doc.type_text("*hi")
        md.rescan()
        assert doc.get_text() == "*hi*"
        assert doc.get_selection() == Selection(3)
        doc.press_key("*")
        assert doc.get_text() == "*hi*"
        assert doc.get_selection() == Selection(4)


# ---------------------------------------------------------------------------
# Rescan
# ---------------------------------------------------------------------------


class TestRescan:
    """Formatting follows the regions present in the text."""

    def test_bolds_interior_only(self) -> None:
        doc, md = _processor("*bold*")
        assert md.rescan() == (BoldShortcutRegion(0, 6),)
        assert doc.styled_ranges(BOLD_STYLE) == [(1, 5)]
        assert doc.styled_ranges(MARKDOWN_SYNTAX_STYLE) == [(0, 1), (5, 6)]

    def test_deleting_closing_asterisk_removes_bold(self) -> None:
        doc, md = _processor("plain *bold*")
        doc.format_range(0, 5, BOLD_STYLE, True)
        md.rescan()
        assert doc.styled_ranges(BOLD_STYLE) == [(0, 5), (7, 11)]
        doc.delete_text(11, 1)
        assert md.rescan() == ()
        assert doc.styled_ranges(BOLD_STYLE) == [(0, 5)]
        assert doc.styled_ranges(MARKDOWN_SYNTAX_STYLE) == []

    def test_deleting_opening_asterisk_removes_bold(self) -> None:
        doc, md = _processor("*bold* end")
        md.rescan()
        doc.delete_text(0, 1)
        md.rescan()
        assert doc.styled_ranges(BOLD_STYLE) == []

    def test_region_that_stops_matching_is_cleared(self) -> None:
        doc, md = _processor("*bold*")
        md.rescan()
        doc.insert_text(0, "*")
        assert md.rescan() == ()
        assert doc.get_text() == "**bold*"
        assert doc.styled_ranges(BOLD_STYLE) == []

    def test_region_moves_with_edits_before_it(self) -> None:
        doc, md = _processor("*a*")
        md.rescan()
        doc.insert_text(0, "xx ")
        assert md.rescan() == (BoldShortcutRegion(3, 6),)
        assert doc.styled_ranges(BOLD_STYLE) == [(4, 5)]

    def test_manual_bold_is_untouched(self) -> None:
        doc, md = _processor("manual text")
        doc.format_range(0, 6, BOLD_STYLE, True)
        md.rescan()
        doc.insert_text(11, " more")
        md.rescan()
        assert doc.styled_ranges(BOLD_STYLE) == [(0, 6)]

    def test_format_passes_are_silent(self) -> None:
        doc, md = _processor("*a*")
        sources: list[str] = []
        doc.on_change(lambda e: sources.append(e.source))
        md.rescan()
        assert sources
        assert set(sources) == {"silent"}
