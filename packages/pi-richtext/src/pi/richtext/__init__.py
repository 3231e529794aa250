"""pi-richtext: trigger-driven suggestions and live formatting for rich-text editors."""

# Document buffer
from pi.richtext.buffer import DEFAULT_FORMATS, TextDocument

# Default catalog
from pi.richtext.catalog import DEFAULT_SUGGESTIONS

# Configuration
from pi.richtext.config import (
    BOLD_STYLE,
    DEFAULT_CLOSING,
    DEFAULT_TRIGGER,
    MARKDOWN_SYNTAX_STYLE,
    VARIABLE_STYLE,
    EditorOptions,
    load_options,
    load_suggestions,
)

# Document adapter contract
from pi.richtext.document import (
    BlurEvent,
    Bounds,
    ChangeEvent,
    ChangeSource,
    DocumentAdapter,
    KeyEvent,
    Selection,
    SelectionChangeEvent,
    require_selection,
)

# Editor
from pi.richtext.editor import DynamicTextEditor

# Errors
from pi.richtext.errors import (
    ConfigurationError,
    MissingSelectionError,
    RichTextError,
    StaleRangeError,
)

# Filtering
from pi.richtext.filtering import filter_suggestions, group_by_category, matches_query

# Highlighting
from pi.richtext.highlight import PatternHighlighter

# Insertion
from pi.richtext.insertion import InsertionEngine

# Keybindings
from pi.richtext.keybindings import (
    DEFAULT_SUGGESTION_KEYBINDINGS,
    SuggestionAction,
    SuggestionKeybindingsManager,
    get_suggestion_keybindings,
    set_suggestion_keybindings,
)

# Keys
from pi.richtext.keys import Key, KeyId, matches_key, normalize_key

# Markdown shortcuts
from pi.richtext.markdown_shortcuts import MarkdownShortcutProcessor

# Keyboard navigation
from pi.richtext.navigation import KeyboardNavigationController, NavigationResult, reduce_key

# Patterns
from pi.richtext.patterns import (
    BoldShortcutRegion,
    HighlightSpan,
    TemplateMatch,
    TemplatePattern,
    find_bold_regions,
    template_regex,
)

# Scheduling
from pi.richtext.scheduling import Debouncer, EventPipeline

# Session
from pi.richtext.session import CLOSED_SESSION, Anchor, SuggestionSession

# Trigger detection
from pi.richtext.trigger import TriggerDetector, find_open_trigger

# Types
from pi.richtext.types import SuggestionItem

__all__ = [
    # Buffer
    "DEFAULT_FORMATS",
    "TextDocument",
    # Catalog
    "DEFAULT_SUGGESTIONS",
    # Config
    "BOLD_STYLE",
    "DEFAULT_CLOSING",
    "DEFAULT_TRIGGER",
    "MARKDOWN_SYNTAX_STYLE",
    "VARIABLE_STYLE",
    "EditorOptions",
    "load_options",
    "load_suggestions",
    # Document adapter
    "BlurEvent",
    "Bounds",
    "ChangeEvent",
    "ChangeSource",
    "DocumentAdapter",
    "KeyEvent",
    "Selection",
    "SelectionChangeEvent",
    "require_selection",
    # Editor
    "DynamicTextEditor",
    # Errors
    "ConfigurationError",
    "MissingSelectionError",
    "RichTextError",
    "StaleRangeError",
    # Filtering
    "filter_suggestions",
    "group_by_category",
    "matches_query",
    # Highlighting
    "PatternHighlighter",
    # Insertion
    "InsertionEngine",
    # Keybindings
    "DEFAULT_SUGGESTION_KEYBINDINGS",
    "SuggestionAction",
    "SuggestionKeybindingsManager",
    "get_suggestion_keybindings",
    "set_suggestion_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "normalize_key",
    # Markdown shortcuts
    "MarkdownShortcutProcessor",
    # Navigation
    "KeyboardNavigationController",
    "NavigationResult",
    "reduce_key",
    # Patterns
    "BoldShortcutRegion",
    "HighlightSpan",
    "TemplateMatch",
    "TemplatePattern",
    "find_bold_regions",
    "template_regex",
    # Scheduling
    "Debouncer",
    "EventPipeline",
    # Session
    "CLOSED_SESSION",
    "Anchor",
    "SuggestionSession",
    # Trigger detection
    "TriggerDetector",
    "find_open_trigger",
    # Types
    "SuggestionItem",
]
