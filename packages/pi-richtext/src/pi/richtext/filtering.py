"""Suggestion filtering and presentation grouping."""

from __future__ import annotations

from typing import Sequence

from pi.richtext.types import SuggestionItem


def matches_query(item: SuggestionItem, query: str, *, match_description: bool = False) -> bool:
    """Case-insensitive substring match against label or value (and optionally description)."""
    needle = query.lower()
    if needle in item.label.lower() or needle in item.value.lower():
        return True
    return match_description and item.description is not None and needle in item.description.lower()


def filter_suggestions(
    items: Sequence[SuggestionItem],
    query: str,
    *,
    match_description: bool = False,
) -> tuple[SuggestionItem, ...]:
    """Items matching ``query``, in source order. An empty query keeps everything."""
    if not query:
        return tuple(items)
    return tuple(
        item for item in items if matches_query(item, query, match_description=match_description)
    )


def group_by_category(
    items: Sequence[SuggestionItem],
) -> list[tuple[str | None, list[SuggestionItem]]]:
    """Group items by category, preserving first-appearance order of categories."""
    groups: dict[str | None, list[SuggestionItem]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return list(groups.items())
