"""Suggestion item model supplied by the host application."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SuggestionItem(BaseModel):
    """A single immutable suggestion candidate."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    label: str
    value: str
    description: str | None = None
    category: str | None = None
    type: str | None = None
    link: str | None = None
