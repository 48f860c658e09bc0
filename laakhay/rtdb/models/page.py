"""Keyed entries and cursor pages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """One child of a node: its key and value."""

    key: str
    value: Any = None

    model_config = ConfigDict(frozen=True)


class Page(BaseModel):
    """One page of a cursor-paginated listing.

    Attributes:
        items: Entries in the requested direction
        next_cursor: Key of the last item, or None if the page is empty
        prev_cursor: Key of the first item, or None if the page is empty
        has_more: Whether more entries exist beyond this page in the same direction
    """

    items: list[Entry] = Field(default_factory=list)
    next_cursor: str | None = None
    prev_cursor: str | None = None
    has_more: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def keys(self) -> list[str]:
        return [item.key for item in self.items]

    def __len__(self) -> int:
        return len(self.items)


class CountedPage(Page):
    """Page plus the total number of children of the whole node."""

    total: int = Field(default=0, ge=0)
