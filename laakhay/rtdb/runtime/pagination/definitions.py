"""Cursor pagination plan definitions.

A plan describes one page request: how many items, from which cursor, in
which direction. It knows how to express itself as a key-ordered query that
over-fetches by one item so the executor can tell whether more data exists
without a separate count request.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import OrderKey
from ...models import QueryOptions

# Extra item fetched beyond the page to detect a following page
OVERSHOOT = 1


@dataclass(frozen=True)
class PagePlan:
    """Plan for a single page.

    Attributes:
        page_size: Number of items on the page
        cursor: Exclusive boundary key from a previous page (None for the first page)
        reverse: Most-recent-first (descending key) order when True
    """

    page_size: int
    cursor: str | None = None
    reverse: bool = False

    def __post_init__(self) -> None:
        """Validate plan configuration."""
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise ValueError("page_size must be an integer")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        if self.cursor is not None and not self.cursor:
            raise ValueError("cursor must be a non-empty key or None")

    @property
    def fetch_size(self) -> int:
        return self.page_size + OVERSHOOT

    def to_query_options(self) -> QueryOptions:
        """Key-ordered query windowed after (or before) the cursor."""
        if self.reverse:
            return QueryOptions(
                order_by=OrderKey.KEY.value,
                limit_to_last=self.fetch_size,
                end_before=self.cursor,
            )
        return QueryOptions(
            order_by=OrderKey.KEY.value,
            limit_to_first=self.fetch_size,
            start_after=self.cursor,
        )
