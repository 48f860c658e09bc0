"""Cursor page execution.

This module provides the CursorPaginator, which turns the key-ordered query
primitive into a stable forward/backward page sequence.

Algorithm:
    1. Query ``page_size + 1`` children ordered by key, windowed strictly
       after the cursor (forward) or strictly before it (backward).
    2. Sort the answer in ascending key order; reverse it for backward
       pages (the store answers ``limitToLast`` in ascending order too).
    3. ``has_more`` is whether the overshoot item came back. Only the first
       ``page_size`` entries are kept.
    4. ``next_cursor`` / ``prev_cursor`` are the last / first kept keys.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from time import perf_counter
from typing import Any

from ...core.enums import OrderKey
from ...models import Entry, Page, QueryOptions
from ..ordering import to_entries
from .definitions import PagePlan
from .telemetry import log_page_error, log_page_fetched

QueryFn = Callable[[str, QueryOptions], Awaitable[Any]]


def build_page(entries: list[Entry], plan: PagePlan) -> Page:
    """Slice ascending-key entries into the page described by ``plan``.

    Args:
        entries: Entries sorted in ascending key order
        plan: Page plan the entries were fetched for

    Returns:
        Page with items in the plan's direction
    """
    ordered = list(reversed(entries)) if plan.reverse else list(entries)
    has_more = len(ordered) > plan.page_size
    items = ordered[: plan.page_size]
    if not items:
        return Page()
    return Page(
        items=items,
        next_cursor=items[-1].key,
        prev_cursor=items[0].key,
        has_more=has_more,
    )


class CursorPaginator:
    """Executes page plans against a query function.

    The query function is injected so the paginator stays independent of
    transport details; ``RTDBClient`` passes its own ``query`` method.
    """

    def __init__(self, query: QueryFn) -> None:
        """Initialize paginator.

        Args:
            query: Async function taking (path, QueryOptions) and returning
                the store's raw key to value mapping (or None)
        """
        self._query = query

    async def fetch(self, path: str, plan: PagePlan) -> Page:
        """Fetch one page.

        Args:
            path: Logical path of the node whose children are paginated
            plan: Page plan

        Returns:
            Page for the plan
        """
        start = perf_counter()
        try:
            data = await self._query(path, plan.to_query_options())
        except Exception as e:
            log_page_error(
                path=path,
                plan=plan,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        entries = to_entries(data, OrderKey.KEY.value)
        page = build_page(entries, plan)
        log_page_fetched(
            path=path,
            plan=plan,
            page=page,
            rows_received=len(entries),
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return page

    async def iterate(
        self,
        path: str,
        page_size: int,
        *,
        reverse: bool = False,
        cursor: str | None = None,
    ) -> AsyncIterator[Entry]:
        """Yield every entry by following ``next_cursor`` until exhausted."""
        while True:
            plan = PagePlan(page_size=page_size, cursor=cursor, reverse=reverse)
            page = await self.fetch(path, plan)
            for item in page.items:
                yield item
            if not page.has_more or page.next_cursor is None:
                return
            cursor = page.next_cursor
