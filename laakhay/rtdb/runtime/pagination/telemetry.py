"""Structured logging for pagination operations."""

from __future__ import annotations

import logging

from ...models import Page
from .definitions import PagePlan

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    path: str,
    plan: PagePlan,
    page: Page,
    rows_received: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page fetch.

    Args:
        path: Logical path being paginated
        plan: Page plan that was executed
        page: Resulting page
        rows_received: Entries returned by the store, overshoot included
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "path": path,
            "page_size": plan.page_size,
            "reverse": plan.reverse,
            "cursor": plan.cursor,
            "rows_received": rows_received,
            "items": len(page.items),
            "has_more": page.has_more,
            "next_cursor": page.next_cursor,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    path: str,
    plan: PagePlan,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch.

    Args:
        path: Logical path being paginated
        plan: Page plan that failed
        error_type: Exception class name
        error_message: Error message
    """
    logger.error(
        "page_error",
        extra={
            "path": path,
            "page_size": plan.page_size,
            "reverse": plan.reverse,
            "cursor": plan.cursor,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
