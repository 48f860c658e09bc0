"""Cursor-based pagination over the key-ordered query primitive.

Architecture:
    The pagination layer consists of:
    - definitions.py: PagePlan (page size, cursor, direction -> query window)
    - executors.py: CursorPaginator (fetches and slices pages)
    - telemetry.py: Structured logging

Usage:
    Pages are stable under appends at the far end because each page is
    anchored on a key rather than an offset; no preceding data is scanned.
"""

from __future__ import annotations

from .definitions import OVERSHOOT, PagePlan
from .executors import CursorPaginator, build_page

__all__ = [
    "OVERSHOOT",
    "PagePlan",
    "CursorPaginator",
    "build_page",
]
