"""Client-side replica of the store's child ordering rules.

Filtered REST responses arrive as a JSON object whose member order is not
guaranteed, so results are re-sorted locally before slicing or reversing.

Ordering rules:
    - ``$key``: keys that parse as 32-bit integers first (numerically),
      then the remaining keys lexicographically.
    - ``$value`` / child path: null, false, true, numbers (ascending),
      strings (lexicographic), then objects; ties broken by key.
    - ``$priority``: not replicated; entries keep their received order.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.enums import OrderKey
from ..models import Entry

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def key_rank(key: str) -> tuple[int, int | str]:
    """Sort key for a child key under ``$key`` ordering."""
    try:
        as_int = int(key)
    except ValueError:
        return (1, key)
    # "007" and "+7" are strings to the store
    if str(as_int) == key and _INT32_MIN <= as_int <= _INT32_MAX:
        return (0, as_int)
    return (1, key)


def value_rank(value: Any) -> tuple[int, Any]:
    """Sort key for a value under ``$value`` or child ordering."""
    if value is None:
        return (0, 0)
    if value is False:
        return (1, 0)
    if value is True:
        return (2, 0)
    if isinstance(value, int | float):
        return (3, value)
    if isinstance(value, str):
        return (4, value)
    return (5, 0)


def child_value(value: Any, field: str) -> Any:
    """Resolve a slash-delimited child path inside ``value``; missing means None."""
    current = value
    for part in field.strip("/").split("/"):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def order_value(key: str, value: Any, order_by: str) -> Any:
    """The value a child is ordered by."""
    if order_by == OrderKey.VALUE.value:
        return value
    return child_value(value, order_by)


def sort_entries(entries: Iterable[Entry], order_by: str) -> list[Entry]:
    """Return entries in ascending store order for ``order_by``."""
    items = list(entries)
    if order_by == OrderKey.KEY.value:
        return sorted(items, key=lambda e: key_rank(e.key))
    if order_by == OrderKey.PRIORITY.value:
        return items
    return sorted(
        items,
        key=lambda e: (value_rank(order_value(e.key, e.value, order_by)), key_rank(e.key)),
    )


def to_entries(data: Any, order_by: str) -> list[Entry]:
    """Convert a query mapping to sorted entries; non-objects give no entries."""
    if not isinstance(data, dict):
        return []
    return sort_entries((Entry(key=k, value=v) for k, v in data.items()), order_by)
