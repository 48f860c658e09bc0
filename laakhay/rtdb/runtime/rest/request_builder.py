"""URL and query-string construction for store resources.

The store addresses every node as ``https://<host>/<path>.json``. Typed query
values (order field, bounds, equality) must each be JSON-encoded, so the
string ``active`` travels as ``"active"`` while ``42`` stays ``42``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from ...config import DOCUMENT_SUFFIX
from ...models import QueryOptions

# (model field, store parameter, JSON-encode value)
_QUERY_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("order_by", "orderBy", True),
    ("limit_to_first", "limitToFirst", False),
    ("limit_to_last", "limitToLast", False),
    ("start_at", "startAt", True),
    ("end_at", "endAt", True),
    ("start_after", "startAfter", True),
    ("end_before", "endBefore", True),
    ("equal_to", "equalTo", True),
)


def clean_path(path: str) -> str:
    """Strip leading and trailing slashes from a logical path."""
    return path.strip("/")


def build_url(base_url: str, path: str, params: Mapping[str, str] | None = None) -> str:
    """Build the absolute resource URL for a logical path.

    Args:
        base_url: ``https://<host>`` of the database
        path: Slash-delimited logical path
        params: Already encoded query parameters

    Returns:
        URL with the document suffix and, when params are given, a query string
    """
    url = f"{base_url.rstrip('/')}/{clean_path(path)}{DOCUMENT_SUFFIX}"
    if params:
        return f"{url}?{urlencode(dict(params))}"
    return url


def encode_value(value: Any) -> str:
    """JSON-encode a single query value."""
    return json.dumps(value)


def encode_query(options: QueryOptions) -> dict[str, str]:
    """Translate query options to store query parameters."""
    params: dict[str, str] = {}
    for attr, name, as_json in _QUERY_FIELDS:
        value = getattr(options, attr)
        if value is None:
            continue
        params[name] = encode_value(value) if as_json else str(value)
    return params


def shallow_params() -> dict[str, str]:
    """Parameters for a keys-only fetch."""
    return {"shallow": "true"}
