"""Core enumerations."""

from __future__ import annotations

from enum import Enum


class BatchOpType(str, Enum):
    """Write operation kinds accepted by ``RTDBClient.batch``."""

    SET = "set"
    UPDATE = "update"
    DELETE = "delete"


class HttpMethod(str, Enum):
    """HTTP verbs used against the store."""

    GET = "GET"
    PUT = "PUT"
    PATCH = "PATCH"
    POST = "POST"
    DELETE = "DELETE"


class OrderKey(str, Enum):
    """Built-in ordering pseudo-fields understood by the store.

    Any other ``order_by`` value names a child path.
    """

    KEY = "$key"
    VALUE = "$value"
    PRIORITY = "$priority"
