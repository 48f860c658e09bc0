"""Core components."""

from .enums import BatchOpType, HttpMethod, OrderKey
from .exceptions import (
    AuthenticationError,
    ResponseDecodeError,
    ResponseValidationError,
    RTDBError,
    StoreRequestError,
    TransactionConflictError,
)

__all__ = [
    "BatchOpType",
    "HttpMethod",
    "OrderKey",
    "RTDBError",
    "AuthenticationError",
    "StoreRequestError",
    "ResponseDecodeError",
    "ResponseValidationError",
    "TransactionConflictError",
]
