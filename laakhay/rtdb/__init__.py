"""Laakhay RTDB - Async Firebase Realtime Database REST client."""

from .api import RTDBClient
from .auth import (
    AccessTokenProvider,
    ServiceAccountTokenExchange,
    TokenCache,
    TokenExchange,
)
from .core import (
    AuthenticationError,
    BatchOpType,
    OrderKey,
    ResponseDecodeError,
    ResponseValidationError,
    RTDBError,
    StoreRequestError,
    TransactionConflictError,
)
from .models import (
    BatchOperation,
    CountedPage,
    Credentials,
    Entry,
    Page,
    QueryOptions,
    TokenRecord,
)
from .runtime.pagination import CursorPaginator, PagePlan

__version__ = "0.1.0"

__all__ = [
    # Client
    "RTDBClient",
    # Auth
    "AccessTokenProvider",
    "ServiceAccountTokenExchange",
    "TokenCache",
    "TokenExchange",
    # Models
    "BatchOperation",
    "CountedPage",
    "Credentials",
    "Entry",
    "Page",
    "QueryOptions",
    "TokenRecord",
    # Pagination
    "CursorPaginator",
    "PagePlan",
    # Enums
    "BatchOpType",
    "OrderKey",
    # Exceptions
    "RTDBError",
    "AuthenticationError",
    "StoreRequestError",
    "ResponseDecodeError",
    "ResponseValidationError",
    "TransactionConflictError",
]
