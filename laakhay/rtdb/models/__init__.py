"""Data models."""

from .batch import BatchOperation
from .credentials import Credentials
from .page import CountedPage, Entry, Page
from .query import QueryOptions, QueryValue
from .token import TokenRecord

__all__ = [
    "BatchOperation",
    "Credentials",
    "CountedPage",
    "Entry",
    "Page",
    "QueryOptions",
    "QueryValue",
    "TokenRecord",
]
