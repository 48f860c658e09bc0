"""High-level client API."""

from .client import RTDBClient

__all__ = ["RTDBClient"]
