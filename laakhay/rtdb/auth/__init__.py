"""Authentication: token exchange and caching."""

from .exchange import ServiceAccountTokenExchange, TokenExchange
from .token_provider import AccessTokenProvider, TokenCache

__all__ = [
    "AccessTokenProvider",
    "ServiceAccountTokenExchange",
    "TokenCache",
    "TokenExchange",
]
