"""Cached, single-flight access token provider.

Architecture:
    Every outbound request asks the provider for a token. The common case is
    a fast path that returns the in-memory record without awaiting anything.
    When the record is missing or expired, the first caller starts a refresh
    task and every concurrent caller awaits that same task, so they share
    one credential exchange and one outcome, success or failure. The task
    is forgotten once it settles; the next call after a failure retries.

    An optional external TokenCache lets several client instances (or
    process restarts) share one token. The cache is best effort: read and
    write failures are logged and otherwise ignored.

See Also:
    - ServiceAccountTokenExchange: Default exchange backed by google-auth
    - RestRunner: Attaches the token to each request
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from ..config import TOKEN_TTL_MS
from ..models import TokenRecord
from .exchange import TokenExchange

logger = logging.getLogger(__name__)


class TokenCache(Protocol):
    """External token storage. Either method may be sync or async, and may raise."""

    def get(
        self,
    ) -> TokenRecord | Mapping[str, Any] | None | Awaitable[TokenRecord | Mapping[str, Any] | None]:
        ...

    def set(self, record: TokenRecord) -> None | Awaitable[None]: ...


class AccessTokenProvider:
    """Obtain and cache bearer tokens for the store."""

    def __init__(
        self,
        exchange: TokenExchange,
        *,
        cache: TokenCache | None = None,
        ttl_ms: int = TOKEN_TTL_MS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the provider.

        Args:
            exchange: Credential exchange used when no valid token is cached
            cache: Optional external cache shared across clients
            ttl_ms: Lifetime assigned to freshly exchanged tokens
            clock: Wall clock returning epoch seconds
        """
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        self._exchange = exchange
        self._cache = cache
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._record = TokenRecord()
        self._pending: asyncio.Task[TokenRecord] | None = None

    @property
    def record(self) -> TokenRecord:
        return self._record

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def invalidate(self) -> None:
        """Forget the in-memory token so the next call refreshes."""
        self._record = TokenRecord()

    async def get_token(self) -> str:
        """Return a valid bearer token, refreshing it if needed.

        Raises:
            AuthenticationError: If the credential exchange fails
        """
        if self._record.is_valid(self._now_ms()):
            return self._record.token

        if self._pending is None:
            self._pending = asyncio.create_task(self._run_refresh())
        # Shielded so one cancelled caller does not cancel the shared refresh
        record = await asyncio.shield(self._pending)
        return record.token

    async def _run_refresh(self) -> TokenRecord:
        try:
            return await self._refresh(self._now_ms())
        finally:
            self._pending = None

    async def _refresh(self, now: int) -> TokenRecord:
        cached = await self._read_cache()
        if cached is not None and cached.is_valid(now):
            logger.debug("token_cache_hit", extra={"exp": cached.exp})
            self._record = cached
            return cached

        token = await self._exchange.fetch_token()
        record = TokenRecord(token=token, exp=now + self._ttl_ms)
        self._record = record
        logger.info("token_refreshed", extra={"exp": record.exp})
        await self._write_cache(record)
        return record

    async def _read_cache(self) -> TokenRecord | None:
        if self._cache is None:
            return None
        try:
            result = self._cache.get()
            if inspect.isawaitable(result):
                result = await result
            if result is None:
                return None
            if isinstance(result, TokenRecord):
                return result
            return TokenRecord.model_validate(result)
        except Exception as e:
            logger.warning("token_cache_read_failed", extra={"error": repr(e)})
            return None

    async def _write_cache(self, record: TokenRecord) -> None:
        if self._cache is None:
            return
        try:
            result = self._cache.set(record)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning("token_cache_write_failed", extra={"error": repr(e)})
