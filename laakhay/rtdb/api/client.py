"""High-level async client for the Realtime Database REST interface.

Architecture:
    RTDBClient is a thin facade over three collaborators:
    - AccessTokenProvider: bearer token cache with single-flight refresh
    - RestRunner: turns an endpoint spec + params into one HTTP request
    - CursorPaginator: builds cursor pages on top of ``query``

    Primitive operations (get/set/update/delete/push/keys/query) map to one
    registered endpoint each. Everything else (pagination, top/bottom,
    find_by_value/range, batch, transactions) composes those primitives.

Concurrency:
    All methods are coroutines on the caller's event loop. ``batch`` and
    ``paginate_with_count`` fan out with ``asyncio.gather`` and wait for
    every branch to settle before surfacing the first failure. Nothing is
    retried.

Example:
    >>> async with RTDBClient(credentials=creds, database="my-db") as db:
    ...     key = await db.push("/posts", {"title": "hello"})
    ...     page = await db.paginate("/posts", 20, reverse=True)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping
from functools import partial
from typing import Any

from ..auth import AccessTokenProvider, ServiceAccountTokenExchange, TokenCache, TokenExchange
from ..config import TOKEN_TTL_MS, normalize_database
from ..core.enums import BatchOpType, OrderKey
from ..core.exceptions import TransactionConflictError
from ..models import (
    BatchOperation,
    CountedPage,
    Credentials,
    Entry,
    Page,
    QueryOptions,
    QueryValue,
)
from ..runtime.ordering import to_entries
from ..runtime.pagination import CursorPaginator, PagePlan
from ..runtime.rest import HTTPClient, RestRunner
from ..runtime.rest.endpoints import (
    ConditionalWriteResult,
    Snapshot,
    get_endpoint_adapter,
    get_endpoint_spec,
)

logger = logging.getLogger(__name__)

UpdateFn = Callable[[Any], Any | Awaitable[Any]]

DEFAULT_MAX_ATTEMPTS = 25


async def _apply(update_fn: UpdateFn, current: Any) -> Any:
    result = update_fn(current)
    if inspect.isawaitable(result):
        result = await result
    return result


class RTDBClient:
    """Async client for one Realtime Database instance."""

    def __init__(
        self,
        *,
        database: str,
        credentials: Credentials | Mapping[str, Any] | None = None,
        cache: TokenCache | None = None,
        timeout: float | None = None,
        token_ttl_ms: int = TOKEN_TTL_MS,
        token_exchange: TokenExchange | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            database: Database name (``"my-db"``) or URL
            credentials: Service account credentials (model or key-file mapping)
            cache: Optional external token cache shared across clients
            timeout: Optional total per-request timeout in seconds (default: none)
            token_ttl_ms: Lifetime assigned to freshly exchanged tokens
            token_exchange: Custom token exchange; replaces the service account flow
            http_client: Custom HTTP client (tests, shared sessions)
        """
        if credentials is not None and not isinstance(credentials, Credentials):
            credentials = Credentials.model_validate(credentials)
        if token_exchange is None:
            if credentials is None:
                raise ValueError("credentials are required unless token_exchange is given")
            token_exchange = ServiceAccountTokenExchange(credentials)

        self.credentials = credentials
        self.host = normalize_database(database)
        self.base_url = f"https://{self.host}"
        self._tokens = AccessTokenProvider(token_exchange, cache=cache, ttl_ms=token_ttl_ms)
        self._http = http_client or HTTPClient(timeout=timeout)
        self._runner = RestRunner(self._http, base_url=self.base_url, token_provider=self._tokens)
        self._paginator = CursorPaginator(self.query)

    @property
    def token_provider(self) -> AccessTokenProvider:
        return self._tokens

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Run a registered store endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "read", "query")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    # ------------------------------------------------------------------
    # Primitive operations
    # ------------------------------------------------------------------

    async def get(self, path: str, *, model: Any | None = None) -> Any:
        """Read the value at ``path``.

        Args:
            path: Logical path
            model: Optional type the value is validated against

        Returns:
            Decoded value, or None if the node has no data
        """
        return await self.fetch("read", {"path": path, "model": model})

    async def set(self, path: str, value: Any) -> None:
        """Overwrite the subtree at ``path``."""
        await self.fetch("write", {"path": path, "value": value})

    async def update(self, path: str, data: Mapping[str, Any]) -> None:
        """Merge the given top-level children into ``path``."""
        await self.fetch("merge", {"path": path, "value": dict(data)})

    async def delete(self, path: str) -> None:
        """Remove the subtree at ``path``."""
        await self.fetch("delete", {"path": path})

    async def push(self, path: str, value: Any) -> str:
        """Append ``value`` under a generated, time-ordered key and return the key."""
        return await self.fetch("append", {"path": path, "value": value})

    async def keys(self, path: str, reverse: bool = False) -> list[str]:
        """List immediate child keys in ``$key`` order (descending when ``reverse``).

        Integer-like keys sort numerically ahead of the rest, so ``"2"``
        precedes ``"10"``.
        """
        return await self.fetch("shallow", {"path": path, "reverse": reverse})

    async def count(self, path: str) -> int:
        """Count immediate children of ``path``."""
        return len(await self.keys(path))

    async def query(
        self,
        path: str,
        options: QueryOptions | None = None,
        *,
        model: Any | None = None,
        **option_fields: Any,
    ) -> dict[str, Any] | None:
        """Run a structured order/range query.

        Options may be passed as a QueryOptions instance or as keyword
        arguments (``order_by="score", limit_to_last=5``), not both.

        Returns:
            Raw key to value mapping, or None
        """
        if options is None:
            options = QueryOptions(**option_fields)
        elif option_fields:
            raise TypeError("pass either a QueryOptions instance or option keywords, not both")
        return await self.fetch("query", {"path": path, "options": options, "model": model})

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def _paginator_for(self, model: Any | None) -> CursorPaginator:
        if model is None:
            return self._paginator
        return CursorPaginator(partial(self.query, model=model))

    async def paginate(
        self,
        path: str,
        page_size: int,
        cursor: str | None = None,
        reverse: bool = False,
        *,
        model: Any | None = None,
    ) -> Page:
        """Fetch one key-ordered page.

        Args:
            path: Node whose children are paginated
            page_size: Items per page (>= 1)
            cursor: ``next_cursor`` of the previous page in the same direction
            reverse: Descending key order (most recent first for pushed keys)
            model: Optional type each value is validated against

        Returns:
            Page with items, cursors and ``has_more``
        """
        plan = PagePlan(page_size=page_size, cursor=cursor or None, reverse=reverse)
        return await self._paginator_for(model).fetch(path, plan)

    async def paginate_with_count(
        self,
        path: str,
        page_size: int,
        cursor: str | None = None,
        reverse: bool = False,
        *,
        model: Any | None = None,
    ) -> CountedPage:
        """``paginate`` plus the total child count of the whole node, fetched concurrently."""
        page, total = await self._gather_settled(
            "paginate_with_count",
            self.paginate(path, page_size, cursor, reverse, model=model),
            self.count(path),
        )
        return CountedPage(
            items=page.items,
            next_cursor=page.next_cursor,
            prev_cursor=page.prev_cursor,
            has_more=page.has_more,
            total=total,
        )

    async def iterate(
        self,
        path: str,
        page_size: int,
        *,
        reverse: bool = False,
        model: Any | None = None,
    ) -> AsyncIterator[Entry]:
        """Yield every child of ``path`` page by page."""
        async for entry in self._paginator_for(model).iterate(path, page_size, reverse=reverse):
            yield entry

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    async def top(
        self,
        path: str,
        count: int,
        order_by: str = OrderKey.KEY.value,
        *,
        model: Any | None = None,
    ) -> list[Entry]:
        """Return the ``count`` highest children by ``order_by``, highest first."""
        data = await self.query(
            path, QueryOptions(order_by=order_by, limit_to_last=count), model=model
        )
        # The store answers limitToLast in ascending order
        return list(reversed(to_entries(data, order_by)))

    async def bottom(
        self,
        path: str,
        count: int,
        order_by: str = OrderKey.KEY.value,
        *,
        model: Any | None = None,
    ) -> list[Entry]:
        """Return the ``count`` lowest children by ``order_by``, lowest first."""
        data = await self.query(
            path, QueryOptions(order_by=order_by, limit_to_first=count), model=model
        )
        return to_entries(data, order_by)

    async def find_by_value(
        self,
        path: str,
        order_by: str,
        value: QueryValue,
        *,
        model: Any | None = None,
    ) -> list[Entry]:
        """Return every child whose ``order_by`` value equals ``value``.

        Unbounded: index ``order_by`` in the database rules and keep the
        match count small.
        """
        data = await self.query(
            path, QueryOptions(order_by=order_by, equal_to=value), model=model
        )
        return to_entries(data, order_by)

    async def range(
        self,
        path: str,
        order_by: str,
        start: QueryValue,
        end: QueryValue,
        *,
        model: Any | None = None,
    ) -> list[Entry]:
        """Return children with ``start <= order_by value <= end``."""
        data = await self.query(
            path, QueryOptions(order_by=order_by, start_at=start, end_at=end), model=model
        )
        return to_entries(data, order_by)

    # ------------------------------------------------------------------
    # Batch and transactions
    # ------------------------------------------------------------------

    async def batch(self, operations: Iterable[BatchOperation | Mapping[str, Any]]) -> None:
        """Run several writes concurrently.

        Not atomic: when one operation fails the others still apply, nothing
        is rolled back, and the first failure (in list order) is raised once
        every operation has settled.
        """
        ops = [
            op if isinstance(op, BatchOperation) else BatchOperation.model_validate(op)
            for op in operations
        ]
        if not ops:
            return
        await self._gather_settled("batch", *(self._dispatch(op) for op in ops))

    async def _dispatch(self, op: BatchOperation) -> None:
        if op.type is BatchOpType.SET:
            await self.set(op.path, op.data)
        elif op.type is BatchOpType.UPDATE:
            await self.update(op.path, op.data)
        elif op.type is BatchOpType.DELETE:
            await self.delete(op.path)
        else:
            raise ValueError(f"Unsupported batch operation: {op.type}")

    async def _gather_settled(self, operation: str, *aws: Awaitable[Any]) -> list[Any]:
        results = await asyncio.gather(*aws, return_exceptions=True)
        failures = [
            (index, result)
            for index, result in enumerate(results)
            if isinstance(result, BaseException)
        ]
        if not failures:
            return list(results)
        for index, error in failures:
            logger.error(
                "fan_out_branch_failed",
                extra={
                    "operation": operation,
                    "index": index,
                    "error_type": type(error).__name__,
                    "error_message": str(error),
                },
            )
        raise failures[0][1]

    async def transaction(self, path: str, update_fn: UpdateFn) -> Any:
        """Read, transform and write back the value at ``path``.

        ``update_fn`` receives the current value (None if absent); returning
        None deletes the node.

        Warning:
            Not atomic. A concurrent writer between the read and the write is
            silently overwritten (lost update). Use ``conditional_transaction``
            when that matters.
        """
        current = await self.get(path)
        updated = await _apply(update_fn, current)
        if updated is None:
            await self.delete(path)
            return None
        await self.set(path, updated)
        return updated

    async def increment(self, path: str, delta: int | float = 1) -> int | float:
        """Add ``delta`` to the number at ``path`` (absent counts as 0).

        One read plus one write through ``transaction``; concurrent
        increments can be lost.
        """

        def add(current: Any) -> int | float:
            if current is None:
                return delta
            if isinstance(current, bool) or not isinstance(current, int | float):
                raise TypeError(f"Cannot increment non-numeric value at {path!r}: {current!r}")
            return current + delta

        return await self.transaction(path, add)

    async def conditional_transaction(
        self,
        path: str,
        update_fn: UpdateFn,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Any:
        """Optimistic read-modify-write guarded by the node's ETag.

        The write carries ``if-match``; when another writer got there first
        the store rejects it with the current value, ``update_fn`` is
        re-applied to that value and the write is retried.

        Raises:
            TransactionConflictError: If every attempt lost the race
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        snapshot: Snapshot = await self.fetch("read_etag", {"path": path})
        value, etag = snapshot.value, snapshot.etag

        for attempt in range(1, max_attempts + 1):
            updated = await _apply(update_fn, value)
            if updated is None:
                result: ConditionalWriteResult = await self.fetch(
                    "delete_if_match", {"path": path, "etag": etag}
                )
            else:
                result = await self.fetch(
                    "write_if_match", {"path": path, "value": updated, "etag": etag}
                )
            if result.committed:
                return updated

            logger.debug("conditional_write_conflict", extra={"path": path, "attempt": attempt})
            if result.etag is None:
                snapshot = await self.fetch("read_etag", {"path": path})
                value, etag = snapshot.value, snapshot.etag
            else:
                value, etag = result.value, result.etag

        raise TransactionConflictError(
            f"Conditional transaction on {path!r} failed after {max_attempts} attempts",
            path=path,
            attempts=max_attempts,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._http.close()

    async def __aenter__(self) -> RTDBClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
