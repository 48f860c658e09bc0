"""HTTP client helper."""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...core.exceptions import ResponseDecodeError, StoreRequestError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], Awaitable[Any] | Any]


@dataclass(frozen=True)
class RestResponse:
    """Decoded store response."""

    status: int
    reason: str
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, timeout: float | None = None) -> None:
        # total=None disables aiohttp's default five minute cap
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a callable invoked with every raw response."""
        self._response_hooks.append(hook)

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning("response_hook_failed", extra={"hook": repr(hook), "error": repr(e)})

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
        operation: str = "request",
        allow_statuses: tuple[int, ...] = (),
    ) -> RestResponse:
        """Send a request and decode its JSON body.

        Args:
            method: HTTP verb
            url: Absolute URL including query string
            body: Pre-serialized JSON body
            headers: Request headers
            operation: Label used in error messages and logs
            allow_statuses: Non-2xx statuses returned instead of raised

        Raises:
            StoreRequestError: Non-2xx status not listed in ``allow_statuses``
            ResponseDecodeError: 2xx body that is not JSON
        """
        async with self.session.request(
            method, url, data=body, headers=dict(headers) if headers else None
        ) as response:
            await self._run_hooks(response)
            text = await response.text()
            status = response.status
            reason = response.reason or ""
            resp_headers = dict(response.headers)

        ok = 200 <= status < 300
        if not ok and status not in allow_statuses:
            logger.error(
                "store_request_failed",
                extra={"operation": operation, "method": method, "status": status},
            )
            raise StoreRequestError(
                f"{operation} failed: [{reason}] {text}",
                status_code=status,
                status_text=reason,
                body=text,
                operation=operation,
            )

        try:
            data = json.loads(text) if text else None
        except ValueError as e:
            if not ok:
                data = None
            else:
                raise ResponseDecodeError(f"{operation} returned invalid JSON: {e}") from e

        return RestResponse(status=status, reason=reason, headers=resp_headers, data=data)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
