"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic_core import to_jsonable_python

from ...core.enums import HttpMethod
from .http_client import HTTPClient, RestResponse
from .request_builder import build_url

if TYPE_CHECKING:
    from ...auth import AccessTokenProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: HttpMethod
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, str]] | None = None
    build_body: Callable[[dict[str, Any]], Any] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Non-2xx statuses the adapter handles itself (e.g. 412 on conditional writes)
    allow_statuses: tuple[int, ...] = ()


class ResponseAdapter:
    def parse(self, response: RestResponse, params: dict[str, Any]) -> Any:
        return response.data


def serialize_body(value: Any) -> str:
    """JSON-encode a payload; pydantic models, datetimes and decimals included."""
    return json.dumps(value, default=to_jsonable_python)


class RestRunner:
    def __init__(
        self,
        http: HTTPClient,
        *,
        base_url: str,
        token_provider: AccessTokenProvider,
    ) -> None:
        self._http = http
        self._base_url = base_url
        self._tokens = token_provider

    @property
    def base_url(self) -> str:
        return self._base_url

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        token = await self._tokens.get_token()

        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        headers = {"Authorization": f"Bearer {token}"}
        if spec.build_headers:
            headers.update(spec.build_headers(params))

        body: str | None = None
        if spec.build_body:
            body = serialize_body(spec.build_body(params))
            headers["Content-Type"] = "application/json"

        url = build_url(self._base_url, path, query)
        logger.debug(
            "Dispatching store request",
            extra={"operation": spec.id, "method": spec.method.value, "path": path},
        )
        response = await self._http.request(
            spec.method.value,
            url,
            body=body,
            headers=headers,
            operation=spec.id,
            allow_statuses=spec.allow_statuses,
        )
        return adapter.parse(response, params)
