"""Read endpoint definitions and adapters.

``read`` fetches a subtree. ``read_etag`` additionally asks the store for the
node's ETag, the handle used by conditional writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ....config import ETAG_REQUEST_HEADER, ETAG_RESPONSE_HEADER
from ....core.enums import HttpMethod
from ....core.exceptions import ResponseDecodeError
from ..http_client import RestResponse
from ..runner import ResponseAdapter, RestEndpointSpec
from .shared import build_path, validate_as

SPEC = RestEndpointSpec(
    id="read",
    method=HttpMethod.GET,
    build_path=build_path,
)


def build_etag_headers(params: dict[str, Any]) -> dict[str, str]:
    return {ETAG_REQUEST_HEADER: "true"}


ETAG_SPEC = RestEndpointSpec(
    id="read_etag",
    method=HttpMethod.GET,
    build_path=build_path,
    build_headers=build_etag_headers,
)


@dataclass(frozen=True)
class Snapshot:
    """Value of a node together with its ETag."""

    value: Any
    etag: str


class Adapter(ResponseAdapter):
    """Return the decoded body, validated against ``params["model"]``."""

    def parse(self, response: RestResponse, params: dict[str, Any]) -> Any:
        return validate_as(response.data, params.get("model"))


class EtagAdapter(ResponseAdapter):
    """Return a Snapshot carrying the raw value and ETag."""

    def parse(self, response: RestResponse, params: dict[str, Any]) -> Snapshot:
        etag = response.header(ETAG_RESPONSE_HEADER)
        if not etag:
            raise ResponseDecodeError(f"{params['path']}: response carries no ETag header")
        return Snapshot(value=response.data, etag=etag)
