"""Write endpoint definitions: overwrite, merge, delete and their conditional forms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ....config import ETAG_RESPONSE_HEADER, IF_MATCH_HEADER
from ....core.enums import HttpMethod
from ..http_client import RestResponse
from ..runner import ResponseAdapter, RestEndpointSpec
from .shared import build_path

PRECONDITION_FAILED = 412


def build_value_body(params: dict[str, Any]) -> Any:
    return params["value"]


def build_if_match_headers(params: dict[str, Any]) -> dict[str, str]:
    return {IF_MATCH_HEADER: params["etag"]}


SET_SPEC = RestEndpointSpec(
    id="write",
    method=HttpMethod.PUT,
    build_path=build_path,
    build_body=build_value_body,
)

MERGE_SPEC = RestEndpointSpec(
    id="merge",
    method=HttpMethod.PATCH,
    build_path=build_path,
    build_body=build_value_body,
)

DELETE_SPEC = RestEndpointSpec(
    id="delete",
    method=HttpMethod.DELETE,
    build_path=build_path,
)

CONDITIONAL_SET_SPEC = RestEndpointSpec(
    id="write_if_match",
    method=HttpMethod.PUT,
    build_path=build_path,
    build_body=build_value_body,
    build_headers=build_if_match_headers,
    allow_statuses=(PRECONDITION_FAILED,),
)

CONDITIONAL_DELETE_SPEC = RestEndpointSpec(
    id="delete_if_match",
    method=HttpMethod.DELETE,
    build_path=build_path,
    build_headers=build_if_match_headers,
    allow_statuses=(PRECONDITION_FAILED,),
)


class Adapter(ResponseAdapter):
    """Plain writes return nothing."""

    def parse(self, response: RestResponse, params: dict[str, Any]) -> None:
        return None


@dataclass(frozen=True)
class ConditionalWriteResult:
    """Outcome of an ETag-guarded write.

    Attributes:
        committed: Whether the store accepted the write
        value: Value now stored (the current one if the write was rejected)
        etag: ETag of the stored value, when the store reported one
    """

    committed: bool
    value: Any
    etag: str | None


class ConditionalAdapter(ResponseAdapter):
    """Turn 2xx/412 into a ConditionalWriteResult."""

    def parse(self, response: RestResponse, params: dict[str, Any]) -> ConditionalWriteResult:
        etag = response.header(ETAG_RESPONSE_HEADER)
        if response.status == PRECONDITION_FAILED:
            # The store answers a stale ETag with the current value and ETag
            return ConditionalWriteResult(committed=False, value=response.data, etag=etag)
        return ConditionalWriteResult(committed=True, value=params.get("value"), etag=etag)
