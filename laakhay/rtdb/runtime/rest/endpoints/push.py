"""Append-with-generated-key endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ....core.enums import HttpMethod
from ....core.exceptions import ResponseDecodeError
from ..http_client import RestResponse
from ..runner import ResponseAdapter, RestEndpointSpec
from .shared import build_path
from .write import build_value_body

SPEC = RestEndpointSpec(
    id="append",
    method=HttpMethod.POST,
    build_path=build_path,
    build_body=build_value_body,
)


class Adapter(ResponseAdapter):
    """Extract the generated child key.

    The store replies ``{"name": "-N..."}``; generated keys sort by creation time.
    """

    def parse(self, response: RestResponse, params: dict[str, Any]) -> str:
        data = response.data
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise ResponseDecodeError(f"append returned no generated key: {data!r}")
        return data["name"]
