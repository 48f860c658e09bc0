"""Structured range/order query endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ....core.enums import HttpMethod
from ..http_client import RestResponse
from ..request_builder import encode_query
from ..runner import ResponseAdapter, RestEndpointSpec
from .shared import build_path, validate_as


def build_query(params: dict[str, Any]) -> dict[str, str]:
    """Build query parameters from ``params["options"]``."""
    return encode_query(params["options"])


SPEC = RestEndpointSpec(
    id="query",
    method=HttpMethod.GET,
    build_path=build_path,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Return the raw key to value mapping, or None.

    When ``params["model"]`` is set each child value is validated against it.
    A non-object answer (a leaf value) is passed through untouched.
    """

    def parse(self, response: RestResponse, params: dict[str, Any]) -> Any:
        data = response.data
        model = params.get("model")
        if model is None or not isinstance(data, dict):
            return data
        return {key: validate_as(value, model) for key, value in data.items()}
