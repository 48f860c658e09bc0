"""Shallow (keys-only) endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ....core.enums import HttpMethod
from ...ordering import key_rank
from ..http_client import RestResponse
from ..request_builder import shallow_params
from ..runner import ResponseAdapter, RestEndpointSpec
from .shared import as_children, build_path


def build_query(params: dict[str, Any]) -> dict[str, str]:
    return shallow_params()


SPEC = RestEndpointSpec(
    id="shallow",
    method=HttpMethod.GET,
    build_path=build_path,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Return the immediate child keys in the store's ``$key`` order.

    A shallow fetch answers ``{"child": true, ...}`` for objects and the value
    itself for leaves; leaves and missing nodes have no keys. Canonical integer
    keys come first, numerically, then the rest as strings.
    """

    def parse(self, response: RestResponse, params: dict[str, Any]) -> list[str]:
        children = as_children(response.data)
        if children is None:
            return []
        return sorted(children, key=key_rank, reverse=bool(params.get("reverse", False)))
