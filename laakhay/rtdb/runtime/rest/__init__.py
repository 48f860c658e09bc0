"""REST runtime abstractions."""

from .http_client import HTTPClient, RestResponse
from .request_builder import build_url, clean_path, encode_query, shallow_params
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner

__all__ = [
    "HTTPClient",
    "RestResponse",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "build_url",
    "clean_path",
    "encode_query",
    "shallow_params",
]
