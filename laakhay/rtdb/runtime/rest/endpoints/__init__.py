"""Store REST endpoint registry.

Each primitive operation is a RestEndpointSpec (how to build the request)
paired with a ResponseAdapter (how to read the answer).
"""

from __future__ import annotations

from ..runner import ResponseAdapter, RestEndpointSpec
from . import push, query, read, shallow, write
from .read import Snapshot
from .write import ConditionalWriteResult

_ENDPOINTS: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    read.SPEC.id: (read.SPEC, read.Adapter),
    read.ETAG_SPEC.id: (read.ETAG_SPEC, read.EtagAdapter),
    write.SET_SPEC.id: (write.SET_SPEC, write.Adapter),
    write.MERGE_SPEC.id: (write.MERGE_SPEC, write.Adapter),
    write.DELETE_SPEC.id: (write.DELETE_SPEC, write.Adapter),
    write.CONDITIONAL_SET_SPEC.id: (write.CONDITIONAL_SET_SPEC, write.ConditionalAdapter),
    write.CONDITIONAL_DELETE_SPEC.id: (write.CONDITIONAL_DELETE_SPEC, write.ConditionalAdapter),
    push.SPEC.id: (push.SPEC, push.Adapter),
    shallow.SPEC.id: (shallow.SPEC, shallow.Adapter),
    query.SPEC.id: (query.SPEC, query.Adapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    return sorted(_ENDPOINTS)


__all__ = [
    "ConditionalWriteResult",
    "Snapshot",
    "get_endpoint_adapter",
    "get_endpoint_spec",
    "list_endpoints",
]
