"""Helpers shared by endpoint adapters."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ....core.exceptions import ResponseValidationError


def build_path(params: dict[str, Any]) -> str:
    """Every endpoint addresses the logical path it was given."""
    return params["path"]


@lru_cache(maxsize=128)
def _type_adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def validate_as(data: Any, model: Any | None) -> Any:
    """Validate ``data`` against ``model`` when one is requested.

    ``None`` stays ``None``: the store's null means "no data", not an invalid
    payload.
    """
    if model is None or data is None:
        return data
    try:
        return _type_adapter(model).validate_python(data)
    except PydanticValidationError as e:
        raise ResponseValidationError(f"Response does not match {model!r}: {e}") from e


def as_children(data: Any) -> dict[str, Any] | None:
    """Return the child mapping of a node, or None if it has no children."""
    if not isinstance(data, dict):
        return None
    return data
