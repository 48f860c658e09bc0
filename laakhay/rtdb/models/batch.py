"""Batch write operation descriptors."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.enums import BatchOpType


class BatchOperation(BaseModel):
    """One write in a ``RTDBClient.batch`` call."""

    type: BatchOpType
    path: str = Field(..., min_length=1)
    data: Any = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_payload(self) -> BatchOperation:
        """Validate payload shape against the operation type."""
        if self.type is BatchOpType.UPDATE and not isinstance(self.data, dict):
            raise ValueError("update operations require a mapping payload")
        if self.type is BatchOpType.DELETE and self.data is not None:
            raise ValueError("delete operations take no payload")
        return self

    @classmethod
    def for_set(cls, path: str, data: Any) -> BatchOperation:
        return cls(type=BatchOpType.SET, path=path, data=data)

    @classmethod
    def for_update(cls, path: str, data: dict[str, Any]) -> BatchOperation:
        return cls(type=BatchOpType.UPDATE, path=path, data=data)

    @classmethod
    def for_delete(cls, path: str) -> BatchOperation:
        return cls(type=BatchOpType.DELETE, path=path)
