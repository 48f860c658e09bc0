"""Structured range/order query options."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

QueryValue = str | int | float | bool


class QueryOptions(BaseModel):
    """Filtering, ordering and limiting options for a store query.

    Mirrors the store's query grammar. Contradictory combinations are rejected
    at construction instead of being sent to the server.

    Example:
        >>> QueryOptions(order_by="score", limit_to_last=10)
        >>> QueryOptions(order_by="$key", start_after="-N002", limit_to_first=3)
    """

    order_by: str | None = Field(default=None, min_length=1)
    limit_to_first: int | None = Field(default=None, gt=0)
    limit_to_last: int | None = Field(default=None, gt=0)
    start_at: QueryValue | None = None
    end_at: QueryValue | None = None
    start_after: QueryValue | None = None
    end_before: QueryValue | None = None
    equal_to: QueryValue | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_combination(self) -> QueryOptions:
        """Reject option combinations the store cannot answer meaningfully."""
        if self.limit_to_first is not None and self.limit_to_last is not None:
            raise ValueError("limit_to_first and limit_to_last are mutually exclusive")
        bounds = (self.start_at, self.end_at, self.start_after, self.end_before)
        if self.equal_to is not None and any(b is not None for b in bounds):
            raise ValueError("equal_to cannot be combined with range bounds")
        if self.start_at is not None and self.start_after is not None:
            raise ValueError("start_at and start_after are mutually exclusive")
        if self.end_at is not None and self.end_before is not None:
            raise ValueError("end_at and end_before are mutually exclusive")
        if self.order_by is None and self.has_constraints():
            raise ValueError("filters and limits require order_by")
        return self

    def has_constraints(self) -> bool:
        """True when any limit or bound is set."""
        return any(
            v is not None
            for v in (
                self.limit_to_first,
                self.limit_to_last,
                self.start_at,
                self.end_at,
                self.start_after,
                self.end_before,
                self.equal_to,
            )
        )
