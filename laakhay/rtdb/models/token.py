"""Access token record."""

from pydantic import BaseModel, ConfigDict, Field


class TokenRecord(BaseModel):
    """Bearer token plus its absolute expiry in epoch milliseconds."""

    token: str = ""
    exp: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    def is_valid(self, now_ms: int) -> bool:
        """True when the token is non-empty and has not expired at ``now_ms``."""
        return bool(self.token) and now_ms < self.exp
