"""Service account credentials model."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import DEFAULT_TOKEN_URI


class Credentials(BaseModel):
    """Google service account credentials.

    Accepts the content of a service account JSON key file. Keys not listed
    here are ignored.
    """

    project_id: str = Field(..., min_length=1)
    client_email: str = Field(..., min_length=1)
    private_key: str = Field(..., min_length=1, repr=False)
    type: str | None = None
    auth_uri: str | None = None
    token_uri: str | None = None
    client_id: str | None = None
    private_key_id: str | None = None
    universe_domain: str | None = None
    client_x509_cert_url: str | None = None
    auth_provider_x509_cert_url: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("private_key")
    @classmethod
    def normalize_private_key(cls, v: str) -> str:
        """Turn escaped ``\\n`` sequences (env vars, .env files) into newlines."""
        return v.replace("\\n", "\n")

    @classmethod
    def from_file(cls, path: str | Path) -> Credentials:
        """Load credentials from a service account JSON key file."""
        with open(path, encoding="utf-8") as fh:
            return cls.model_validate(json.load(fh))

    def to_service_account_info(self) -> dict[str, Any]:
        """Return the mapping expected by ``google.oauth2.service_account``."""
        info = self.model_dump(exclude_none=True)
        info.setdefault("type", "service_account")
        info.setdefault("token_uri", DEFAULT_TOKEN_URI)
        return info
