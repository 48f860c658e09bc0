"""Shared store constants.

Hosts, scopes, token lifetimes and header names used by the auth layer
and the REST runtime.
"""

from __future__ import annotations

import re

# Bare database names are suffixed with this domain
DEFAULT_DOMAIN = "firebaseio.com"

# Every resource is addressed as <path> + suffix
DOCUMENT_SUFFIX = ".json"

SCOPES = (
    "https://www.googleapis.com/auth/firebase.database",
    "https://www.googleapis.com/auth/userinfo.email",
)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Google access tokens live 60 minutes; reuse ours for 55
TOKEN_TTL_MS = 3_300_000

ETAG_REQUEST_HEADER = "X-Firebase-ETag"
ETAG_RESPONSE_HEADER = "ETag"
IF_MATCH_HEADER = "if-match"

_SCHEME_RE = re.compile(r"^https?://")


def normalize_database(database: str) -> str:
    """Resolve a database name or URL to the store host.

    Args:
        database: Bare database name (``"my-db"``), host
            (``"my-db.europe-west1.firebasedatabase.app"``) or full URL.

    Returns:
        Host without scheme or trailing slash.
    """
    db = _SCHEME_RE.sub("", database.strip())
    if db.endswith("/"):
        db = db[:-1]
    if not db:
        raise ValueError("database must be a non-empty name or URL")
    return db if "." in db else f"{db}.{DEFAULT_DOMAIN}"


def base_url_for(database: str) -> str:
    """Return the ``https://`` base URL for a database name or URL."""
    return f"https://{normalize_database(database)}"
