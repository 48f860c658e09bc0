"""Service account to bearer token exchange.

Architecture:
    The exchange is the only collaborator that talks to the identity
    provider. It keeps no token state; caching and single-flight
    coordination live in AccessTokenProvider.

    google-auth performs the signed JWT grant with a blocking transport, so
    the refresh runs in a worker thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

import google.auth.transport.requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from ..config import SCOPES
from ..core.exceptions import AuthenticationError
from ..models import Credentials

logger = logging.getLogger(__name__)


class TokenExchange(Protocol):
    """Anything that can mint a fresh bearer token."""

    async def fetch_token(self) -> str: ...


class ServiceAccountTokenExchange:
    """Exchange service account credentials for an OAuth2 access token."""

    def __init__(self, credentials: Credentials, scopes: Sequence[str] = SCOPES) -> None:
        self._credentials = credentials
        self._scopes = list(scopes)
        self._google_credentials: service_account.Credentials | None = None

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    def _google(self) -> service_account.Credentials:
        if self._google_credentials is None:
            self._google_credentials = service_account.Credentials.from_service_account_info(
                self._credentials.to_service_account_info(), scopes=self._scopes
            )
        return self._google_credentials

    async def fetch_token(self) -> str:
        """Run the credential exchange.

        Returns:
            Bearer token string

        Raises:
            AuthenticationError: If the key is malformed or the grant is rejected
        """
        try:
            creds = self._google()
            await asyncio.to_thread(creds.refresh, google.auth.transport.requests.Request())
        except (GoogleAuthError, ValueError) as e:
            logger.error(
                "token_exchange_failed",
                extra={"client_email": self._credentials.client_email, "error": str(e)},
            )
            raise AuthenticationError(f"Token exchange failed: {e}") from e

        if not creds.token:
            raise AuthenticationError("Token exchange returned no access token")
        logger.debug("token_exchanged", extra={"client_email": self._credentials.client_email})
        return creds.token
