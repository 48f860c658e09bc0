"""Custom exception hierarchy."""

from __future__ import annotations


class RTDBError(Exception):
    """Base exception for all library errors."""

    pass


class AuthenticationError(RTDBError):
    """Credential exchange with the identity provider failed.

    Raised when the service account cannot be exchanged for a bearer token.
    Never retried by the library.
    """

    pass


class StoreRequestError(RTDBError):
    """Non-2xx response from the remote store."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str | None = None,
        body: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.operation = operation


class ResponseDecodeError(RTDBError):
    """Successful response whose body is not valid JSON."""

    pass


class ResponseValidationError(RTDBError):
    """Response payload does not match the requested type."""

    pass


class TransactionConflictError(RTDBError):
    """Conditional transaction lost every compare-and-set attempt."""

    def __init__(self, message: str, path: str, attempts: int) -> None:
        super().__init__(message)
        self.path = path
        self.attempts = attempts
