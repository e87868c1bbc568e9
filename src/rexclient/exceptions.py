"""Custom exceptions for the REX client."""

from __future__ import annotations


class RexError(Exception):
    """Base exception for all REX client errors."""

    pass


class TransportError(RexError):
    """Raised when the HTTP exchange itself fails (connection, timeout)."""

    pass


class AuthenticationError(RexError):
    """Raised when no access token can be obtained or none is set."""

    pass


class DecodeError(RexError):
    """Raised when a response body is not the JSON document we expected."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot decode response from {url}: {reason}")


class APIError(RexError):
    """Raised when a resource endpoint answers with an unexpected status.

    The raw response body is kept for diagnostics.
    """

    def __init__(self, status_code: int, body: str = "", message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        detail = message or "unexpected server response"
        if body:
            detail = f"{detail}: {body}"
        super().__init__(f"API error {status_code}: {detail}")


class NotFoundError(APIError):
    """Raised when a looked-up resource does not exist."""

    def __init__(self, message: str, status_code: int = 404, body: str = "") -> None:
        super().__init__(status_code, body, message)
