from __future__ import annotations


class OpenTokError(Exception):
    """Base exception for the tokbox_server package."""


class InvalidArgumentError(OpenTokError, ValueError):
    """Raised when caller-supplied data fails a local check (session id, expiry, role, data)."""


class SigningError(OpenTokError):
    """Raised when the HMAC/JWS primitive cannot produce a signature."""


class RequestError(OpenTokError):
    """Raised when a call to the platform REST API fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
