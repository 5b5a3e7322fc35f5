"""Exception hierarchy shared by the client services."""

from __future__ import annotations

from typing import Optional


class FinanzaSimpleError(Exception):
    """Base class for every error raised by the client."""


class ConfigurationError(FinanzaSimpleError):
    """Raised when required configuration is missing or malformed."""


class AuthenticationMissingError(FinanzaSimpleError):
    """Raised when an authenticated call is attempted without a token."""

    def __init__(self, message: str = "Al parecer, hay un problema con la autenticación") -> None:
        super().__init__(message)


class AuthenticationInvalidError(FinanzaSimpleError):
    """Raised when the backend rejects the credentials or the stored token."""


class ValidationError(FinanzaSimpleError):
    """Raised when user input is incomplete; no request is issued."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class StorageError(FinanzaSimpleError):
    """Raised when the local session record cannot be written."""


class ApiError(FinanzaSimpleError):
    """Non-2xx response or transport failure talking to the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


__all__ = [
    "ApiError",
    "AuthenticationInvalidError",
    "AuthenticationMissingError",
    "ConfigurationError",
    "FinanzaSimpleError",
    "StorageError",
    "ValidationError",
]
