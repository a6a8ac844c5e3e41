"""Library exceptions."""

from __future__ import annotations


class ParkPermitsError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        super().__init__(text or "")
        self.error_code = error_code or self.default_error_code
        self.detail = detail if detail is not None else text
        self.user_message = user_message


class ValidationError(ParkPermitsError):
    """Raised when inputs violate the calling contract."""

    error_type = "validation"
    default_error_code = "validation_error"


class AuthError(ParkPermitsError):
    """Raised when the API rejects the session."""

    error_type = "auth"
    default_error_code = "auth_error"


class NetworkError(ParkPermitsError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"


class ApiError(ParkPermitsError):
    """Raised when the API returns an error or malformed data."""

    error_type = "api"
    default_error_code = "api_error"


class NotFoundError(ApiError):
    """Raised when a requested record does not exist."""

    default_error_code = "not_found"
