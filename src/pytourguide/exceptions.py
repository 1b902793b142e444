"""Library exceptions."""

from __future__ import annotations


class TourGuideError(Exception):
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
        super().__init__(text if text is not None else "")
        self.error_code = error_code if error_code is not None else self.default_error_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message


class ValidationError(TourGuideError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class SlotUnavailableError(ValidationError):
    """Raised when a chosen schedule slot can no longer be booked."""

    default_error_code = "slot_unavailable"


class AuthError(TourGuideError):
    """Raised when authentication fails or is missing."""

    error_type = "auth"
    default_error_code = "auth_error"


class NetworkError(TourGuideError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"


class RequestTimeoutError(NetworkError):
    """Raised when a request times out."""

    default_error_code = "timeout"


class ApiError(TourGuideError):
    """Raised when the backend returns an error or an unusable response."""

    error_type = "api"
    default_error_code = "api_error"


class NotFoundError(ApiError):
    """Raised when the backend reports a missing resource."""

    default_error_code = "not_found"


class ConflictError(ApiError):
    """Raised when the backend rejects a request as conflicting."""

    default_error_code = "conflict"


class RateLimitError(ApiError):
    """Raised when the backend throttles requests."""

    default_error_code = "rate_limit"


class ServiceUnavailableError(ApiError):
    """Raised when the backend is temporarily unavailable."""

    default_error_code = "service_unavailable"


class ConfigError(TourGuideError):
    """Raised when the client is misconfigured."""

    error_type = "config"
    default_error_code = "config_error"
