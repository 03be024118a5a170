"""Error taxonomy shared by controllers and the exception handlers in `main`."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response.

    Attributes:
        status_code: HTTP status to respond with.
        message: Human readable error message placed under ``error``.
        envelope: When True the body carries ``success: false`` next to ``error``.
    """

    status_code = 500

    def __init__(self, message: str, *, envelope: bool = True, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.envelope = envelope
        if status_code is not None:
            self.status_code = status_code

    def body(self) -> Dict[str, Any]:
        """Return the JSON body for this error."""
        if self.envelope:
            return {"success": False, "error": self.message}
        return {"error": self.message}


class ValidationError(ApiError):
    """Missing or invalid required input."""

    status_code = 400


class NotFound(ApiError):
    """Requested record does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not found", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class PayloadTooLarge(ApiError):
    status_code = 413


class StoreError(ApiError):
    """Any persistence failure, surfaced with the underlying message."""

    status_code = 500


class ModelUnavailable(Exception):
    """Raised once every model invocation attempt has failed.

    Not an `ApiError`: callers substitute an endpoint-specific fallback payload
    instead of surfacing the failure.
    """

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        detail = str(last_error) if last_error is not None else "unknown error"
        super().__init__(f"Model unavailable after {attempts} attempt(s): {detail}")
