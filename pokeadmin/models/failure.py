"""
Failure classification for proxied requests.

Upstream problems surface as `KnownError` subclasses carrying the HTTP
status the caller should see. The exception handler in `pokeadmin.main`
renders them as `{"message": ..., "details": ...}`.
"""

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"

    # Service failures
    NOT_CONFIGURED = "not_configured"
    EXTERNAL_API_ERROR = "external_api_error"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK_ERROR = "network_error"


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: Any = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Error body returned to the client."""
        return {"message": self.message, "details": self.detail}


class UnauthorizedError(KnownError):
    """Raised when a protected route is called without a session token."""

    def __init__(self, message: str = "Unauthorized. No session token found."):
        super().__init__(
            kind=FailureKind.UNAUTHORIZED,
            message=message,
            status_code=401,
        )


class NotConfiguredError(KnownError):
    """Raised when the user/auth backend base URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.NOT_CONFIGURED,
            message="External API URL not configured",
            status_code=500,
        )


class UpstreamError(KnownError):
    """
    Raised when the user/auth backend answers with a failure.

    The upstream status is passed through to the caller, except for
    transport errors (500) and malformed success bodies (502).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        detail: Any = None,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
    ):
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            status_code=status_code,
        )
