"""Custom exceptions for Pinata API operations."""

from enum import Enum


class PinataErrorKind(Enum):
    """Broad cause of a Pinata failure."""

    CONFIGURATION = "configuration"
    NETWORK = "network"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class PinataError(Exception):
    """Base exception for Pinata-related errors.

    Attributes:
        message: Error message
        kind: PinataErrorKind classifying the failure
    """

    default_kind = PinataErrorKind.UNKNOWN

    def __init__(self, message: str, kind: PinataErrorKind = None):
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind


class PinataAPIError(PinataError):
    """Exception raised when the Pinata API answers with an error.

    Attributes:
        message: Error message
        status_code: HTTP status code
        response: Full response data (if available)
    """

    default_kind = PinataErrorKind.REJECTED

    def __init__(
        self,
        message: str,
        status_code: int = None,
        response: dict = None,
        kind: PinataErrorKind = None
    ):
        """Initialize Pinata API error.

        Args:
            message: Error message
            status_code: HTTP status code
            response: Full response data
            kind: Failure classification (defaults to REJECTED)
        """
        super().__init__(message, kind=kind)
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.status_code:
            return f"Pinata API Error ({self.status_code}): {self.message}"
        return f"Pinata API Error: {self.message}"


class PinataAuthError(PinataAPIError):
    """Exception raised for missing or rejected credentials."""

    def __str__(self) -> str:
        if self.kind is PinataErrorKind.CONFIGURATION:
            return f"Pinata credentials error: {self.message}"
        return super().__str__()


class PinataRateLimitError(PinataAPIError):
    """Exception raised when API rate limit is exceeded (429)."""

    def __init__(self, message: str, retry_after: int = None):
        """Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds to wait before retrying (if provided by API)
        """
        super().__init__(message, status_code=429)
        self.retry_after = retry_after

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.retry_after:
            return f"Pinata Rate Limit Exceeded. Retry after {self.retry_after} seconds."
        return "Pinata Rate Limit Exceeded."


class PinataNetworkError(PinataError):
    """Exception raised when the Pinata API cannot be reached."""

    default_kind = PinataErrorKind.NETWORK
