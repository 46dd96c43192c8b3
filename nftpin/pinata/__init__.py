"""Pinata API integration for nftpin."""

from nftpin.pinata.client import PinataClient
from nftpin.pinata.models import PinResponse
from nftpin.pinata.exceptions import (
    PinataError,
    PinataErrorKind,
    PinataAPIError,
    PinataAuthError,
    PinataNetworkError,
    PinataRateLimitError,
)

__all__ = [
    "PinataClient",
    "PinResponse",
    "PinataError",
    "PinataErrorKind",
    "PinataAPIError",
    "PinataAuthError",
    "PinataNetworkError",
    "PinataRateLimitError",
]
