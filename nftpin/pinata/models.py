"""Data models for Pinata API resources."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PinResponse:
    """Result of pinning a file or directory.

    Attributes:
        ipfs_hash: CID of the pinned content (directory root for folders)
        pin_size: Size of the pinned content in bytes
        timestamp: Time the pin was recorded by Pinata
        is_duplicate: Whether the content was already pinned
    """
    ipfs_hash: str
    pin_size: Optional[int] = None
    timestamp: Optional[str] = None
    is_duplicate: bool = False

    @classmethod
    def from_api_response(cls, data: dict) -> "PinResponse":
        """Create PinResponse instance from Pinata API response.

        Args:
            data: JSON body of a pinning request

        Returns:
            PinResponse instance
        """
        return cls(
            ipfs_hash=data.get("IpfsHash", ""),
            pin_size=data.get("PinSize"),
            timestamp=data.get("Timestamp"),
            is_duplicate=bool(data.get("isDuplicate", False)),
        )

    @property
    def uri(self) -> str:
        """ipfs:// URI of the pinned content."""
        return f"ipfs://{self.ipfs_hash}"

    def __str__(self) -> str:
        return f"PinResponse({self.ipfs_hash})"
