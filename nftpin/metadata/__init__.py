"""Token metadata construction."""

from nftpin.metadata.builder import (
    Attribute,
    MetadataRecord,
    build_metadata,
    IPFS_SCHEME,
)

__all__ = ["Attribute", "MetadataRecord", "build_metadata", "IPFS_SCHEME"]
