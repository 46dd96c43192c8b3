"""nftpin - pin NFT artwork and token metadata to IPFS via Pinata.

Uploads an image asset, builds the per-token metadata documents that point
at it, and pins those documents so their CID can be used as a contract's
base URI.
"""

from nftpin._version import __version__, __version_info__
from nftpin.config import ConfigManager
from nftpin.metadata import MetadataRecord, build_metadata
from nftpin.pinata import PinataClient
from nftpin.processing import MetadataUploader

__license__ = "MIT"
__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "MetadataRecord",
    "build_metadata",
    "PinataClient",
    "MetadataUploader",
]
