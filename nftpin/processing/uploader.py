"""Upload orchestration: artwork first, then the metadata that points at it."""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..config import ConfigManager
from ..metadata import IPFS_SCHEME, build_metadata
from ..pinata import PinataClient

logger = logging.getLogger(__name__)

IMAGE_PIN_NAME = "Autogas-NFT-Image"
METADATA_PIN_NAME = "Autogas-NFT-Metadata"
COLLECTION_PIN_NAME = "Autogas-NFT-Collection-Metadata"

METADATA_FILE_NAME = "metadata.json"
METADATA_DIR_NAME = "metadata"


@dataclass
class UploadResult:
    """Outcome of an upload run.

    Attributes:
        mode: "single" or "batch"
        image_cid: CID of the shared artwork
        metadata_cid: CID of the metadata file (single) or folder (batch)
        token_count: Number of metadata documents uploaded
    """
    mode: str
    image_cid: str
    metadata_cid: str
    token_count: int = 1

    @property
    def base_uri(self) -> str:
        """Base URI for the token contract."""
        return f"{IPFS_SCHEME}{self.metadata_cid}/"


@contextmanager
def _temporary_file(path: Path) -> Iterator[Path]:
    """Yield ``path`` and remove it on exit, whatever the outcome."""
    try:
        yield path
    finally:
        if path.exists():
            path.unlink()
            logger.debug(f"Removed temporary file {path}")


@contextmanager
def _temporary_directory(path: Path) -> Iterator[Path]:
    """Create ``path``, yield it, and remove it recursively on exit.

    ``path`` must not exist yet; a directory this run did not create is
    never uploaded or removed.
    """
    path.mkdir(parents=True)
    try:
        yield path
    finally:
        if path.exists():
            shutil.rmtree(path)
            logger.debug(f"Removed temporary directory {path}")


class MetadataUploader:
    """Pins the artwork and the token metadata built around it.

    The client is passed in rather than created globally, so any object
    exposing ``pin_file_to_ipfs`` and ``pin_from_fs`` can stand in for the
    real Pinata client.

    Without a work_dir every run gets its own system temporary directory.
    With one, the run refuses to touch a ``metadata.json`` or ``metadata/``
    already sitting there.
    """

    def __init__(
        self,
        client: PinataClient,
        image_path: str,
        work_dir: Optional[str] = None
    ) -> None:
        """Initialize uploader.

        Args:
            client: Pinning client
            image_path: Local path of the artwork shared by every token
            work_dir: Directory for temporary metadata files
                (defaults to a fresh temporary directory per run)
        """
        self.client = client
        self.image_path = Path(image_path)
        self.work_dir = Path(work_dir) if work_dir else None

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        client: Optional[PinataClient] = None
    ) -> "MetadataUploader":
        """Create an uploader from configuration.

        Args:
            config: Configuration manager
            client: Pinning client (created from config if not provided)

        Returns:
            MetadataUploader instance
        """
        if client is None:
            client = PinataClient(
                api_key=config.get("pinata.api_key"),
                api_secret=config.get("pinata.api_secret"),
                timeout=config.get("pinata.timeout"),
                base_url=config.get("pinata.base_url")
            )

        return cls(
            client=client,
            image_path=config.get("assets.image_path"),
            work_dir=config.get("paths.work_dir") or None
        )

    def _check_target_free(self, name: str) -> None:
        if self.work_dir is not None and (self.work_dir / name).exists():
            raise FileExistsError(
                f"{self.work_dir / name} already exists; "
                "remove it or choose another work_dir"
            )

    @contextmanager
    def _scratch_dir(self) -> Iterator[Path]:
        """Yield the directory this run writes its metadata into."""
        if self.work_dir is not None:
            self.work_dir.mkdir(parents=True, exist_ok=True)
            yield self.work_dir
            return

        with tempfile.TemporaryDirectory(prefix="nftpin-") as scratch:
            logger.debug(f"Using temporary work dir {scratch}")
            yield Path(scratch)

    def upload_image(self) -> str:
        """Pin the artwork.

        Returns:
            CID of the image

        Raises:
            FileNotFoundError: If the image asset does not exist
            PinataError: If the upload fails
        """
        with open(self.image_path, "rb") as image_file:
            pin = self.client.pin_file_to_ipfs(
                image_file,
                name=IMAGE_PIN_NAME,
                keyvalues={"type": "image"}
            )

        logger.info(f"Image uploaded to IPFS: {pin.ipfs_hash}")
        return pin.ipfs_hash

    def _upload_single(self) -> UploadResult:
        self._check_target_free(METADATA_FILE_NAME)

        image_cid = self.upload_image()
        metadata = build_metadata(image_cid, 1)

        with self._scratch_dir() as scratch:
            with _temporary_file(scratch / METADATA_FILE_NAME) as metadata_path:
                metadata_path.write_text(metadata.to_json())

                with open(metadata_path, "rb") as metadata_file:
                    pin = self.client.pin_file_to_ipfs(
                        metadata_file,
                        name=METADATA_PIN_NAME,
                        keyvalues={"type": "metadata"}
                    )

        result = UploadResult("single", image_cid, pin.ipfs_hash, 1)
        logger.info(f"Metadata uploaded to IPFS: {result.metadata_cid}")
        logger.info(f"Use this as your base URI: {result.base_uri}")
        return result

    def _upload_batch(self, number_of_tokens: int) -> UploadResult:
        if number_of_tokens < 1:
            raise ValueError(
                f"number_of_tokens must be at least 1, got {number_of_tokens}"
            )
        self._check_target_free(METADATA_DIR_NAME)

        image_cid = self.upload_image()

        with self._scratch_dir() as scratch, \
                _temporary_directory(scratch / METADATA_DIR_NAME) as metadata_dir:
            for token_id in range(1, number_of_tokens + 1):
                metadata = build_metadata(image_cid, token_id)
                (metadata_dir / f"{token_id}.json").write_text(metadata.to_json())

            logger.debug(f"Wrote {number_of_tokens} metadata file(s) to {metadata_dir}")

            pin = self.client.pin_from_fs(
                str(metadata_dir),
                name=COLLECTION_PIN_NAME,
                keyvalues={"type": "collection"}
            )

        result = UploadResult("batch", image_cid, pin.ipfs_hash, number_of_tokens)
        logger.info(f"Metadata folder uploaded to IPFS: {result.metadata_cid}")
        logger.info(f"Use this as your base URI: {result.base_uri}")
        return result

    def run(self, number_of_tokens: Optional[int] = None) -> UploadResult:
        """Run the single-token path, or the batch path when a count is given.

        Errors are logged and re-raised unchanged.

        Args:
            number_of_tokens: Batch size (None for the single-token path)

        Returns:
            UploadResult describing the pinned content
        """
        try:
            if number_of_tokens is None:
                return self._upload_single()
            return self._upload_batch(number_of_tokens)
        except Exception as e:
            logger.error(f"Error uploading to Pinata: {e}")
            raise

    def upload_metadata(self) -> str:
        """Pin the artwork and the metadata for token #1.

        Returns:
            CID of the metadata file
        """
        return self.run().metadata_cid

    def upload_metadata_for_multiple_tokens(self, number_of_tokens: int) -> str:
        """Pin the artwork and a folder of metadata for tokens 1..N.

        Args:
            number_of_tokens: How many ``<n>.json`` documents to create

        Returns:
            CID of the metadata folder
        """
        return self.run(number_of_tokens).metadata_cid
