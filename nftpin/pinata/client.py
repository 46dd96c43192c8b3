"""Pinata API client for pinning files and directories to IPFS."""

import json
import logging
import mimetypes
from contextlib import ExitStack
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional

import requests

from nftpin._version import __version__
from nftpin.pinata.models import PinResponse
from nftpin.pinata.exceptions import (
    PinataAPIError,
    PinataAuthError,
    PinataErrorKind,
    PinataNetworkError,
    PinataRateLimitError,
)

logger = logging.getLogger(__name__)


class PinataClient:
    """Client for interacting with the Pinata pinning API.

    This class handles API key authentication and the two pinning
    operations the tool needs: pinning a single file or stream, and pinning
    a whole local directory under one root CID. Every failure is raised as
    a PinataError subclass carrying a PinataErrorKind.

    Attributes:
        api_key: Pinata API key
        api_secret: Pinata API secret
        base_url: Base URL for the Pinata API
        timeout: Request timeout in seconds (None blocks until answered)
    """

    BASE_URL = "https://api.pinata.cloud"

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None
    ) -> None:
        """Initialize Pinata client with API credentials.

        Args:
            api_key: Pinata API key
            api_secret: Pinata API secret
            timeout: Request timeout in seconds
            base_url: Override for the API base URL

        Raises:
            PinataAuthError: If either credential is missing
        """
        if not api_key or not api_secret:
            raise PinataAuthError(
                "Both api_key and api_secret are required "
                "(set PINATA_API_KEY and PINATA_SECRET_KEY)",
                kind=PinataErrorKind.CONFIGURATION
            )

        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

        logger.debug(f"Pinata client initialized for {self.base_url}")

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": f"nftpin/{__version__}",
            "pinata_api_key": self.api_key,
            "pinata_secret_api_key": self.api_secret,
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[List[tuple]] = None
    ) -> Dict[str, Any]:
        """Make authenticated request to the Pinata API.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint path (e.g. "/pinning/pinFileToIPFS")
            data: Multipart form fields
            files: Multipart file parts

        Returns:
            Response data dictionary

        Raises:
            PinataNetworkError: If the service cannot be reached
            PinataAuthError: If credentials are rejected (401/403)
            PinataRateLimitError: If rate limit exceeded (429)
            PinataAPIError: For any other error status or an unreadable body
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"Pinata API {method} {url}")

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self._headers(),
                data=data,
                files=files,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise PinataNetworkError(
                f"Request timeout after {self.timeout} seconds: {endpoint}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise PinataNetworkError(f"Request failed: {e}") from e

        logger.debug(f"  Response: {response.status_code}")

        if response.status_code in (401, 403):
            raise PinataAuthError(
                "Authentication failed. Check your Pinata API credentials.",
                status_code=response.status_code,
                response=self._safe_json(response)
            )
        elif response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise PinataRateLimitError(
                "Rate limit exceeded",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )
        elif not response.ok:
            body = self._safe_json(response)
            raise PinataAPIError(
                self._error_message(body) or
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=body
            )

        try:
            return response.json()
        except ValueError as e:
            raise PinataAPIError(
                f"Invalid JSON in response from {endpoint}",
                status_code=response.status_code,
                kind=PinataErrorKind.UNKNOWN
            ) from e

    @staticmethod
    def _safe_json(response: requests.Response) -> Optional[Dict[str, Any]]:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(body: Optional[Dict[str, Any]]) -> Optional[str]:
        """Pull a readable message out of a Pinata error body."""
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        if isinstance(error, dict):
            reason = error.get("reason", "")
            details = error.get("details", "")
            return ": ".join(part for part in (reason, details) if part) or None
        if isinstance(error, str):
            return error
        return body.get("message")

    @staticmethod
    def _pinata_fields(name: str, keyvalues: Optional[Dict[str, Any]]) -> Dict[str, str]:
        metadata: Dict[str, Any] = {"name": name}
        if keyvalues:
            metadata["keyvalues"] = keyvalues
        return {"pinataMetadata": json.dumps(metadata)}

    def _pin_response(self, data: Dict[str, Any], endpoint: str) -> PinResponse:
        pin = PinResponse.from_api_response(data)
        if not pin.ipfs_hash:
            raise PinataAPIError(
                f"Response from {endpoint} is missing IpfsHash",
                response=data,
                kind=PinataErrorKind.UNKNOWN
            )
        return pin

    def test_authentication(self) -> Dict[str, Any]:
        """Check that the configured credentials are accepted.

        Returns:
            Response data (contains a confirmation message)

        Raises:
            PinataAuthError: If the credentials are rejected
            PinataError: If the request fails otherwise
        """
        response = self._request("GET", "/data/testAuthentication")
        logger.info(f"Pinata authentication OK: {response.get('message', '')}")
        return response

    def pin_file_to_ipfs(
        self,
        stream: BinaryIO,
        name: str,
        keyvalues: Optional[Dict[str, Any]] = None,
        file_name: Optional[str] = None
    ) -> PinResponse:
        """Pin a single file or binary stream.

        Args:
            stream: Open binary file object
            name: Name label shown in the Pinata dashboard
            keyvalues: Free-form key/value tags for bookkeeping
            file_name: Part file name (defaults to the stream's own name)

        Returns:
            PinResponse with the content's CID

        Raises:
            PinataError: If the upload fails
        """
        if file_name is None:
            file_name = Path(getattr(stream, "name", name)).name

        endpoint = "/pinning/pinFileToIPFS"
        logger.info(f"Pinning file {file_name} as '{name}'")

        mime = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        data = self._request(
            "POST",
            endpoint,
            data=self._pinata_fields(name, keyvalues),
            files=[("file", (file_name, stream, mime))]
        )

        pin = self._pin_response(data, endpoint)
        logger.debug(f"Pinned {file_name} -> {pin.ipfs_hash}")
        return pin

    def pin_from_fs(
        self,
        directory: str,
        name: str,
        keyvalues: Optional[Dict[str, Any]] = None
    ) -> PinResponse:
        """Pin every file under a local directory as one folder.

        Each file is sent with its path relative to the directory's parent,
        so Pinata wraps them in a single folder and returns the folder's CID.
        Files stay addressable as ``<CID>/<relative path>``.

        Args:
            directory: Local directory to upload
            name: Name label shown in the Pinata dashboard
            keyvalues: Free-form key/value tags for bookkeeping

        Returns:
            PinResponse with the folder's root CID

        Raises:
            FileNotFoundError: If the directory does not exist
            ValueError: If the directory contains no files
            PinataError: If the upload fails
        """
        root = Path(directory)
        if not root.is_dir():
            raise FileNotFoundError(f"Directory {root} does not exist")

        paths = sorted(path for path in root.rglob("*") if path.is_file())
        if not paths:
            raise ValueError(f"Directory {root} does not contain any files")

        endpoint = "/pinning/pinFileToIPFS"
        logger.info(f"Pinning {len(paths)} file(s) from {root} as '{name}'")

        with ExitStack() as stack:
            files = []
            for path in paths:
                handle = stack.enter_context(path.open("rb"))
                part_name = (Path(root.name) / path.relative_to(root)).as_posix()
                mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
                files.append(("file", (part_name, handle, mime)))

            data = self._request(
                "POST",
                endpoint,
                data=self._pinata_fields(name, keyvalues),
                files=files
            )

        pin = self._pin_response(data, endpoint)
        logger.debug(f"Pinned directory {root} -> {pin.ipfs_hash}")
        return pin
