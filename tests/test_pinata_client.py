"""Tests for the Pinata API client with the HTTP layer patched out."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from nftpin.pinata import (
    PinataAPIError,
    PinataAuthError,
    PinataClient,
    PinataErrorKind,
    PinataNetworkError,
    PinataRateLimitError,
    PinResponse,
)


def fake_response(status_code=200, body=None, headers=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.headers = headers or {}
    if text is not None:
        response.content = text.encode()
        response.json.side_effect = ValueError("not json")
    elif body is not None:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    else:
        response.content = b""
        response.json.side_effect = ValueError("empty")
    return response


@pytest.fixture
def client():
    return PinataClient("key", "secret", timeout=5)


@pytest.fixture
def mock_request():
    with patch("nftpin.pinata.client.requests.request") as mocked:
        yield mocked


class TestConstruction:

    @pytest.mark.parametrize("key,secret", [("", "secret"), ("key", ""), (None, None)])
    def test_missing_credentials_fail_fast(self, key, secret, mock_request):
        with pytest.raises(PinataAuthError) as excinfo:
            PinataClient(key, secret)

        assert excinfo.value.kind is PinataErrorKind.CONFIGURATION
        mock_request.assert_not_called()

    def test_base_url_trailing_slash_stripped(self):
        client = PinataClient("key", "secret", base_url="https://pinata.example/")

        assert client.base_url == "https://pinata.example"


class TestPinFile:

    def test_success(self, client, mock_request):
        mock_request.return_value = fake_response(body={
            "IpfsHash": "QmImage",
            "PinSize": 1234,
            "Timestamp": "2024-01-01T00:00:00Z",
        })

        pin = client.pin_file_to_ipfs(
            io.BytesIO(b"data"), name="Autogas-NFT-Image",
            keyvalues={"type": "image"}, file_name="Autogas.jpg"
        )

        assert pin == PinResponse("QmImage", 1234, "2024-01-01T00:00:00Z", False)
        assert pin.uri == "ipfs://QmImage"

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == "https://api.pinata.cloud/pinning/pinFileToIPFS"
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["pinata_api_key"] == "key"
        assert kwargs["headers"]["pinata_secret_api_key"] == "secret"
        assert json.loads(kwargs["data"]["pinataMetadata"]) == {
            "name": "Autogas-NFT-Image",
            "keyvalues": {"type": "image"},
        }
        field, (part_name, _, mime) = kwargs["files"][0]
        assert field == "file"
        assert part_name == "Autogas.jpg"
        assert mime == "image/jpeg"

    def test_part_name_defaults_to_stream_name(self, client, mock_request, tmp_path):
        path = tmp_path / "metadata.json"
        path.write_text("{}")
        mock_request.return_value = fake_response(body={"IpfsHash": "QmMeta"})

        with open(path, "rb") as stream:
            client.pin_file_to_ipfs(stream, name="Autogas-NFT-Metadata")

        part_name = mock_request.call_args.kwargs["files"][0][1][0]
        assert part_name == "metadata.json"

    def test_missing_hash_is_unknown_error(self, client, mock_request):
        mock_request.return_value = fake_response(body={"PinSize": 10})

        with pytest.raises(PinataAPIError) as excinfo:
            client.pin_file_to_ipfs(io.BytesIO(b"x"), name="n", file_name="x.bin")

        assert excinfo.value.kind is PinataErrorKind.UNKNOWN

    def test_invalid_json_is_unknown_error(self, client, mock_request):
        mock_request.return_value = fake_response(text="<html>oops</html>")

        with pytest.raises(PinataAPIError) as excinfo:
            client.pin_file_to_ipfs(io.BytesIO(b"x"), name="n", file_name="x.bin")

        assert excinfo.value.kind is PinataErrorKind.UNKNOWN


class TestErrorClassification:

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_rejected(self, client, mock_request, status):
        mock_request.return_value = fake_response(status, body={"error": "Invalid API key"})

        with pytest.raises(PinataAuthError) as excinfo:
            client.test_authentication()

        assert excinfo.value.kind is PinataErrorKind.REJECTED
        assert excinfo.value.status_code == status

    def test_rate_limited(self, client, mock_request):
        mock_request.return_value = fake_response(429, headers={"Retry-After": "30"})

        with pytest.raises(PinataRateLimitError) as excinfo:
            client.test_authentication()

        assert excinfo.value.kind is PinataErrorKind.REJECTED
        assert excinfo.value.retry_after == 30
        assert "30 seconds" in str(excinfo.value)

    def test_other_status_uses_service_message(self, client, mock_request):
        mock_request.return_value = fake_response(400, body={
            "error": {"reason": "INVALID_FILE", "details": "File is empty"}
        })

        with pytest.raises(PinataAPIError) as excinfo:
            client.pin_file_to_ipfs(io.BytesIO(b""), name="n", file_name="x.bin")

        assert excinfo.value.kind is PinataErrorKind.REJECTED
        assert str(excinfo.value) == "Pinata API Error (400): INVALID_FILE: File is empty"

    def test_server_error_without_body(self, client, mock_request):
        mock_request.return_value = fake_response(502)

        with pytest.raises(PinataAPIError) as excinfo:
            client.test_authentication()

        assert "502" in str(excinfo.value)

    @pytest.mark.parametrize("exc", [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
    ])
    def test_transport_failures_are_network_errors(self, client, mock_request, exc):
        mock_request.side_effect = exc

        with pytest.raises(PinataNetworkError) as excinfo:
            client.test_authentication()

        assert excinfo.value.kind is PinataErrorKind.NETWORK
        assert excinfo.value.__cause__ is exc


class TestPinFromFs:

    def test_uploads_folder_with_relative_part_names(self, client, mock_request, tmp_path):
        folder = tmp_path / "metadata"
        folder.mkdir()
        for n in (1, 2, 10):
            (folder / f"{n}.json").write_text(json.dumps({"n": n}))
        mock_request.return_value = fake_response(body={"IpfsHash": "QmFolder"})

        pin = client.pin_from_fs(
            str(folder), name="Autogas-NFT-Collection-Metadata",
            keyvalues={"type": "collection"}
        )

        assert pin.ipfs_hash == "QmFolder"
        kwargs = mock_request.call_args.kwargs
        part_names = sorted(part[1][0] for part in kwargs["files"])
        assert part_names == ["metadata/1.json", "metadata/10.json", "metadata/2.json"]
        assert all(part[0] == "file" for part in kwargs["files"])
        assert json.loads(kwargs["data"]["pinataMetadata"])["keyvalues"] == {
            "type": "collection"
        }

    def test_file_handles_closed_after_upload(self, client, mock_request, tmp_path):
        folder = tmp_path / "metadata"
        folder.mkdir()
        (folder / "1.json").write_text("{}")
        mock_request.return_value = fake_response(body={"IpfsHash": "QmFolder"})

        client.pin_from_fs(str(folder), name="n")

        handle = mock_request.call_args.kwargs["files"][0][1][1]
        assert handle.closed

    def test_missing_directory(self, client, mock_request, tmp_path):
        with pytest.raises(FileNotFoundError):
            client.pin_from_fs(str(tmp_path / "nope"), name="n")

        mock_request.assert_not_called()

    def test_empty_directory(self, client, mock_request, tmp_path):
        with pytest.raises(ValueError):
            client.pin_from_fs(str(tmp_path), name="n")

        mock_request.assert_not_called()


def test_authentication_success(client, mock_request):
    mock_request.return_value = fake_response(body={
        "message": "Congratulations! You are communicating with the Pinata API!"
    })

    response = client.test_authentication()

    assert response["message"].startswith("Congratulations")
    kwargs = mock_request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "https://api.pinata.cloud/data/testAuthentication"
