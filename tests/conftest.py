"""Shared fixtures for the nftpin test suite."""

import json
from pathlib import Path

import pytest

from nftpin.pinata import PinResponse

IMAGE_CID = "imgCID123"
METADATA_CID = "metaCID456"
FOLDER_CID = "folderCID789"


class StubPinner:
    """Stands in for PinataClient and records what it was asked to pin."""

    def __init__(self, image_cid=IMAGE_CID, metadata_cid=METADATA_CID,
                 folder_cid=FOLDER_CID, fail_on=None):
        self.image_cid = image_cid
        self.metadata_cid = metadata_cid
        self.folder_cid = folder_cid
        self.fail_on = fail_on or {}
        self.file_calls = []
        self.dir_calls = []
        self.uploaded_documents = {}

    def pin_file_to_ipfs(self, stream, name, keyvalues=None, file_name=None):
        kind = (keyvalues or {}).get("type")
        self.file_calls.append({"name": name, "keyvalues": keyvalues,
                                "path": getattr(stream, "name", None)})
        if kind in self.fail_on:
            raise self.fail_on[kind]
        if kind == "image":
            return PinResponse(ipfs_hash=self.image_cid)
        self.uploaded_documents["metadata.json"] = json.loads(stream.read())
        return PinResponse(ipfs_hash=self.metadata_cid)

    def pin_from_fs(self, directory, name, keyvalues=None):
        self.dir_calls.append({"directory": directory, "name": name,
                               "keyvalues": keyvalues})
        # The folder is deleted after the run, so capture it now
        for path in sorted(Path(directory).iterdir()):
            self.uploaded_documents[path.name] = json.loads(path.read_text())
        if "collection" in self.fail_on:
            raise self.fail_on["collection"]
        return PinResponse(ipfs_hash=self.folder_cid)


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "assets" / "Autogas.jpg"
    path.parent.mkdir()
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest.fixture
def work_dir(tmp_path):
    return tmp_path / "work"


@pytest.fixture
def stub_pinner():
    return StubPinner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("PINATA_API_KEY", "PINATA_SECRET_KEY", "PINATA_SECRET_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    # Keep a real ~/.nftpin, ./config.yaml or ./.env out of the picture
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def pinata_env(monkeypatch):
    monkeypatch.setenv("PINATA_API_KEY", "test-key")
    monkeypatch.setenv("PINATA_SECRET_KEY", "test-secret")
