"""Processing module for orchestrating artwork and metadata uploads."""

from .uploader import MetadataUploader, UploadResult

__all__ = ["MetadataUploader", "UploadResult"]
