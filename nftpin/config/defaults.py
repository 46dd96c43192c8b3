"""Default configuration values for nftpin."""

from pathlib import Path

# Installation root (the directory holding the nftpin package)
INSTALL_ROOT = Path(__file__).resolve().parent.parent.parent

# Default configuration dictionary
DEFAULT_CONFIG = {
    # Pinata API Configuration
    "pinata": {
        "api_key": "",
        "api_secret": "",
        "base_url": "https://api.pinata.cloud",
        "timeout": None,  # Block until the service answers
    },

    # Input assets
    "assets": {
        "image_path": str(INSTALL_ROOT / "assets" / "Autogas.jpg"),
    },

    # Scratch space for metadata.json and the metadata/ folder.
    # Empty means a fresh system temporary directory per run.
    "paths": {
        "work_dir": "",
    },

    # Logging Configuration
    "logging": {
        "level": "INFO",
        "file": "",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}

# Required configuration fields (must be provided by user)
REQUIRED_FIELDS = [
    "pinata.api_key",
    "pinata.api_secret",
]

# Environment variables that feed configuration fields. The first variable
# found wins.
ENV_OVERRIDES = {
    "pinata.api_key": ["PINATA_API_KEY"],
    "pinata.api_secret": ["PINATA_SECRET_KEY", "PINATA_SECRET_API_KEY"],
}

# Configuration field descriptions for error messages
FIELD_DESCRIPTIONS = {
    "pinata.api_key": "Pinata API Key (from https://app.pinata.cloud/developers/api-keys)",
    "pinata.api_secret": "Pinata API Secret",
}
