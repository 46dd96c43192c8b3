#!/usr/bin/env python3
"""nftpin - pin NFT artwork and metadata to IPFS.

This is the main CLI entry point for nftpin. It uploads the artwork to
Pinata, builds the token metadata around the resulting CID, pins the
metadata, and prints the base URI for the token contract.

Usage:
    python -m nftpin
    python -m nftpin --batch 100
    python -m nftpin --image ./assets/Autogas.jpg --env-file .env
    python -m nftpin --check-auth
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from ._version import __version__
from .config import ConfigManager, ConfigError
from .pinata import PinataClient
from .pinata.exceptions import PinataError
from .processing import MetadataUploader, UploadResult


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure console logging for the application.

    Args:
        verbose: If True, enable DEBUG level logging
        quiet: If True, only log errors
    """
    if quiet:
        level = logging.ERROR
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter('%(levelname)s - %(name)s - %(message)s')
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)


def add_file_logging(config: ConfigManager) -> None:
    """Also log to a file if one is configured.

    Args:
        config: Loaded configuration
    """
    log_file = config.get("logging.file")
    if not log_file:
        return

    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(
        getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    )
    file_handler.setFormatter(logging.Formatter(
        config.get(
            "logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    ))
    logging.getLogger().addHandler(file_handler)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="nftpin",
        description="nftpin - pin NFT artwork and token metadata to IPFS via Pinata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload the artwork and metadata for token #1
  python -m nftpin

  # Upload a folder of metadata for tokens 1..100
  python -m nftpin --batch 100

  # Use another image and read credentials from a .env file
  python -m nftpin --image art.png --env-file .env

Credentials are read from PINATA_API_KEY and PINATA_SECRET_KEY.
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"nftpin {__version__}"
    )

    parser.add_argument(
        "--batch",
        type=int,
        metavar="N",
        help="Upload metadata for tokens 1..N as one folder"
    )
    parser.add_argument(
        "--image",
        metavar="PATH",
        help="Image asset to upload (overrides assets.image_path)"
    )
    parser.add_argument(
        "--work-dir",
        metavar="PATH",
        help="Directory for temporary metadata files (overrides paths.work_dir)"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--env-file",
        metavar="PATH",
        help="Load environment variables from this .env file"
    )
    parser.add_argument(
        "--check-auth",
        action="store_true",
        help="Only check that the Pinata credentials are accepted"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors"
    )

    args = parser.parse_args(argv)
    if args.batch is not None and args.batch < 1:
        parser.error("--batch must be at least 1")
    return args


def print_result(result: UploadResult) -> None:
    """Print the CIDs and base URI of a finished run.

    Args:
        result: Upload outcome
    """
    print(f"Image uploaded to IPFS: {result.image_cid}")
    if result.mode == "batch":
        print(f"Metadata folder uploaded to IPFS: {result.metadata_cid}")
        print(f"Tokens: 1..{result.token_count}")
    else:
        print(f"Metadata uploaded to IPFS: {result.metadata_cid}")
    print(f"Use this as your base URI: {result.base_uri}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the nftpin CLI.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for any error)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.quiet)

    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager.load(
            config_path=args.config,
            env_file=args.env_file
        )
        add_file_logging(config)

        if args.image:
            config.set("assets.image_path", args.image)
        if args.work_dir:
            config.set("paths.work_dir", args.work_dir)

        client = PinataClient(
            api_key=config.get("pinata.api_key"),
            api_secret=config.get("pinata.api_secret"),
            timeout=config.get("pinata.timeout"),
            base_url=config.get("pinata.base_url")
        )

        if args.check_auth:
            response = client.test_authentication()
            if not args.quiet:
                print(f"✓ {response.get('message', 'Pinata credentials accepted')}")
            return 0

        uploader = MetadataUploader.from_config(config, client=client)
        result = uploader.run(args.batch)

        if not args.quiet:
            print_result(result)

        return 0

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(f"✗ Configuration Error: {e}", file=sys.stderr)
        return 1

    except (FileNotFoundError, FileExistsError) as e:
        logger.error(f"File error: {e}")
        print(f"✗ File Error: {e}", file=sys.stderr)
        return 1

    except PinataError as e:
        logger.error(f"Pinata error ({e.kind.value}): {e}", exc_info=args.verbose)
        print(f"✗ Pinata Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("Upload interrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"✗ Unexpected Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
