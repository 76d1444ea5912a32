"""
Entry point for the gitbasher postinstall download.

Usage:
    # Version from the package manager environment
    npm_package_version=3.0.0 python -m gitb_install

    # Explicit version and destination
    python -m gitb_install --version 3.0.0 --dest ./bin/gitb

Exit codes:
    0   binary installed
    1   configuration or download failure (message on stderr)
    130 interrupted
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gitb_install.config import InstallerConfig
from gitb_install.errors import ConfigurationError, FetchError
from gitb_install.installer import install
from gitb_install.logging.setup import get_logger, setup_logging
from gitb_install.logging.utilities import log_exception

# Placeholder logger until setup_logging() is called in main()
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gitb-install",
        description="Download the gitbasher release binary into the package bin/ directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run as npm postinstall (reads npm_package_version)
    python -m gitb_install

    # Install a specific release somewhere else
    python -m gitb_install --version 3.0.0 --dest ~/.local/bin/gitb
        """,
    )
    parser.add_argument(
        "--version",
        dest="release_version",
        help="Release version to install (default: $npm_package_version)",
    )
    parser.add_argument(
        "--dest",
        type=Path,
        help="Install path of the binary (default: <package>/bin/gitb)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the start and completion messages",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    global logger
    args = parse_args(argv)

    try:
        config = InstallerConfig.from_env()
    except FetchError as e:
        setup_logging(stage="postinstall", json_format=False)
        get_logger(__name__).error(f"Error: {e}")
        return 1

    if args.release_version is not None:
        config.version = args.release_version
    if args.dest is not None:
        config.install_path = args.dest.expanduser()
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(
        stage="postinstall",
        log_dir=config.log_dir,
        json_format=config.json_logs,
        console_level=getattr(logging, config.log_level, logging.INFO),
    )

    # Re-get logger after setup to use new handlers
    logger = get_logger(__name__)

    try:
        asyncio.run(install(config, show_progress=not args.quiet))
    except KeyboardInterrupt:
        logger.warning("Download interrupted")
        return 130
    except ConfigurationError as e:
        log_exception(logger, e, f"Error: {e}")
        return 1
    except FetchError as e:
        log_exception(logger, e, f"Error downloading release: {e}")
        for path in e.context.get("cleanup_failed", []):
            logger.error(f"Partial download left at {path}, remove it manually")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
