"""Postinstall pipeline: resolve the release URL and fetch the binary."""

import logging
from typing import Optional

from gitb_install.config import InstallerConfig
from gitb_install.download.fetcher import ArtifactFetcher
from gitb_install.download.models import FetchOutcome
from gitb_install.download.progress import ProgressReporter
from gitb_install.download.resolver import resolve
from gitb_install.logging.context import set_log_context
from gitb_install.logging.setup import get_logger
from gitb_install.logging.utilities import log_with_context

logger = get_logger(__name__)


async def install(
    config: InstallerConfig,
    fetcher: Optional[ArtifactFetcher] = None,
    show_progress: bool = True,
) -> FetchOutcome:
    """
    Download and install the release binary described by config.

    The version is validated before any network or filesystem access.

    Args:
        config: Installer configuration (version, release location, paths)
        fetcher: Fetcher to use (default: built from config)
        show_progress: Emit periodic progress lines

    Returns:
        FetchOutcome for the installed binary

    Raises:
        FetchError: Any resolution or download failure
    """
    release = resolve(config.version, config.url_template, config.binary_name)
    set_log_context(version=release.version)

    if fetcher is None:
        fetcher = ArtifactFetcher(
            max_redirects=config.max_redirects,
            chunk_size=config.chunk_size,
            timeout=config.timeout,
            reporter=ProgressReporter(enabled=show_progress),
        )

    logger.info(f"Downloading gitbasher v{release.version} from GitHub releases...")
    log_with_context(
        logger,
        logging.DEBUG,
        "Resolved release URL",
        url=release.url,
        destination=str(config.destination),
    )

    outcome = await fetcher.fetch(release.url, config.destination)

    log_with_context(
        logger,
        logging.INFO,
        f"Installed {config.binary_name} to {outcome.path}",
        destination=str(outcome.path),
        final_url=outcome.final_url,
        redirect_count=outcome.redirect_count,
    )
    return outcome
