"""aiohttp session factory for release downloads."""

from typing import Optional

import aiohttp

from gitb_install import __version__

USER_AGENT = f"gitb-install/{__version__}"


def create_session(timeout: Optional[float] = None) -> aiohttp.ClientSession:
    """
    Create an aiohttp session for a single install.

    aiohttp applies a 5 minute total timeout by default; release downloads
    run without one unless a timeout is configured explicitly.

    Args:
        timeout: Total timeout in seconds per request (None = no timeout)

    Returns:
        aiohttp.ClientSession (caller must close)
    """
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout),
        headers={"User-Agent": USER_AGENT},
    )
