"""
Release artifact fetcher.

Provides ArtifactFetcher, which downloads a single binary:
- Follows 301/302/307/308 redirects manually, bounded by max_redirects
- Streams the body into a staging file next to the destination
- Marks the file executable and renames it into place on success
- Removes staging and destination files on every failure path

Clean interface: fetch(url, destination) -> FetchOutcome, raising FetchError
"""

import asyncio
import logging
import os
import stat
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urljoin, urlparse

import aiofiles
import aiohttp

from gitb_install.config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_REDIRECTS
from gitb_install.download.http_client import create_session
from gitb_install.download.models import (
    FetchOutcome,
    InstallTarget,
    RedirectChain,
    TransferState,
)
from gitb_install.download.progress import ProgressReporter
from gitb_install.errors import (
    FetchError,
    HttpStatusError,
    RedirectError,
    TransportError,
)
from gitb_install.logging.setup import get_logger
from gitb_install.logging.utilities import log_with_context

logger = get_logger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 307, 308})
SUPPORTED_SCHEMES = frozenset({"http", "https"})

# rwxr-xr-x
EXECUTABLE_MODE = (
    stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
)


class ArtifactFetcher:
    """
    Downloads one release artifact to an install path.

    Usage:
        fetcher = ArtifactFetcher()
        outcome = await fetcher.fetch(
            "https://github.com/maxbolgarin/gitbasher/releases/download/v3.0.0/gitb",
            Path("bin/gitb"),
        )
        print(f"Installed {outcome.bytes_written} bytes")

    Session management:
        By default, creates a new session for each fetch. A shared session
        may be passed to the constructor; it is never closed by the fetcher.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: Optional[float] = None,
        reporter: Optional[ProgressReporter] = None,
    ):
        """
        Initialize ArtifactFetcher.

        Args:
            session: Optional aiohttp session (None = create per fetch)
            max_redirects: Redirect hops allowed before giving up (default: 5)
            chunk_size: Read size for streaming the body
            timeout: Total timeout per request in seconds (None = no timeout)
            reporter: Progress reporter (default: console progress)
        """
        self._session = session
        self.max_redirects = max_redirects
        self.chunk_size = chunk_size
        self.timeout = timeout
        self.reporter = reporter or ProgressReporter()

    async def fetch(self, url: str, destination: Union[str, Path]) -> FetchOutcome:
        """
        Download url to destination.

        Args:
            url: Absolute http(s) URL
            destination: Final path of the binary

        Returns:
            FetchOutcome for the completed transfer

        Raises:
            RedirectError: Missing Location header or too many redirects
            HttpStatusError: Any status other than 200 or a redirect
            TransportError: Network or filesystem failure

        When cleanup after a failure cannot remove a file, the paths left
        behind are listed under context["cleanup_failed"] of the raised error.
        """
        target = InstallTarget.from_path(Path(destination))
        chain = RedirectChain(start_url=url, max_redirects=self.max_redirects)
        staging: Optional[Path] = None
        completed = False
        cleaned = False
        started = time.monotonic()

        session = self._session
        owns_session = session is None

        try:
            target.ensure_directory()

            if session is None:
                session = create_session(timeout=self.timeout)

            while True:
                current = chain.current
                _check_scheme(current)

                async with session.get(current, allow_redirects=False) as response:
                    if response.status in REDIRECT_STATUSES:
                        next_url = self._next_hop(response, chain)
                        log_with_context(
                            logger,
                            logging.DEBUG,
                            "Following redirect",
                            url=current,
                            final_url=next_url,
                            http_status=response.status,
                            redirect_count=chain.hops + 1,
                        )
                        chain.follow(next_url)
                        continue

                    if response.status != 200:
                        raise HttpStatusError(response.status, response.reason, current)

                    staging = _create_staging_file(target)
                    state = await self._stream(response, staging)
                    break

            os.chmod(staging, EXECUTABLE_MODE)
            os.replace(staging, target.path)
            staging = None
            completed = True

            self.reporter.finish(state)
            log_with_context(
                logger,
                logging.DEBUG,
                "Fetch complete",
                url=url,
                final_url=chain.current,
                destination=str(target.path),
                bytes_transferred=state.bytes_transferred,
                redirect_count=chain.hops,
                duration_ms=round((time.monotonic() - started) * 1000, 1),
            )

            return FetchOutcome(
                path=target.path,
                url=url,
                final_url=chain.current,
                bytes_written=state.bytes_transferred,
                total_bytes=state.total_bytes,
                redirects=chain.visited[1:],
            )

        except (FetchError, asyncio.TimeoutError, aiohttp.ClientError, OSError) as e:
            error = _as_fetch_error(e, chain.current)
            leftovers = _remove_partial(staging, target.path)
            cleaned = True
            if leftovers:
                error.context["cleanup_failed"] = [str(p) for p in leftovers]
            if error is e:
                raise
            raise error from e
        finally:
            # Cancellation and interrupts bypass the handler above
            if not completed and not cleaned:
                _remove_partial(staging, target.path)
            if owns_session and session is not None:
                await session.close()

    def _next_hop(self, response: aiohttp.ClientResponse, chain: RedirectChain) -> str:
        location = response.headers.get("Location")
        if not location:
            raise RedirectError(
                f"redirect location missing (HTTP {response.status} from {chain.current})",
                chain=chain.visited,
            )
        if chain.remaining <= 0:
            raise RedirectError(
                f"too many redirects (limit {chain.max_redirects})",
                chain=chain.visited,
            )
        # Relative locations resolve against the URL that issued them
        return urljoin(chain.current, location)

    async def _stream(
        self, response: aiohttp.ClientResponse, staging: Path
    ) -> TransferState:
        state = TransferState(total_bytes=response.content_length)
        self.reporter.start(state)

        async with aiofiles.open(staging, "wb") as f:
            async for chunk in response.content.iter_chunked(self.chunk_size):
                await f.write(chunk)
                state.advance(len(chunk))
                self.reporter.update(state)

        return state


async def fetch(
    url: str,
    destination: Union[str, Path],
    **kwargs,
) -> FetchOutcome:
    """Fetch url to destination with a one-off ArtifactFetcher."""
    return await ArtifactFetcher(**kwargs).fetch(url, destination)


def _check_scheme(url: str) -> None:
    scheme = urlparse(url).scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise TransportError(
            f"Unsupported URL scheme {scheme!r} in {url}",
            context={"url": url},
        )


def _create_staging_file(target: InstallTarget) -> Path:
    fd, name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".part", dir=target.directory
    )
    os.close(fd)
    return Path(name)


def _as_fetch_error(exc: Exception, url: str) -> FetchError:
    if isinstance(exc, FetchError):
        return exc
    if isinstance(exc, asyncio.TimeoutError):
        return TransportError(
            f"Timed out downloading {url}", cause=exc, context={"url": url}
        )
    return TransportError(
        f"Error downloading {url}: {exc}", cause=exc, context={"url": url}
    )


def _remove_partial(staging: Optional[Path], destination: Path) -> List[Path]:
    """Delete staging and destination files; return the paths that survived."""
    leftovers = []
    for path in (staging, destination):
        if path is None:
            continue
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial download {path}: {e}")
            leftovers.append(path)
    return leftovers
