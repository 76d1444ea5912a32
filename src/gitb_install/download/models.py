"""
Data models for a single artifact fetch.

ReleaseURL and InstallTarget are fixed for a whole install; TransferState
and RedirectChain are created fresh for each fetch attempt and dropped
when it returns.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class ReleaseURL:
    """Download URL resolved from a version and a release URL template."""

    version: str
    url: str

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class InstallTarget:
    """Directory + file name where the binary must end up."""

    directory: Path
    name: str

    @property
    def path(self) -> Path:
        return self.directory / self.name

    @classmethod
    def from_path(cls, path: Path) -> "InstallTarget":
        path = Path(path)
        return cls(directory=path.parent, name=path.name)

    def ensure_directory(self) -> None:
        """Create the containing directory; existing directories are fine."""
        self.directory.mkdir(parents=True, exist_ok=True)


@dataclass
class TransferState:
    """
    Byte accounting for one transfer.

    Only used for progress output; completion is decided by the end of
    the response stream, never by comparing against total_bytes.
    """

    total_bytes: Optional[int] = None
    bytes_transferred: int = 0

    def advance(self, n: int) -> None:
        self.bytes_transferred += n

    @property
    def percent(self) -> Optional[float]:
        if not self.total_bytes:
            return None
        return min(100.0, self.bytes_transferred * 100.0 / self.total_bytes)


@dataclass
class RedirectChain:
    """
    URLs visited during one fetch, bounded by max_redirects hops.

    visited[0] is the requested URL; every followed redirect appends the
    absolute URL it pointed to.
    """

    start_url: str
    max_redirects: int
    visited: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.visited:
            self.visited.append(self.start_url)

    @property
    def current(self) -> str:
        return self.visited[-1]

    @property
    def hops(self) -> int:
        return len(self.visited) - 1

    @property
    def remaining(self) -> int:
        return self.max_redirects - self.hops

    def follow(self, url: str) -> None:
        self.visited.append(url)


@dataclass
class FetchOutcome:
    """Result of a successful fetch."""

    path: Path
    url: str
    final_url: str
    bytes_written: int
    total_bytes: Optional[int] = None
    redirects: List[str] = field(default_factory=list)

    @property
    def redirect_count(self) -> int:
        return len(self.redirects)
