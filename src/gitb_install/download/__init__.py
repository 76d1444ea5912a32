"""
Release download module.

Provides URL resolution and the redirect-following artifact fetcher:

    from gitb_install.download import ArtifactFetcher, resolve

    release = resolve("3.0.0")
    outcome = await ArtifactFetcher().fetch(release.url, Path("bin/gitb"))
"""

from gitb_install.download.fetcher import ArtifactFetcher, fetch
from gitb_install.download.models import (
    FetchOutcome,
    InstallTarget,
    RedirectChain,
    ReleaseURL,
    TransferState,
)
from gitb_install.download.progress import ProgressReporter
from gitb_install.download.resolver import resolve

__all__ = [
    "ArtifactFetcher",
    "fetch",
    "resolve",
    "FetchOutcome",
    "InstallTarget",
    "RedirectChain",
    "ReleaseURL",
    "TransferState",
    "ProgressReporter",
]
