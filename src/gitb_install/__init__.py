"""
gitb-install: postinstall fetcher for the gitbasher `gitb` binary.

Resolves the release URL for a version, downloads the binary (following
redirects), and installs it as an executable under the package's bin/.
"""

__version__ = "3.0.0"
