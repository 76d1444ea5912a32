"""Release URL resolution."""

import re
from typing import Optional

from gitb_install.config import DEFAULT_BINARY_NAME, DEFAULT_RELEASE_URL_TEMPLATE
from gitb_install.download.models import ReleaseURL
from gitb_install.errors import ConfigurationError

# "v1.2.3" is a tag name; the URL template adds its own "v"
_TAG_PREFIX = re.compile(r"^v(?=\d)")


def normalize_version(version: Optional[str]) -> str:
    """
    Validate a version string and drop a tag-style "v" prefix.

    Only a lowercase "v" directly followed by a digit is removed. Anything
    else, whitespace included, is kept verbatim.

    Raises:
        ConfigurationError: If version is missing or empty
    """
    if version is None:
        raise ConfigurationError("npm_package_version not found")
    if not version:
        raise ConfigurationError(f"Invalid version: {version!r}")
    return _TAG_PREFIX.sub("", version, count=1)


def resolve(
    version: Optional[str],
    template: str = DEFAULT_RELEASE_URL_TEMPLATE,
    binary_name: str = DEFAULT_BINARY_NAME,
) -> ReleaseURL:
    """
    Build the release download URL for a version.

    No network access happens here.

    Args:
        version: Version identifier (e.g. "1.2.3")
        template: URL template with {version} and {binary} placeholders
        binary_name: Release asset name

    Returns:
        ReleaseURL

    Raises:
        ConfigurationError: If version is missing/empty or the template
            is malformed
    """
    normalized = normalize_version(version)
    try:
        url = template.format(version=normalized, binary=binary_name)
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigurationError(f"Invalid release URL template: {template!r}", cause=e)
    return ReleaseURL(version=normalized, url=url)
