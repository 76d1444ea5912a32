"""Installer configuration from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from gitb_install.errors import ConfigurationError

PACKAGE_ROOT = Path(__file__).resolve().parent

DEFAULT_RELEASE_URL_TEMPLATE = (
    "https://github.com/maxbolgarin/gitbasher/releases/download/v{version}/{binary}"
)
DEFAULT_BINARY_NAME = "gitb"
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_CHUNK_SIZE = 64 * 1024  # 64KB chunks


@dataclass
class InstallerConfig:
    """Postinstall download configuration.

    Load from environment using InstallerConfig.from_env().
    The version is the only required value; everything else has a default
    pointing at the public GitHub release of gitbasher.
    """

    version: Optional[str]

    # Release location
    url_template: str = DEFAULT_RELEASE_URL_TEMPLATE
    binary_name: str = DEFAULT_BINARY_NAME

    # Install location (bin/ under the package root)
    install_dir: Path = PACKAGE_ROOT / "bin"
    install_path: Optional[Path] = None  # overrides install_dir / binary_name

    # Transfer behaviour
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: Optional[float] = None  # seconds, None = wait indefinitely

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_dir: Optional[Path] = None

    @property
    def destination(self) -> Path:
        if self.install_path is not None:
            return self.install_path
        return self.install_dir / self.binary_name

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InstallerConfig":
        """Load configuration from environment variables.

        Required environment variables:
            npm_package_version: Version to install (validated at resolve time)

        Optional environment variables (with defaults):
            GITB_RELEASE_URL_TEMPLATE: GitHub release URL template with
                {version} and {binary} placeholders
            GITB_BINARY_NAME: gitb (default)
            GITB_INSTALL_DIR: <package root>/bin (default)
            GITB_MAX_REDIRECTS: 5 (default)
            GITB_CHUNK_SIZE: 65536 (default, bytes)
            GITB_DOWNLOAD_TIMEOUT: unset (default, seconds)
            LOG_LEVEL: INFO (default)
            JSON_LOGS: false (default)
            LOG_DIR: unset (default, console only)

        Raises:
            ConfigurationError: If a numeric value cannot be parsed
        """
        env = os.environ if environ is None else environ

        install_dir = env.get("GITB_INSTALL_DIR")
        log_dir = env.get("LOG_DIR")
        timeout = env.get("GITB_DOWNLOAD_TIMEOUT")

        return cls(
            version=env.get("npm_package_version"),
            url_template=env.get("GITB_RELEASE_URL_TEMPLATE", DEFAULT_RELEASE_URL_TEMPLATE),
            binary_name=env.get("GITB_BINARY_NAME", DEFAULT_BINARY_NAME),
            install_dir=Path(install_dir) if install_dir else PACKAGE_ROOT / "bin",
            max_redirects=_parse_int(
                env, "GITB_MAX_REDIRECTS", DEFAULT_MAX_REDIRECTS, minimum=0
            ),
            chunk_size=_parse_int(env, "GITB_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, minimum=1),
            timeout=_parse_float(timeout, "GITB_DOWNLOAD_TIMEOUT") if timeout else None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            json_logs=env.get("JSON_LOGS", "false").lower() in ("true", "1", "yes"),
            log_dir=Path(log_dir) if log_dir else None,
        )


def _parse_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", cause=e)
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _parse_float(raw: str, name: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", cause=e)
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value
