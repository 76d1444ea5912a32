"""
pytest configuration for installer tests.

Adds src directory to Python path for imports and resets logging between tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from gitb_install.logging.context import clear_log_context  # noqa: E402


@pytest.fixture(autouse=True)
def reset_logging():
    """Clear log context and root handlers installed by setup_logging()."""
    clear_log_context()
    yield
    clear_log_context()
    logging.getLogger().handlers.clear()


@pytest.fixture(autouse=True)
def clean_installer_env(monkeypatch):
    """Keep the developer's environment out of config loading."""
    for name in (
        "npm_package_version",
        "GITB_RELEASE_URL_TEMPLATE",
        "GITB_BINARY_NAME",
        "GITB_INSTALL_DIR",
        "GITB_MAX_REDIRECTS",
        "GITB_CHUNK_SIZE",
        "GITB_DOWNLOAD_TIMEOUT",
        "LOG_LEVEL",
        "JSON_LOGS",
        "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
