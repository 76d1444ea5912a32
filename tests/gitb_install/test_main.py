"""
End-to-end tests for the gitb-install entry point.

main() runs its own event loop, so the async tests call it through
asyncio.to_thread while the release server keeps serving on the test loop.
"""

import asyncio
import os
import stat
from unittest.mock import MagicMock, patch

import pytest

from gitb_install.__main__ import main

# Backslash-n kept literal: the release fixture is exactly 18 bytes
BINARY = b"#!/bin/sh\\necho hi"


@pytest.fixture
def bin_dir(tmp_path):
    return tmp_path / "package" / "bin"


@pytest.fixture
def release_env(monkeypatch, release_server, bin_dir):
    """Point the installer at the local release server."""
    template = release_server.url("/") + "releases/download/v{version}/{binary}"
    monkeypatch.setenv("GITB_RELEASE_URL_TEMPLATE", template)
    monkeypatch.setenv("GITB_INSTALL_DIR", str(bin_dir))
    return release_server


class TestMainSuccess:

    @pytest.mark.asyncio
    async def test_redirect_to_cdn_installs_binary(
        self, release_env, cdn_server, bin_dir, monkeypatch, capsys
    ):
        monkeypatch.setenv("npm_package_version", "1.2.3")
        release_env.redirect(
            "/releases/download/v1.2.3/gitb", cdn_server.url("/gitb-1.2.3")
        )
        cdn_server.add("/gitb-1.2.3", body=BINARY, headers={"X-Served-By": "cdn"})

        exit_code = await asyncio.to_thread(main, [])

        assert exit_code == 0
        binary = bin_dir / "gitb"
        assert binary.read_bytes() == BINARY
        assert len(binary.read_bytes()) == 18
        assert stat.S_IMODE(os.stat(binary).st_mode) == 0o755

        out = capsys.readouterr().out
        assert "Downloading gitbasher v1.2.3 from GitHub releases..." in out
        assert "Download complete! (18 bytes)" in out

    @pytest.mark.asyncio
    async def test_cli_overrides_version_and_destination(
        self, release_env, tmp_path, monkeypatch
    ):
        monkeypatch.setenv("npm_package_version", "1.0.0")
        release_env.add("/releases/download/v2.0.0/gitb", body=BINARY)
        destination = tmp_path / "custom" / "gitb-2"

        exit_code = await asyncio.to_thread(
            main, ["--version", "2.0.0", "--dest", str(destination), "--quiet"]
        )

        assert exit_code == 0
        assert destination.read_bytes() == BINARY
        assert release_env.requests == ["/releases/download/v2.0.0/gitb"]


class TestMainFailure:

    @pytest.mark.asyncio
    async def test_not_found(self, release_env, bin_dir, monkeypatch, capsys):
        monkeypatch.setenv("npm_package_version", "9.9.9")

        exit_code = await asyncio.to_thread(main, [])

        assert exit_code != 0
        assert not (bin_dir / "gitb").exists()
        err = capsys.readouterr().err
        assert "404" in err
        assert "Error downloading release" in err

    @pytest.mark.asyncio
    async def test_too_many_redirects(self, release_env, bin_dir, monkeypatch, capsys):
        monkeypatch.setenv("npm_package_version", "1.2.3")
        release_env.redirect("/releases/download/v1.2.3/gitb", "/loop")
        release_env.redirect("/loop", "/loop")

        exit_code = await asyncio.to_thread(main, [])

        assert exit_code == 1
        assert not (bin_dir / "gitb").exists()
        assert "too many redirects" in capsys.readouterr().err

    def test_missing_version_makes_no_network_call(self, bin_dir, monkeypatch, capsys):
        monkeypatch.setenv("GITB_INSTALL_DIR", str(bin_dir))

        with patch("gitb_install.download.fetcher.create_session") as create_session:
            exit_code = main([])

        assert exit_code == 1
        create_session.assert_not_called()
        assert not bin_dir.exists()
        assert "npm_package_version not found" in capsys.readouterr().err

    def test_invalid_config(self, monkeypatch, capsys):
        monkeypatch.setenv("npm_package_version", "1.2.3")
        monkeypatch.setenv("GITB_MAX_REDIRECTS", "lots")

        assert main([]) == 1
        assert "GITB_MAX_REDIRECTS" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch):
        monkeypatch.setenv("npm_package_version", "1.2.3")

        with patch(
            "gitb_install.__main__.install", MagicMock(side_effect=KeyboardInterrupt)
        ):
            assert main([]) == 130
