"""Tests for fetch data models."""

from pathlib import Path

from gitb_install.download.models import (
    FetchOutcome,
    InstallTarget,
    RedirectChain,
    TransferState,
)


class TestInstallTarget:

    def test_from_path(self):
        target = InstallTarget.from_path(Path("/opt/pkg/bin/gitb"))

        assert target.directory == Path("/opt/pkg/bin")
        assert target.name == "gitb"
        assert target.path == Path("/opt/pkg/bin/gitb")

    def test_ensure_directory_is_idempotent(self, tmp_path):
        target = InstallTarget(directory=tmp_path / "x" / "bin", name="gitb")

        target.ensure_directory()
        target.ensure_directory()

        assert target.directory.is_dir()


class TestTransferState:

    def test_percent_unknown_without_total(self):
        state = TransferState()
        state.advance(500)

        assert state.bytes_transferred == 500
        assert state.percent is None

    def test_percent_with_total(self):
        state = TransferState(total_bytes=200)
        state.advance(50)

        assert state.percent == 25.0

    def test_percent_capped_when_server_under_reports(self):
        state = TransferState(total_bytes=10)
        state.advance(30)

        assert state.percent == 100.0


class TestRedirectChain:

    def test_starts_with_requested_url(self):
        chain = RedirectChain(start_url="https://a/1", max_redirects=5)

        assert chain.visited == ["https://a/1"]
        assert chain.current == "https://a/1"
        assert chain.hops == 0
        assert chain.remaining == 5

    def test_follow_consumes_budget(self):
        chain = RedirectChain(start_url="https://a/1", max_redirects=2)
        chain.follow("https://b/2")
        chain.follow("https://c/3")

        assert chain.current == "https://c/3"
        assert chain.hops == 2
        assert chain.remaining == 0


def test_fetch_outcome_redirect_count():
    outcome = FetchOutcome(
        path=Path("bin/gitb"),
        url="https://a/1",
        final_url="https://c/3",
        bytes_written=18,
        redirects=["https://b/2", "https://c/3"],
    )

    assert outcome.redirect_count == 2
