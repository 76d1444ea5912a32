"""Console progress reporting for transfers."""

import logging
from typing import Optional

from gitb_install.download.models import TransferState
from gitb_install.logging.setup import get_logger
from gitb_install.logging.utilities import log_with_context

logger = get_logger(__name__)

DEFAULT_PERCENT_STEP = 10
DEFAULT_BYTES_STEP = 1024 * 1024  # 1MB


def format_bytes(n: int) -> str:
    size = float(n)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{n} B"


class ProgressReporter:
    """
    Turns TransferState updates into throttled log lines.

    With a known total, one line per percent_step; without one, one line
    per bytes_step transferred.
    """

    def __init__(
        self,
        enabled: bool = True,
        percent_step: int = DEFAULT_PERCENT_STEP,
        bytes_step: int = DEFAULT_BYTES_STEP,
        log: Optional[logging.Logger] = None,
    ):
        self.enabled = enabled
        self.percent_step = percent_step
        self.bytes_step = bytes_step
        self._logger = log or logger
        self._next_mark = 0.0

    def start(self, state: TransferState) -> None:
        self._next_mark = float(self.percent_step if state.total_bytes else self.bytes_step)
        if state.total_bytes:
            self._emit(
                logging.DEBUG,
                f"Expecting {format_bytes(state.total_bytes)}",
                state,
            )

    def update(self, state: TransferState) -> None:
        if not self.enabled:
            return

        percent = state.percent
        if percent is not None:
            if percent < self._next_mark:
                return
            while self._next_mark <= percent:
                self._next_mark += self.percent_step
            self._emit(
                logging.INFO,
                f"Downloaded {format_bytes(state.bytes_transferred)} of "
                f"{format_bytes(state.total_bytes)} ({percent:.0f}%)",
                state,
            )
        elif state.bytes_transferred >= self._next_mark:
            while self._next_mark <= state.bytes_transferred:
                self._next_mark += self.bytes_step
            self._emit(
                logging.INFO,
                f"Downloaded {format_bytes(state.bytes_transferred)}",
                state,
            )

    def finish(self, state: TransferState) -> None:
        if state.total_bytes is not None:
            message = f"Download complete! ({state.bytes_transferred} bytes)"
        else:
            message = "Download complete!"
        # Completion is always reported, even when progress lines are off
        self._emit(logging.INFO, message, state)

    def _emit(self, level: int, msg: str, state: TransferState) -> None:
        log_with_context(
            self._logger,
            level,
            msg,
            bytes_transferred=state.bytes_transferred,
            total_bytes=state.total_bytes,
            percent=state.percent,
        )
