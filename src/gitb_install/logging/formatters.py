"""Log formatters for JSON and console output."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from gitb_install.logging.context import get_log_context


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter with context injection.

    Produces one JSON object per line for easy parsing with jq/grep.
    """

    # Fields to extract from LogRecord extras
    EXTRA_FIELDS = [
        "url",
        "final_url",
        "destination",
        "http_status",
        "error_category",
        "error_message",
        "bytes_transferred",
        "total_bytes",
        "percent",
        "redirect_count",
        "redirect_chain",
        "duration_ms",
        "cleanup_failed",
    ]

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3]
            + "Z",
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        ctx = get_log_context()
        if ctx["stage"]:
            log_entry["stage"] = ctx["stage"]
        if ctx["version"]:
            log_entry["version"] = ctx["version"]

        # Add source location for DEBUG/ERROR
        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            log_entry["file"] = f"{record.filename}:{record.lineno}"

        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter.

    Postinstall output is read by people watching `npm install`, so INFO
    lines are printed bare; other levels get a level prefix.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return message

        parts = [record.levelname]
        ctx = get_log_context()
        if ctx["stage"]:
            parts.append(f"[{ctx['stage']}]")
        prefix = " ".join(parts)

        text = f"{prefix}: {message}"
        if record.exc_info and record.levelno <= logging.DEBUG:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text
