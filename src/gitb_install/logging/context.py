"""Log context variables injected into every formatted record."""

from contextvars import ContextVar
from typing import Dict, Optional

_stage: ContextVar[Optional[str]] = ContextVar("stage", default=None)
_version: ContextVar[Optional[str]] = ContextVar("version", default=None)


def set_log_context(
    stage: Optional[str] = None,
    version: Optional[str] = None,
) -> None:
    """Set context values; arguments left as None are not changed."""
    if stage is not None:
        _stage.set(stage)
    if version is not None:
        _version.set(version)


def get_log_context() -> Dict[str, Optional[str]]:
    return {"stage": _stage.get(), "version": _version.get()}


def clear_log_context() -> None:
    _stage.set(None)
    _version.set(None)
