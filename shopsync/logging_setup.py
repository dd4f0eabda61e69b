"""Root logging configuration with the session mode in every record."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional

session_mode_var: ContextVar[Optional[str]] = ContextVar("session_mode", default=None)


class SessionModeFilter(logging.Filter):
    """Inject the current session mode (connected/simulated) into each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        setattr(record, "session_mode", session_mode_var.get() or "-")
        return True


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install a stdout handler on the root logger, replacing existing handlers."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | mode=%(session_mode)s | %(message)s"
    ))
    handler.addFilter(SessionModeFilter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
