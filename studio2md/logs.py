"""Logging setup: rich console output or one JSON object per line."""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class CompactJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "line": record.lineno,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(log_level: str = "info", log_format: str = "text") -> None:
    """Install a single root handler for the given level and format.

    Logs go to stderr so that markdown printed to stdout stays pipeable.
    """
    level = _LEVELS.get(log_level.lower(), logging.INFO)
    if log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(CompactJsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_time=False,
            show_path=False,
        )
    logging.basicConfig(level=level, handlers=[handler], force=True)
    logging.getLogger(__name__).debug(
        "Logging configured at %s level (%s).", logging.getLevelName(level), log_format
    )
