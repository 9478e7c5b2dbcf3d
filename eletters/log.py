"""Root logger setup shared by the CLI and the HTTP service."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.lower(), logging.INFO)


def setup_logging(level: str | int = "info", fmt: str = "text") -> None:
    """Configure the root logger once. Repeated calls only update the level."""
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    if any(getattr(h, "_eletters", False) for h in root.handlers):
        return

    handler: logging.Handler
    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(show_path=False, rich_tracebacks=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    handler._eletters = True  # type: ignore[attr-defined]
    root.addHandler(handler)
