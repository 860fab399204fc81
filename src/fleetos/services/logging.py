"""Logging setup for the ``fleetos`` logger tree."""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

__all__ = ["JsonFormatter", "setup_logging"]

_RESERVED = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


def _json_payload(record: logging.LogRecord) -> str:
    base = {
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    timestamp = getattr(record, "asctime", None)
    if timestamp:
        base["time"] = timestamp
    for key, value in record.__dict__.items():
        if key not in _RESERVED and not key.startswith("_"):
            base[key] = value
    if record.exc_info:
        base["exc"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(base, ensure_ascii=False, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.asctime = self.formatTime(record, self.datefmt)
        return _json_payload(record)


def setup_logging(level: str | int = "WARNING", *, json_output: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stderr handler to the ``fleetos`` logger. Idempotent."""
    log = logging.getLogger("fleetos")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    log.addHandler(handler)
    return log
