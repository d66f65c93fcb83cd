"""Structured log formatting for the generator.

Records render as key=value pairs (or one JSON object per line) with a unix
timestamp and level, which keeps seed-by-seed generation logs greppable.

Usage:
    from voxeldungeon.logging_utils import configure_logging
    configure_logging(level="debug")

Env: VOXELDUNGEON_LOG_LEVEL (debug/info/warning/error), VOXELDUNGEON_LOG_JSON.
"""

from __future__ import annotations

import json
import logging
import os
from logging.handlers import RotatingFileHandler

TRUTHY = ("1", "true", "TRUE", "yes", "on")


class StructuredFormatter(logging.Formatter):
    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname.lower()
        ts = int(record.created)
        msg = record.getMessage()
        if record.exc_info:
            msg = f"{msg} {self.formatException(record.exc_info)}"
        if self.json_mode:
            rec = {"level": level, "ts": ts, "logger": record.name, "msg": msg}
            try:
                return json.dumps(rec, separators=(",", ":"))
            except (TypeError, ValueError):
                return json.dumps({"level": level, "ts": ts, "error": "json_encode_failed"})
        return f"level={level} ts={ts} logger={record.name} msg={msg.replace(' ', '_')}"


def configure_logging(level: str | None = None, json_mode: bool | None = None, log_file: str | None = None) -> logging.Logger:
    """Attach console (and optional rotating file) handlers to the package logger.

    Safe to call repeatedly; existing handlers are replaced.
    """
    if level is None:
        level = os.getenv("VOXELDUNGEON_LOG_LEVEL", "info")
    if json_mode is None:
        json_mode = os.getenv("VOXELDUNGEON_LOG_JSON", "0") in TRUTHY
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger("voxeldungeon")
    root.setLevel(numeric)
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = StructuredFormatter(json_mode=json_mode)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)
    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return root


__all__ = ["StructuredFormatter", "configure_logging"]
