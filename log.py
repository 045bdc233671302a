"""Structured logging for grammr.

Every record is one JSON object per line. Context travels in `extra=` using
the keys in EXTRA_FIELDS (e.g. the list of tokens an alignment could not place).
GRAMMR_LOG_LEVEL sets verbosity (DEBUG/INFO/WARNING/ERROR).
GRAMMR_LOG_FORMAT=text switches to one readable line per record, extras appended as key=value.
"""
import logging
import json
import os
import sys
from typing import Any, Dict

EXTRA_FIELDS = (
    "component", "endpoint", "status_code", "duration_ms",
    "detail", "missing", "count", "ip",
)


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    """The EXTRA_FIELDS set on `record`, in EXTRA_FIELDS order."""
    return {key: getattr(record, key) for key in EXTRA_FIELDS if getattr(record, key, None) is not None}


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
            entry["error_type"] = type(record.exc_info[1]).__name__
        entry.update(record_extras(record))
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """`12:00:00 [WARNING] grammr.backend: msg endpoint=/api/align missing=['x']`"""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{key}={val}" for key, val in extras.items())
        return line


def make_formatter(fmt: str) -> logging.Formatter:
    return TextFormatter() if fmt == "text" else JSONFormatter()


def get_logger(name: str = "grammr") -> logging.Logger:
    """Get or create a structured logger.

    Usage:
        from log import get_logger
        logger = get_logger("grammr.routes")
        logger.warning("Backend unavailable", extra={"component": "backend", "status_code": 503})
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        level = os.environ.get("GRAMMR_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level, logging.INFO))

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(make_formatter(os.environ.get("GRAMMR_LOG_FORMAT", "json")))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
