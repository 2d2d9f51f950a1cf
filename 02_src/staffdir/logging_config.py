"""Structured logging for the staff directory.

Application loggers, uvicorn and the Socket.IO stack all write through the
same JSON handlers, so one log file carries HTTP access lines, socket
lifecycle events (with `sid`/`identity` context) and storage failures.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

# Server-stack loggers routed to the root handlers; levels are floors
THIRD_PARTY_LOGGERS = {
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "INFO",
    "socketio": "WARNING",
    "engineio": "WARNING",
    "aiosqlite": "WARNING",
}

# uvicorn.access args: client_addr, method, full_path, http_version, status_code
ACCESS_LOG_FIELDS = ("client", "method", "path", "http_version", "status")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Passed as logger.info(..., extra={"context": {"sid": ..., "identity": ...}})
        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.name == "uvicorn.access":
            http = access_fields(record)
            if http:
                log_data["http"] = http

        return json.dumps(log_data, default=str)


def access_fields(record: logging.LogRecord) -> dict[str, Any] | None:
    """Split a uvicorn access record into named fields, None for other shapes."""
    args = record.args
    if not isinstance(args, tuple) or len(args) != len(ACCESS_LOG_FIELDS):
        return None
    return dict(zip(ACCESS_LOG_FIELDS, args))


def build_logging_config(log_level: str, log_file: str) -> dict[str, Any]:
    """dictConfig for the root logger plus the server-stack loggers."""
    level = log_level.upper()
    loggers = {
        name: {
            "level": max(logging.getLevelName(floor), logging.getLevelName(level)),
            "handlers": [],
            "propagate": True,
        }
        for name, floor in THIRD_PARTY_LOGGERS.items()
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "staffdir.logging_config.JSONFormatter",
            },
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file,
                "maxBytes": 10 * 1024 * 1024,  # 10 MB
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
        "root": {
            "level": level,
            "handlers": ["file", "console"],
        },
    }


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup structured logging for the application.

    Run uvicorn with `log_config=None` afterwards so it keeps these handlers.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(log_level, log_file))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
