"""Structured logging configuration for SupportNET."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Client libraries log every request at INFO; one check-in per tick is enough
LIBRARY_LOG_LEVELS = {
    "httpx": "WARNING",
    "anthropic": "WARNING",
    "aiosqlite": "WARNING",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with optional scheduler/machine context."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Passed as extra={"context": {...}}: tick outcome, conversation phase
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        return json.dumps(entry, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console: bool = True,
) -> None:
    """
    Route all logging through JSONFormatter.

    Args:
        log_level: Root level. Defaults to LOG_LEVEL env var or INFO.
        log_file: Rotating log file. Defaults to 04_logs/app.log.
        console: Also write to stdout.
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handlers = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_path),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        },
    }
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JSONFormatter}},
            "handlers": handlers,
            "loggers": {
                name: {"level": lib_level} for name, lib_level in LIBRARY_LOG_LEVELS.items()
            },
            "root": {"level": level, "handlers": list(handlers)},
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
