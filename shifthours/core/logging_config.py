# shifthours/core/logging_config.py
"""
Logging configuration for shift-hours.

Structured JSON logging to rotating files in production, coloured console
output in development.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Determine if running in production
IS_PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"

# Log directory
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Log files
APP_LOG_FILE = LOG_DIR / "app.log"
ERROR_LOG_FILE = LOG_DIR / "error.log"

# Record attributes copied as top-level JSON fields
_REQUEST_FIELDS = ("request_id", "method", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One JSON object per line, so the app and error logs can be shipped to a
    log aggregator as-is.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Structured context passed as extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        for field in _REQUEST_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if hasattr(record, "duration"):
            log_data["duration_ms"] = record.duration

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output in development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so file handlers sharing the record keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging() -> None:
    """
    Configure logging for the application.

    In production:
    - JSON format
    - Rotating app log (INFO) and error log (ERROR)
    - WARNING and above also on stdout

    In development:
    - Colored console output at DEBUG
    - Plain-text rotating app log
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if IS_PRODUCTION else logging.DEBUG)
    root_logger.handlers.clear()

    if IS_PRODUCTION:
        app_handler = logging.handlers.RotatingFileHandler(
            APP_LOG_FILE,
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            ERROR_LOG_FILE,
            maxBytes=10_000_000,  # 10MB
            backupCount=10,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)

    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(console_handler)

        file_handler = logging.handlers.RotatingFileHandler(
            APP_LOG_FILE,
            maxBytes=5_000_000,  # 5MB
            backupCount=2,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"))
        root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    # Suppress noisy loggers
    logging.getLogger("watchfiles").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured (production={IS_PRODUCTION})",
        extra={"extra_fields": {"log_dir": str(LOG_DIR.absolute()), "production": IS_PRODUCTION}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)
