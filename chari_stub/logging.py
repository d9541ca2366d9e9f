"""Logging setup for the stub: a console handler with plain or JSON lines."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "chari-stub"

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Loggers whose INFO output duplicates or drowns the request log
QUIET_LOGGERS = ("uvicorn.access", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Install a single stdout handler on the root logger.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        ``"standard"`` for pipe-separated lines, ``"json"`` for one JSON
        object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("chari_stub").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Request fields passed as ``extra={"extra": {...}}`` (method, path,
    status, duration) are merged into the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``chari_stub`` hierarchy (pass ``__name__``)."""
    return logging.getLogger(name)
