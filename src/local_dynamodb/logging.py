"""JSON logging for the package.

Modules log either a plain string or an event dict such as
``{"event": "instance_started", "pid": 4242, "port": 8000}``. Event dicts
are unpacked so the event name becomes ``msg`` and the remaining keys land
in ``data`` next to anything passed through ``log_with_data``.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

PACKAGE_LOGGER = "local_dynamodb"

RESET = "\033[0m"

LEVEL_COLORS = {
    "DEBUG": "\033[34m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m\033[1m",
    "CRITICAL": "\033[35m\033[1m",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, colored by level when ``color`` is set."""

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {}

        if isinstance(record.msg, dict):
            event = dict(record.msg)
            msg = str(event.pop("event", ""))
            data.update(event)
        else:
            msg = record.getMessage()

        data.update(getattr(record, "data", None) or {})

        output = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": msg,
        }
        if data:
            output["data"] = data
        if record.exc_info:
            output["exc"] = self.formatException(record.exc_info)

        line = json.dumps(output, default=str)
        if not self.color:
            return line
        return f"{LEVEL_COLORS.get(record.levelname, '')}{line}{RESET}"


def configure_logging(level: str = "DEBUG", color: Optional[bool] = None) -> None:
    """Send package logs to stderr as JSON.

    stdout is left alone because the MCP server speaks JSON-RPC over it.
    Color defaults to on only when stderr is a terminal.
    """
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel(getattr(logging, level.upper()))

    if color is None:
        color = sys.stderr.isatty()

    # Only attach a handler once
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter(color=color))
        app_logger.addHandler(handler)
        app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def log_with_data(
    logger: logging.Logger,
    level: int,
    msg: str,
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """Log ``msg`` with structured ``data`` attached to the record."""
    if data:
        logger.log(level, msg, extra={"data": data})
    else:
        logger.log(level, msg)
