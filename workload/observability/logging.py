"""
Structured logging for the workload core.

Every module logs through `logging.getLogger(__name__)`; this module only
decides how records leave the process:

- JSONFormatter: one JSON object per line, `extra` fields inlined
- HumanFormatter: a single readable line for terminals
- configure_logging: installs one stderr handler at the configured level

The active request id (see .context) is attached to every record.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from workload.config import Settings, get_settings

from .context import get_request_id

HANDLER_NAME = "workload"

# Attributes every LogRecord has; anything else came in through `extra`
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """
    One JSON document per record.

    {"timestamp": "2024-03-06T10:00:00.000Z", "level": "INFO",
     "logger": "workload.capacity_truth.calculator",
     "message": "Members over weekly capacity",
     "request_id": "req-abc123", "overloaded": ["u1"]}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(_extra_fields(record))
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """`2024-03-06 10:00:00 [INFO] workload.snapshot: [req-abc123] Team snapshot built`"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(request_prefix)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        request_id = get_request_id()
        record.request_prefix = f"[{request_id[:12]}] " if request_id else ""
        return super().format(record)


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    settings: Settings | None = None,
) -> None:
    """
    Route log records to stderr.

    Args:
        level: Log level name. Defaults to the `log_level` setting
            (WORKLOAD_LOG_LEVEL / config/workload.yaml).
        json_format: JSON lines when True, human lines when False; when None,
            JSON unless stderr is a terminal.
        settings: Settings to read the default level from.

    Calling it again replaces the handler installed by the previous call;
    handlers installed by anything else are left alone.
    """
    if level is None:
        level = (settings or get_settings()).log_level
    if json_format is None:
        json_format = not sys.stderr.isatty()

    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
