"""Logging setup for orderdesk.

``LOG_FORMAT=json`` switches the root handler to one JSON object per line,
anything else gives the plain text format. ``LOG_LEVEL`` takes a stdlib level name.
"""

import logging
from typing import Any

from pythonjsonlogger.json import JsonFormatter

REQUEST_FIELDS = ("request_id", "path", "method", "status_code", "duration_ms")

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class RequestJsonFormatter(JsonFormatter):
    """JSON formatter that always carries the request fields when a record has them."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        for key in REQUEST_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_record[key] = value


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        return logging.INFO
    return level


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install a single stream handler on the root logger."""
    numeric = _level_from_name(level)
    root = logging.getLogger()
    root.setLevel(numeric)

    # Drop handlers from a previous call so reloads don't double-log.
    for handler in list(root.handlers):
        if getattr(handler, "_orderdesk", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(numeric)
    handler._orderdesk = True  # type: ignore[attr-defined]
    if fmt.lower() == "json":
        handler.setFormatter(
            RequestJsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
