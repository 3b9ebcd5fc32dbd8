"""
JSON formatter for category logs
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config import LoggerConfig, get_default_config


def iso_timestamp(record: logging.LogRecord) -> str:
    """UTC ISO-8601 timestamp of the record's creation time"""
    return (
        datetime.fromtimestamp(record.created, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line"""

    def __init__(
        self, config: Optional[LoggerConfig] = None, category: Optional[str] = None
    ):
        super().__init__()
        self.config = config or get_default_config()
        self.category = category

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.config.include_timestamp:
            log_entry["timestamp"] = iso_timestamp(record)

        if self.category:
            log_entry["category"] = self.category

        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                log_entry[key[4:]] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)
