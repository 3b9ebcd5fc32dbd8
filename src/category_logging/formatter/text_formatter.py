"""
Plain text formatter for category logs
"""

import json
import logging
from typing import Optional

from ..config import LoggerConfig, get_default_config
from .json_formatter import iso_timestamp


class PlainTextFormatter(logging.Formatter):
    """Render records as ``[category] [timestamp] LEVEL logger message (key=value, ...)``

    The category tag is only written when the formatter is built for one.
    """

    def __init__(
        self, config: Optional[LoggerConfig] = None, category: Optional[str] = None
    ):
        super().__init__()
        self.config = config or get_default_config()
        self.category = category

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.category:
            parts.append(f"[{self.category}]")

        if self.config.include_timestamp:
            parts.append(f"[{iso_timestamp(record)}]")

        parts.extend([record.levelname, record.name, record.getMessage()])

        context_items = []
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                if isinstance(value, (dict, list)):
                    value_str = json.dumps(value, separators=(",", ":"), default=str)
                    if len(value_str) > 100:
                        value_str = value_str[:97] + "..."
                else:
                    value_str = str(value)
                context_items.append(f"{key[4:]}={value_str}")

        if context_items:
            parts.append(f"({', '.join(context_items)})")

        if record.exc_info:
            parts.append("\n" + self.formatException(record.exc_info))

        return " ".join(parts)
