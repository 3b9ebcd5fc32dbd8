"""
Formatters for category log output
"""

from .json_formatter import StructuredFormatter
from .text_formatter import PlainTextFormatter

__all__ = [
    "StructuredFormatter",
    "PlainTextFormatter",
]
