"""
Log classification and filtering
"""

from .base import Decision, FilterResult, LogFilter
from .classification_filter import ClassificationFilter, decide
from .config import FilterConfig
from .engine import FilterEngine
from .router import CategoryRouter

__all__ = [
    "Decision",
    "FilterResult",
    "LogFilter",
    "ClassificationFilter",
    "decide",
    "FilterConfig",
    "FilterEngine",
    "CategoryRouter",
]
