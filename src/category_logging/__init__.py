"""
Category Logging

Classify log events by markers in their message and route each category to
its own handler.
"""

__version__ = "0.1.0"

from .categories import (
    DEFAULT_CATEGORIES,
    FILLS,
    ORDERS,
    Category,
    CategoryConfigError,
    categories_from_mapping,
    parse_categories,
)
from .config import (
    FormatterType,
    LoggerConfig,
    get_default_config,
    set_default_config,
)
from .filtering import (
    CategoryRouter,
    ClassificationFilter,
    Decision,
    FilterConfig,
    FilterEngine,
    FilterResult,
    LogFilter,
    decide,
)
from .formatter import PlainTextFormatter, StructuredFormatter
from .logger import (
    create_category_handler,
    get_filter_metrics,
    get_logger,
    log_with_context,
    reset_filter_metrics,
)

__all__ = [
    # Categories
    "Category",
    "CategoryConfigError",
    "FILLS",
    "ORDERS",
    "DEFAULT_CATEGORIES",
    "parse_categories",
    "categories_from_mapping",
    # Configuration
    "LoggerConfig",
    "FormatterType",
    "get_default_config",
    "set_default_config",
    # Filtering
    "Decision",
    "decide",
    "ClassificationFilter",
    "CategoryRouter",
    "FilterConfig",
    "FilterEngine",
    "FilterResult",
    "LogFilter",
    # Formatters
    "PlainTextFormatter",
    "StructuredFormatter",
    # Loggers
    "get_logger",
    "create_category_handler",
    "log_with_context",
    "get_filter_metrics",
    "reset_filter_metrics",
]
