import logging
import os
import sys
from typing import Any, Dict, Optional

from .categories import Category
from .config import LoggerConfig, get_default_config
from .filtering import ClassificationFilter
from .formatter import PlainTextFormatter, StructuredFormatter

# Cache formatter instances
_formatter_cache: Dict[str, logging.Formatter] = {}


def _create_formatter(config: LoggerConfig, category: Optional[str] = None) -> logging.Formatter:
    if config.formatter_type == "json":
        return StructuredFormatter(config, category=category)
    return PlainTextFormatter(config, category=category)


def _get_or_create_formatter(config: LoggerConfig) -> logging.Formatter:
    """Get untagged formatter from cache or create new one"""
    cache_key = f"{config.formatter_type}_{config.include_timestamp}"

    if cache_key not in _formatter_cache:
        _formatter_cache[cache_key] = _create_formatter(config)

    return _formatter_cache[cache_key]


def create_category_handler(
    category: Category,
    config: Optional[LoggerConfig] = None,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """
    Create a handler that only emits events of one category

    With ``config.log_directory`` set the handler writes to
    ``<log_directory>/<category name>.log``. Otherwise it writes to stdout,
    where the main handler may print the same event too, so each line is
    tagged with the category (``[fills] ...`` in plain text, a ``category``
    key in JSON). An explicit ``formatter`` is used as given.
    """
    config = config or get_default_config()

    if config.log_directory:
        os.makedirs(config.log_directory, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            os.path.join(config.log_directory, f"{category.name}.log"),
            encoding="utf-8",
        )
        default_formatter = _get_or_create_formatter(config)
    else:
        handler = logging.StreamHandler(sys.stdout)
        default_formatter = _create_formatter(config, category=category.name)

    handler.set_name(f"category:{category.name}")
    handler.addFilter(ClassificationFilter(category))
    handler.setFormatter(formatter or default_formatter)
    return handler


def _add_main_handler(logger: logging.Logger, config: LoggerConfig) -> None:
    """Add unfiltered console handler if required"""
    if config.main_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name("main")
        console_handler.setFormatter(_get_or_create_formatter(config))
        logger.addHandler(console_handler)


def get_logger(name: str, config: Optional[LoggerConfig] = None) -> logging.Logger:
    """Create a logger routing each configured category to its own handler"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        config = config or get_default_config()
        logger.setLevel(config.level_number)

        _add_main_handler(logger, config)
        for category in config.categories:
            logger.addHandler(create_category_handler(category, config))

        logger.propagate = True

    return logger


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    config: Optional[LoggerConfig] = None,
    **extra: Any,
) -> bool:
    """
    Log with context injection, return whether the event was emitted

    When the config carries a filter config the event is first run through
    its engine; a rejected event is not logged at all. Accepted events get
    the labels of the filters they passed as ``ctx_categories``.
    """
    config = config or get_default_config()
    context = {k: v for k, v in extra.items() if v is not None}

    engine = config.get_filter_engine()
    if engine is not None:
        record = logger.makeRecord(
            logger.name, logging.getLevelName(level.upper()), "", 0, message, (), None
        )
        result = engine.should_log(record, context)
        if not result.should_log:
            return False
        if result.metadata.get("matched"):
            context.setdefault("categories", result.metadata["matched"])

    ctx_context = {f"ctx_{k}": v for k, v in context.items()}
    getattr(logger, level.lower())(message, extra=ctx_context)
    return True


def get_filter_metrics(
    config: Optional[LoggerConfig] = None,
) -> Optional[Dict[str, Any]]:
    """Get filtering metrics for the config, None if it has no filtering"""
    config = config or get_default_config()
    engine = config.get_filter_engine()
    return engine.get_metrics() if engine is not None else None


def reset_filter_metrics(config: Optional[LoggerConfig] = None) -> None:
    """Reset filtering metrics for the config"""
    config = config or get_default_config()
    engine = config.get_filter_engine()
    if engine is not None:
        engine.reset_metrics()
