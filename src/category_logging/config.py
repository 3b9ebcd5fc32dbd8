import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from .categories import (
    DEFAULT_CATEGORIES,
    Category,
    CategoryConfigError,
    categories_from_mapping,
    ensure_unique_names,
    parse_categories,
)
from .filtering import FilterConfig, FilterEngine

FormatterType = Literal["json", "plain"]

_FORMATTER_TYPES = ("json", "plain")
_BOOL_KEYS = ("include_timestamp", "main_output")


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    raise CategoryConfigError(f"{key} must be a boolean or 'true'/'false', got {value!r}")


@dataclass
class LoggerConfig:
    """Configuration for category-routed loggers"""

    log_level: str = "INFO"
    include_timestamp: bool = True
    formatter_type: FormatterType = "plain"
    categories: List[Category] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    log_directory: Optional[str] = None
    main_output: bool = True
    filter_config: Optional[FilterConfig] = None
    _filter_engine: Optional[FilterEngine] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise CategoryConfigError(f"invalid log level {self.log_level!r}")
        if self.formatter_type not in _FORMATTER_TYPES:
            self.formatter_type = "plain"
        ensure_unique_names(self.categories)

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def get_filter_engine(self) -> Optional[FilterEngine]:
        """Engine for the active filter config, created on first use

        The engine lives as long as this config; replacing ``filter_config``
        starts a fresh engine.
        """
        if not (self.filter_config and self.filter_config.enabled):
            return None
        if self._filter_engine is None or self._filter_engine.config is not self.filter_config:
            self._filter_engine = FilterEngine(self.filter_config)
        return self._filter_engine

    @classmethod
    def _parse_bool_env(cls, key: str, default: str = "false") -> bool:
        """Parse boolean from environment variable"""
        return os.getenv(key, default).lower() == "true"

    @classmethod
    def _categories_from_env(cls) -> List[Category]:
        raw = os.getenv("CATEGORY_LOG_CATEGORIES")
        if raw is None:
            return list(DEFAULT_CATEGORIES)
        return parse_categories(raw)

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Create configuration from environment variables

        ``CATEGORY_LOG_CONFIG_FILE`` points at a JSON file whose values are
        used as defaults; the remaining variables override them.
        """
        config_file = os.getenv("CATEGORY_LOG_CONFIG_FILE")
        base = cls.from_file(config_file) if config_file else cls()

        categories = (
            cls._categories_from_env()
            if "CATEGORY_LOG_CATEGORIES" in os.environ
            else base.categories
        )

        return cls(
            log_level=os.getenv("CATEGORY_LOG_LEVEL", base.log_level),
            include_timestamp=cls._parse_bool_env(
                "CATEGORY_LOG_TIMESTAMP", str(base.include_timestamp)
            ),
            formatter_type=os.getenv("CATEGORY_LOG_FORMATTER", base.formatter_type).lower(),
            categories=categories,
            log_directory=os.getenv("CATEGORY_LOG_DIR", base.log_directory),
            main_output=cls._parse_bool_env("CATEGORY_LOG_MAIN_OUTPUT", str(base.main_output)),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerConfig":
        """Create configuration from a plain mapping (e.g. parsed JSON)"""
        kwargs: Dict[str, Any] = {}
        for key in ("log_level", "formatter_type", "log_directory"):
            if key in data:
                kwargs[key] = data[key]
        for key in _BOOL_KEYS:
            if key in data:
                kwargs[key] = _as_bool(key, data[key])
        if "formatter_type" in kwargs and isinstance(kwargs["formatter_type"], str):
            kwargs["formatter_type"] = kwargs["formatter_type"].lower()
        if "categories" in data:
            categories = data["categories"]
            if isinstance(categories, str):
                kwargs["categories"] = parse_categories(categories)
            else:
                kwargs["categories"] = categories_from_mapping(categories)
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str) -> "LoggerConfig":
        """Load configuration from a JSON file"""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CategoryConfigError(f"cannot load logging config {path}: {e}") from e
        if not isinstance(data, dict):
            raise CategoryConfigError(f"logging config {path} must contain a JSON object")
        return cls.from_dict(data)


_default_config: Optional[LoggerConfig] = None


def get_default_config() -> LoggerConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = LoggerConfig.from_env()
    return _default_config


def set_default_config(config: LoggerConfig) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config
