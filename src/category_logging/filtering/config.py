"""
Configuration for log filtering system
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..categories import Category
from .base import LogFilter
from .classification_filter import ClassificationFilter


@dataclass
class FilterConfig:
    """Configuration for log filtering system"""

    enabled: bool = True
    filters: List[LogFilter] = field(default_factory=list)
    collect_metrics: bool = True

    @classmethod
    def for_category(cls, category: Category) -> "FilterConfig":
        """Only let events of one category through"""
        return cls(enabled=True, filters=[ClassificationFilter(category)])

    @classmethod
    def for_categories(cls, categories: Iterable[Category]) -> "FilterConfig":
        """Chain one classification filter per category

        Filters in a chain are combined with AND: an event must belong to
        every listed category to pass.
        """
        return cls(
            enabled=True,
            filters=[ClassificationFilter(category) for category in categories],
        )
