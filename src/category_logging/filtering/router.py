"""
Routing of log events to every category they belong to
"""

from typing import Dict, Iterable, List

from ..categories import Category, ensure_unique_names
from .base import Decision
from .classification_filter import ClassificationFilter, LogEvent


class CategoryRouter:
    """Classify events against several categories independently"""

    def __init__(self, categories: Iterable[Category]):
        categories = list(categories)
        ensure_unique_names(categories)
        self._filters: Dict[str, ClassificationFilter] = {
            category.name: ClassificationFilter(category) for category in categories
        }

    @property
    def categories(self) -> List[Category]:
        return [f.category for f in self._filters.values()]

    def classify(self, event: LogEvent) -> List[str]:
        """Names of all categories accepting the event, in configuration order"""
        return [
            name
            for name, category_filter in self._filters.items()
            if category_filter.decide(event) is Decision.ACCEPT
        ]

    def filter_for(self, name: str) -> ClassificationFilter:
        try:
            return self._filters[name]
        except KeyError:
            raise KeyError(f"unknown category '{name}'") from None
