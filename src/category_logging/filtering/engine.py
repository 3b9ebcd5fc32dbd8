"""
Filtering engine that applies a chain of filters

Each filter in the chain is tracked under a label: the category name for a
ClassificationFilter, ``<ClassName>_<position>`` for any other filter.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, List, Optional

from .base import FilterResult, LogFilter
from .config import FilterConfig


def filter_label(filter_obj: LogFilter, position: int) -> str:
    category = getattr(filter_obj, "category", None)
    if category is not None:
        return category.name
    return f"{filter_obj.__class__.__name__}_{position}"


class FilterEngine:
    """Applies the filters of a FilterConfig in order, first rejection wins"""

    def __init__(self, config: FilterConfig):
        self.config = config
        self._labels: List[str] = [
            filter_label(f, i) for i, f in enumerate(config.filters)
        ]
        self._totals: Counter = Counter()
        self._filter_stats: Dict[str, Counter] = defaultdict(Counter)

    def _label(self, position: int, filter_obj: LogFilter) -> str:
        # Filters appended to the config after construction get labelled lazily
        if position >= len(self._labels):
            self._labels.append(filter_label(filter_obj, position))
        return self._labels[position]

    def should_log(
        self, record: logging.LogRecord, context: Optional[Dict[str, Any]] = None
    ) -> FilterResult:
        """Apply all filters and return final decision

        A rejection carries the label of the rejecting filter in
        ``metadata["rejected_by"]``.
        """
        if not self.config.enabled:
            return FilterResult(should_log=True, reason="filtering_disabled")

        context = context or {}
        self._totals["total_evaluated"] += 1
        matched: List[str] = []

        for position, filter_obj in enumerate(self.config.filters):
            label = self._label(position, filter_obj)
            result = filter_obj.should_log(record, context)

            if self.config.collect_metrics:
                stats = self._filter_stats[label]
                stats["total"] += 1
                stats["passed" if result.should_log else "rejected"] += 1

            if not result.should_log:
                self._totals["filtered_out"] += 1
                result.metadata.setdefault("rejected_by", label)
                return result
            matched.append(label)

        self._totals["passed_through"] += 1
        return FilterResult(
            should_log=True,
            reason="all_filters_passed",
            metadata={"matched": matched},
        )

    def get_metrics(self) -> Dict[str, Any]:
        """Get filtering metrics, per-filter stats keyed by label"""
        total_evaluated = self._totals["total_evaluated"]
        passed_through = self._totals["passed_through"]

        return {
            "summary": {
                "total_evaluated": total_evaluated,
                "passed_through": passed_through,
                "filtered_out": self._totals["filtered_out"],
            },
            "filter_stats": {
                label: {key: stats[key] for key in ("total", "passed", "rejected")}
                for label, stats in self._filter_stats.items()
            },
            "pass_rate": passed_through / max(1, total_evaluated),
        }

    def reset_metrics(self):
        """Reset all metrics"""
        self._totals.clear()
        self._filter_stats.clear()
