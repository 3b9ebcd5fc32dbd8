"""
Message-based log classification

A ClassificationFilter accepts a log event when its rendered message contains
one of its category's markers and denies it otherwise. It is usable both in a
FilterEngine chain and as a standard ``logging`` filter on a handler.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Union

from ..categories import Category
from .base import Decision, FilterResult, LogFilter

LogEvent = Union[logging.LogRecord, str, None]


def decide(message: Optional[str], markers: Sequence[str]) -> Decision:
    """
    Classify a rendered message against a set of markers

    Returns ACCEPT if any marker occurs in the message as a contiguous,
    case-sensitive substring, DENY otherwise. A missing or non-string
    message is never a match.
    """
    if not message or not isinstance(message, str):
        return Decision.DENY

    for marker in markers:
        if marker in message:
            return Decision.ACCEPT
    return Decision.DENY


def _rendered_message(event: LogEvent) -> Optional[str]:
    if event is None or isinstance(event, str):
        return event
    try:
        return event.getMessage()
    except Exception:
        # Bad %-args or a failing __str__ on msg: treat as unreadable
        return None


class ClassificationFilter(logging.Filter, LogFilter):
    """Accept only log events belonging to a category"""

    def __init__(self, category: Category):
        super().__init__(name="")
        self.category = category

    def decide(self, event: LogEvent) -> Decision:
        """Classify a LogRecord or an already rendered message"""
        return decide(_rendered_message(event), self.category.markers)

    def should_log(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterResult:
        decision = self.decide(record)
        accepted = decision is Decision.ACCEPT
        return FilterResult(
            should_log=accepted,
            reason=f"classification_filter[{self.category.name}]: {'matched' if accepted else 'no marker'}",
            metadata={"category": self.category.name},
        )

    def filter(self, record: logging.LogRecord) -> bool:
        return self.decide(record) is Decision.ACCEPT

    def __repr__(self) -> str:
        return f"ClassificationFilter(category={self.category.name!r}, markers={list(self.category.markers)!r})"
