"""
Base classes for log filtering system
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Decision(Enum):
    """Outcome of classifying a single log event"""

    ACCEPT = "accept"
    DENY = "deny"


@dataclass
class FilterResult:
    """Result of log filtering operation"""

    should_log: bool
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def decision(self) -> Decision:
        return Decision.ACCEPT if self.should_log else Decision.DENY


class LogFilter(ABC):
    """Abstract base class for log filters"""

    @abstractmethod
    def should_log(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterResult:
        """Determine if log record should be processed"""
        pass
