#!/usr/bin/env python3
"""
Example routing market events to per-category log files
"""

import tempfile
from pathlib import Path

from category_logging import (
    Category,
    CategoryRouter,
    FILLS,
    ORDERS,
    LoggerConfig,
    get_logger,
    log_with_context,
)


def main():
    log_dir = Path(tempfile.mkdtemp(prefix="category_logs_"))

    cancels = Category("cancels", ("Cancel", "Reject"))
    config = LoggerConfig(
        log_directory=str(log_dir),
        categories=[FILLS, ORDERS, cancels],
        include_timestamp=False,
    )

    logger = get_logger("market", config)

    logger.info("Received Bid @ 101.5 qty=20")
    logger.info("Received Ask @ 101.7 qty=5")
    logger.info("Order 42: PartialFill qty=10")
    logger.info("Order 42: TotalFill qty=20")
    logger.info("Order 43: Cancel requested")
    logger.info("Heartbeat tick")
    log_with_context(logger, "info", "Order 44: Reject", config, reason="price band")

    # Every category is evaluated on its own
    router = CategoryRouter(config.categories)
    print(router.classify("Bid 101.5 hit, TotalFill"))

    for path in sorted(log_dir.glob("*.log")):
        print(f"--- {path.name}")
        print(path.read_text(), end="")


if __name__ == "__main__":
    main()
