import json
import logging
import uuid

import pytest

from category_logging import (
    FILLS,
    ORDERS,
    Category,
    ClassificationFilter,
    FilterConfig,
    LoggerConfig,
    create_category_handler,
    get_filter_metrics,
    get_logger,
    log_with_context,
    reset_filter_metrics,
    set_default_config,
)


@pytest.fixture
def logger_name():
    name = f"test_category_logger_{uuid.uuid4().hex}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def file_config(tmp_path):
    return LoggerConfig(
        log_directory=str(tmp_path / "logs"),
        main_output=False,
        include_timestamp=False,
    )


def read_lines(path):
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()


def test_get_logger(logger_name):
    set_default_config(LoggerConfig())
    logger = get_logger(logger_name)
    assert isinstance(logger, logging.Logger)
    assert logger.name == logger_name
    assert logger.level == logging.INFO

    names = [h.get_name() for h in logger.handlers]
    assert names == ["main", "category:fills", "category:orders"]


def test_get_logger_with_config(logger_name):
    config = LoggerConfig(log_level="DEBUG", categories=[], main_output=False)
    logger = get_logger(logger_name, config)
    assert logger.level == logging.DEBUG
    assert logger.handlers == []


def test_get_logger_does_not_duplicate_handlers(logger_name, file_config):
    logger = get_logger(logger_name, file_config)
    count = len(logger.handlers)
    assert get_logger(logger_name, file_config) is logger
    assert len(logger.handlers) == count


def test_category_handlers_carry_classification_filter(logger_name, file_config):
    logger = get_logger(logger_name, file_config)
    filters = [f for h in logger.handlers for f in h.filters]
    assert all(isinstance(f, ClassificationFilter) for f in filters)
    assert [f.category for f in filters] == [FILLS, ORDERS]


def test_events_routed_to_category_files(logger_name, file_config, tmp_path):
    logger = get_logger(logger_name, file_config)

    logger.info("Order 42: PartialFill qty=10")
    logger.info("Received Bid @ 101.5")
    logger.info("Heartbeat tick")
    logger.info("Order %d: %s", 7, "TotalFill")

    fills = read_lines(tmp_path / "logs" / "fills.log")
    orders = read_lines(tmp_path / "logs" / "orders.log")

    assert fills == [
        f"INFO {logger_name} Order 42: PartialFill qty=10",
        f"INFO {logger_name} Order 7: TotalFill",
    ]
    assert orders == [f"INFO {logger_name} Received Bid @ 101.5"]


def test_event_in_two_categories(logger_name, file_config, tmp_path):
    logger = get_logger(logger_name, file_config)
    logger.info("Ask 101.5 TotalFill")

    assert len(read_lines(tmp_path / "logs" / "fills.log")) == 1
    assert len(read_lines(tmp_path / "logs" / "orders.log")) == 1


def test_main_output_keeps_unmatched_events(logger_name, capsys):
    config = LoggerConfig(categories=[], include_timestamp=False)
    logger = get_logger(logger_name, config)
    logger.info("Heartbeat tick")

    assert f"INFO {logger_name} Heartbeat tick" in capsys.readouterr().out


def test_json_category_output(logger_name, tmp_path):
    config = LoggerConfig(
        log_directory=str(tmp_path),
        main_output=False,
        formatter_type="json",
        categories=[ORDERS],
    )
    logger = get_logger(logger_name, config)
    logger.warning("Ask 99.5")

    entry = json.loads(read_lines(tmp_path / "orders.log")[0])
    assert entry["level"] == "WARNING"
    assert entry["message"] == "Ask 99.5"
    assert "timestamp" in entry


def test_create_category_handler_to_stdout(capsys):
    cancels = Category("cancels", ("Cancel",))
    handler = create_category_handler(cancels, LoggerConfig(include_timestamp=False))
    assert isinstance(handler, logging.StreamHandler)
    assert handler.get_name() == "category:cancels"

    record = logging.LogRecord("orders", logging.INFO, "", 0, "Cancel 5", (), None)
    handler.handle(record)
    handler.handle(logging.LogRecord("orders", logging.INFO, "", 0, "New 5", (), None))

    out = capsys.readouterr().out
    assert "Cancel 5" in out
    assert "New 5" not in out


def test_log_with_context(caplog, logger_name):
    config = LoggerConfig(categories=[], main_output=False)
    logger = get_logger(logger_name, config)

    with caplog.at_level(logging.INFO, logger=logger_name):
        emitted = log_with_context(logger, "info", "Bid placed", config, order_id=42, venue=None)

    assert emitted is True
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.ctx_order_id == 42
    assert not hasattr(record, "ctx_venue")


def test_log_with_context_filter_engine(caplog, logger_name):
    config = LoggerConfig(
        categories=[],
        main_output=False,
        filter_config=FilterConfig.for_category(FILLS),
    )
    logger = get_logger(logger_name, config)

    with caplog.at_level(logging.INFO, logger=logger_name):
        assert log_with_context(logger, "info", "PartialFill 10", config) is True
        assert log_with_context(logger, "info", "Heartbeat", config) is False

    assert [r.getMessage() for r in caplog.records] == ["PartialFill 10"]

    metrics = get_filter_metrics(config)
    assert metrics["summary"]["total_evaluated"] == 2
    assert metrics["summary"]["filtered_out"] == 1

    reset_filter_metrics(config)
    assert get_filter_metrics(config)["summary"]["total_evaluated"] == 0


def test_filter_metrics_without_filtering():
    config = LoggerConfig()
    assert get_filter_metrics(config) is None
    reset_filter_metrics(config)


def test_filter_attached_to_logger(caplog, logger_name):
    logger = logging.getLogger(logger_name)
    logger.addFilter(ClassificationFilter(ORDERS))

    with caplog.at_level(logging.INFO, logger=logger_name):
        logger.info("Received Bid @ 101.5")
        logger.info("Heartbeat tick")

    assert [r.getMessage() for r in caplog.records] == ["Received Bid @ 101.5"]
    logger.filters.clear()


def test_stdout_category_output_is_tagged(logger_name, capsys):
    config = LoggerConfig(categories=[FILLS], include_timestamp=False)
    logger = get_logger(logger_name, config)
    logger.info("Order 42: PartialFill qty=10")
    logger.info("Heartbeat tick")

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"INFO {logger_name} Order 42: PartialFill qty=10",
        f"[fills] INFO {logger_name} Order 42: PartialFill qty=10",
        f"INFO {logger_name} Heartbeat tick",
    ]


def test_stdout_json_category_output_carries_category(logger_name, capsys):
    config = LoggerConfig(categories=[ORDERS], main_output=False, formatter_type="json")
    logger = get_logger(logger_name, config)
    logger.info("Received Bid @ 101.5")

    entry = json.loads(capsys.readouterr().out.strip())
    assert entry["category"] == "orders"


def test_file_category_output_is_not_tagged(logger_name, file_config, tmp_path):
    logger = get_logger(logger_name, file_config)
    logger.info("Ask 99.5")
    assert read_lines(tmp_path / "logs" / "orders.log") == [f"INFO {logger_name} Ask 99.5"]


def test_log_with_context_adds_matched_categories(caplog, logger_name):
    config = LoggerConfig(
        categories=[],
        main_output=False,
        filter_config=FilterConfig.for_category(ORDERS),
    )
    logger = get_logger(logger_name, config)

    with caplog.at_level(logging.INFO, logger=logger_name):
        log_with_context(logger, "info", "Bid placed", config)

    assert caplog.records[0].ctx_categories == ["orders"]


def test_filter_metrics_follow_config_filter(logger_name):
    config = LoggerConfig(
        categories=[],
        main_output=False,
        filter_config=FilterConfig.for_category(FILLS),
    )
    logger = get_logger(logger_name, config)
    log_with_context(logger, "info", "Heartbeat", config)
    assert get_filter_metrics(config)["summary"]["filtered_out"] == 1

    # A new filter config starts from fresh counters
    config.filter_config = FilterConfig.for_category(ORDERS)
    assert get_filter_metrics(config)["summary"]["total_evaluated"] == 0
