import logging

from molecule_lookup.core.utils import PerformanceStats, Timer, setup_logging, timer


def test_timer_measures_block():
    with Timer("block") as t:
        sum(range(1000))

    assert t.elapsed() >= 0.0
    assert t.elapsed_ms() == t.elapsed() * 1000.0


def test_timer_collects_stats():
    stats = PerformanceStats()

    for _ in range(3):
        with timer("parse", stats, items=2):
            pass

    parse_stats = stats.get_stats("parse")
    assert parse_stats.count == 3
    assert parse_stats.items_processed == 6
    assert "parse: Total:" in stats.report()


def test_empty_report():
    assert PerformanceStats().report() == "No performance data collected"


def test_setup_logging_writes_file(tmp_path):
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    log_file = tmp_path / "lookup.log"

    try:
        setup_logging(verbose=True, log_file=log_file)
        logging.getLogger("molecule_lookup.test").debug("hello")
        for handler in root_logger.handlers:
            handler.flush()

        assert root_logger.level == logging.DEBUG
        assert "DEBUG - hello" in log_file.read_text()
    finally:
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
