"""Tests for loguru sink configuration."""
from loguru import logger

from linkwatch.core.logger import configure_logging, get_logger


def test_file_sink_receives_debug(tmp_path):
    log_file = tmp_path / "logs" / "linkwatch.log"
    configure_logging(level="WARNING", log_file=str(log_file))
    try:
        get_logger().debug("[Test] probe detail")
        logger.complete()
        assert "[Test] probe detail" in log_file.read_text(encoding="utf-8")
    finally:
        logger.remove()


def test_without_file_sink(tmp_path):
    configure_logging(level="INFO", log_file=None)
    try:
        assert list(tmp_path.iterdir()) == []
    finally:
        logger.remove()
