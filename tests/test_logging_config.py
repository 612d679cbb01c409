# tests/test_logging_config.py
"""Tests for logging setup."""

import logging

from seo_analyzer.logging_config import get_logger, setup_logging


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "analyzer.log"

    package_logger = setup_logging(level="DEBUG", log_file=str(log_file))
    get_logger("seo_analyzer.test").debug("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert package_logger.name == "seo_analyzer"
    assert logging.getLogger().level == logging.DEBUG
    assert "seo_analyzer.test: hello from the test" in log_file.read_text()


def test_http_loggers_stay_at_warning_or_above():
    setup_logging(level="DEBUG")
    assert logging.getLogger("httpx").level == logging.WARNING

    setup_logging(level="ERROR")
    assert logging.getLogger("httpcore").level == logging.ERROR


def test_unknown_level_falls_back_to_info():
    setup_logging(level="chatty")

    assert logging.getLogger().level == logging.INFO


def test_get_logger_namespaces_under_package():
    assert get_logger("cli").name == "seo_analyzer.cli"
    assert get_logger("seo_analyzer.cli").name == "seo_analyzer.cli"
    assert get_logger("seo_analyzer").name == "seo_analyzer"
