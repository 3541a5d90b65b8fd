"""Test the client logger."""

import logging
from unittest.mock import Mock

from ecobank_express.exceptions import clear_correlation_id, set_correlation_id
from ecobank_express.utils.logger import (
    ContextAwareLogger,
    CorrelationIdFilter,
    configure_logging,
    get_logger,
)


class TestContextAwareLogger:
    """Test ContextAwareLogger formatting."""

    def test_formats_extra_into_message(self):
        inner = Mock()

        ContextAwareLogger(inner).info("response", extra={"trace_id": "t1", "status_code": 200})

        inner.info.assert_called_once_with(
            "response | trace_id=t1 | status_code=200",
            extra={"trace_id": "t1", "status_code": 200},
        )

    def test_without_extra(self):
        inner = Mock()

        ContextAwareLogger(inner).warning("plain")

        inner.warning.assert_called_once_with("plain", extra={})

    def test_passes_other_kwargs(self):
        inner = Mock()

        ContextAwareLogger(inner).error("failed", exc_info=True)

        inner.error.assert_called_once_with("failed", extra={}, exc_info=True)


class TestCorrelationIdFilter:
    """Test CorrelationIdFilter."""

    def test_adds_correlation_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        set_correlation_id("corr-1")
        try:
            assert CorrelationIdFilter().filter(record) is True
        finally:
            clear_correlation_id()

        assert record.correlation_id == "corr-1"

    def test_no_correlation_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert not hasattr(record, "correlation_id")


class TestConfigureLogging:
    """Test configure_logging and get_logger."""

    def test_writes_trace_file(self, tmp_path):
        log_file = tmp_path / "log" / "ecobank_express_api.log"

        logger = configure_logging(log_level="DEBUG", log_file=str(log_file))
        logger.debug("request: method: post, url: /x", extra={"trace_id": "t1"})
        for handler in logger.logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "request: method: post, url: /x | trace_id=t1" in content

    def test_no_file_handler_when_disabled(self):
        logger = configure_logging(log_level="INFO", log_file="")

        assert len(logger.logger.handlers) == 1
        assert logger.logger.level == logging.INFO

    def test_reconfigure_replaces_handlers(self):
        configure_logging(log_file="")
        logger = configure_logging(log_file="")

        assert len(logger.logger.handlers) == 1

    def test_get_logger_returns_configured(self):
        configured = configure_logging(log_file="")

        assert get_logger() is configured

    def test_get_logger_fallback(self):
        logger = get_logger()

        assert isinstance(logger, ContextAwareLogger)
        assert logger.logger.name == "ecobank_express"
        assert logger.logger.level == logging.DEBUG
