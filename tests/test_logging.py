"""Tests for logging helpers."""

import logging

import pytest

from bookshelf.utils.logging import LogContext, get_logger


class TestLogContext:
    """Tests for LogContext."""

    def test_prefix(self, caplog: pytest.LogCaptureFixture):
        """Test messages carry the context pairs in order."""
        log = LogContext(get_logger("bookshelf.tests"), isbn="978-4-00-000000-1")

        with caplog.at_level(logging.DEBUG, logger="bookshelf.tests"):
            log.info("lookup started")
            log.error("lookup failed")

        assert [r.getMessage() for r in caplog.records] == [
            "[isbn=978-4-00-000000-1] lookup started",
            "[isbn=978-4-00-000000-1] lookup failed",
        ]
        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]

    def test_bind_appends_context(self, caplog: pytest.LogCaptureFixture):
        """Test bind adds pairs without changing the original context."""
        log = LogContext(get_logger("bookshelf.tests"), isbn="978-4-00-000000-1")
        bound = log.bind(query="9784000000001")

        with caplog.at_level(logging.DEBUG, logger="bookshelf.tests"):
            bound.warning("slow response")
            log.debug("done")

        assert [r.getMessage() for r in caplog.records] == [
            "[isbn=978-4-00-000000-1] [query=9784000000001] slow response",
            "[isbn=978-4-00-000000-1] done",
        ]
