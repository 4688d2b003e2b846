"""
Unit Tests for Structured Logging
"""

import json

import pytest
from loguru import logger as loguru_logger

from flow_compiler.utils.logging import get_logger, log_context, trace_sync


@pytest.fixture
def records():
    """Capture structured records emitted through loguru."""
    messages = []
    sink_id = loguru_logger.add(messages.append, format="{message}", level="DEBUG")
    yield lambda event: [
        entry for entry in (json.loads(message) for message in messages if message.startswith("{"))
        if entry["event"] == event
    ]
    loguru_logger.remove(sink_id)


class TestStructuredLogger:
    """Tests for JSON record formatting."""

    def test_record_shape(self, records):
        get_logger("tests.logging").info("test.event.logged", extra={"screens": 2})

        (entry,) = records("test.event.logged")
        assert entry["level"] == "INFO"
        assert entry["logger"]["name"] == "tests.logging"
        assert entry["data"] == {"screens": 2}
        assert entry["service"]["name"]

    def test_error_carries_exception(self, records):
        try:
            raise ValueError("boom")
        except ValueError as e:
            get_logger("tests.logging").error("test.event.failed", exc_info=e)

        (entry,) = records("test.event.failed")
        assert entry["error"]["type"] == "ValueError"
        assert "boom" in entry["error"]["stacktrace"]


class TestLogContext:
    """Tests for correlation tracking."""

    def test_context_applied_and_restored(self, records):
        logger = get_logger("tests.logging")

        with log_context(correlation_id="req-1", flow_id="flow-9", operation="compile"):
            with log_context(step="inner"):
                logger.info("test.context.inner")
            logger.info("test.context.outer")
        logger.info("test.context.after")

        (inner,) = records("test.context.inner")
        (outer,) = records("test.context.outer")
        (after,) = records("test.context.after")

        assert inner["correlation"] == {"correlation_id": "req-1", "flow_id": "flow-9"}
        assert inner["context"] == {"operation": "compile", "step": "inner"}
        assert outer["context"] == {"operation": "compile"}
        assert after["correlation"]["correlation_id"] is None
        assert "context" not in after


class TestTraceSync:
    """Tests for the tracing decorator."""

    def test_completed_event(self, records):
        @trace_sync("test.traced")
        def double(value):
            return value * 2

        assert double(21) == 42
        (entry,) = records("test.traced.completed")
        assert entry["data"]["success"] is True
        assert entry["data"]["performance"]["duration_ms"] >= 0

    def test_failed_event_reraises(self, records):
        @trace_sync("test.traced")
        def explode():
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            explode()

        (entry,) = records("test.traced.failed")
        assert entry["data"]["error_type"] == "RuntimeError"
