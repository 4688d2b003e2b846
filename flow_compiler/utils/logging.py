"""
Structured logging for the flow compiler.

Features:
- JSON formatted log records
- Correlation ID tracking across a request
- Performance metrics
- Error tracking

Records are rendered as JSON and handed to loguru, which owns the sinks
(see ``flow_compiler.core.logger.setup_logging``).
"""
import json
import traceback
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar
from functools import wraps
import socket
import os

from loguru import logger as loguru_logger
from flow_compiler.config import settings

# Context variables for correlation tracking
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)
flow_id_var: ContextVar[Optional[str]] = ContextVar('flow_id', default=None)
extra_context_var: ContextVar[Dict[str, Any]] = ContextVar('extra_context', default={})


class StructuredLogger:
    """
    Structured logger with correlation tracking.

    All records are JSON formatted with:
    - Timestamp (ISO 8601)
    - Correlation ID (traces entire request)
    - Flow ID being compiled, when known
    - Service metadata
    """

    def __init__(self, name: str):
        self.name = name
        self.hostname = socket.gethostname()
        self.service_name = settings.app_name
        self.service_version = settings.app_version
        self.environment = settings.environment
        self.instance_id = os.getenv("INSTANCE_ID", self.hostname)
        self._sink = loguru_logger.bind(logger_name=name)

    def _get_base_context(self) -> Dict[str, Any]:
        """Get base logging context"""
        context = {
            "@timestamp": datetime.now(timezone.utc).isoformat(),
            "service": {
                "name": self.service_name,
                "version": self.service_version,
                "environment": self.environment,
                "instance_id": self.instance_id,
            },
            "logger": {
                "name": self.name
            },
            "correlation": {
                "correlation_id": correlation_id_var.get(),
                "flow_id": flow_id_var.get(),
            }
        }
        extra_context = extra_context_var.get()
        if extra_context:
            context["context"] = dict(extra_context)
        return context

    def _format_log(
        self,
        level: str,
        event: str,
        message: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> Dict[str, Any]:
        """Format log entry as JSON"""

        log_entry = self._get_base_context()

        log_entry.update({
            "level": level.upper(),
            "event": event,
            "message": message or event
        })

        if extra:
            log_entry["data"] = extra

        if exc_info:
            log_entry["error"] = {
                "type": type(exc_info).__name__,
                "message": str(exc_info),
                "stacktrace": "".join(
                    traceback.format_exception(type(exc_info), exc_info, exc_info.__traceback__)
                )
            }

        return log_entry

    def _emit(self, level: str, log_entry: Dict[str, Any]) -> None:
        # depth=2 attributes the record to the caller of debug()/info()/...
        self._sink.opt(depth=2).log(
            level,
            "{}",
            json.dumps(log_entry, default=str, ensure_ascii=False),
        )

    def debug(self, event: str, message: str = None, extra: Dict = None, **kwargs):
        """Log debug message"""
        self._emit("DEBUG", self._format_log("DEBUG", event, message, extra))

    def info(self, event: str, message: str = None, extra: Dict = None, **kwargs):
        """Log info message"""
        self._emit("INFO", self._format_log("INFO", event, message, extra))

    def warning(self, event: str, message: str = None, extra: Dict = None, **kwargs):
        """Log warning message"""
        self._emit("WARNING", self._format_log("WARNING", event, message, extra))

    def error(
        self,
        event: str,
        message: str = None,
        extra: Dict = None,
        exc_info: BaseException = None,
        **kwargs
    ):
        """Log error message"""
        self._emit("ERROR", self._format_log("ERROR", event, message, extra, exc_info))

    def critical(
        self,
        event: str,
        message: str = None,
        extra: Dict = None,
        exc_info: BaseException = None,
        **kwargs
    ):
        """Log critical message"""
        self._emit("CRITICAL", self._format_log("CRITICAL", event, message, extra, exc_info))

    def performance(
        self,
        event: str,
        duration_ms: float,
        extra: Dict = None
    ):
        """Log performance metric"""
        perf_data = {
            "performance": {
                "duration_ms": duration_ms,
                "duration_seconds": duration_ms / 1000
            }
        }

        if extra:
            perf_data.update(extra)

        log_entry = self._format_log("INFO", event, f"Performance: {duration_ms:.3f}ms", perf_data)
        self._emit("INFO", log_entry)


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger for module.

    Usage:
        logger = get_logger(__name__)
        logger.info("flow.compile.started", extra={"screens": 3})
    """
    return StructuredLogger(name)


class log_context:
    """
    Context manager for correlation tracking.

    Usage:
        with log_context(correlation_id="abc", flow_id="123"):
            logger.info("flow.validation.started")

    Extra keyword arguments are attached to every record logged inside the
    block and merged with any enclosing context.
    """

    def __init__(
        self,
        correlation_id: str = None,
        flow_id: str = None,
        **kwargs
    ):
        self.correlation_id = correlation_id
        self.flow_id = flow_id
        self.extra_context = kwargs
        self._tokens = []

    def __enter__(self):
        """Set context variables"""
        if self.correlation_id:
            self._tokens.append((correlation_id_var, correlation_id_var.set(self.correlation_id)))
        if self.flow_id:
            self._tokens.append((flow_id_var, flow_id_var.set(self.flow_id)))
        if self.extra_context:
            merged = {**extra_context_var.get(), **self.extra_context}
            self._tokens.append((extra_context_var, extra_context_var.set(merged)))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Restore previous context"""
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens = []


def trace_sync(event_prefix: str):
    """
    Decorator for tracing sync functions.

    Usage:
        @trace_sync("flow.compile")
        def compile(screens):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)

            start_time = datetime.now(timezone.utc)

            logger.debug(
                f"{event_prefix}.started",
                extra={"function": func.__name__}
            )

            try:
                result = func(*args, **kwargs)

                duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

                logger.performance(
                    f"{event_prefix}.completed",
                    duration_ms=duration_ms,
                    extra={
                        "function": func.__name__,
                        "success": True
                    }
                )

                return result

            except Exception as e:
                duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

                logger.error(
                    f"{event_prefix}.failed",
                    extra={
                        "function": func.__name__,
                        "duration_ms": duration_ms,
                        "error_type": type(e).__name__
                    },
                    exc_info=e
                )
                raise

        return wrapper
    return decorator


"""
LOG EVENT NAMING CONVENTIONS:

Use dot notation: <domain>.<action>.<result>

Examples:
- http.request.received
- http.request.completed
- flow.validation.passed
- flow.validation.failed
- flow.compile.completed
- flow.screen.rewritten
"""
