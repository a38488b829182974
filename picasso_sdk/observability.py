"""Cloud-agnostic logging and tracing with OpenTelemetry."""
import inspect
import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Optional, Dict, Any

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from .config import Config


class StructuredLogger:
    """Cloud-agnostic structured logger with JSON output."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = self._setup_logger()

    def _setup_logger(self):
        """Configure structured JSON logger."""
        logger = logging.getLogger(self.service_name)
        logger.setLevel(logging.DEBUG if Config.LOCAL_DEV else logging.INFO)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JsonFormatter())
            logger.addHandler(handler)
        return logger

    def _get_trace_context(self) -> Dict[str, str]:
        """Get current trace context from OpenTelemetry."""
        span = trace.get_current_span()
        if span and span.is_recording():
            span_context = span.get_span_context()
            return {
                "trace_id": format(span_context.trace_id, '032x'),
                "span_id": format(span_context.span_id, '016x')
            }
        return {}

    def _build_log_entry(self, message: str, level: str, correlation_id: Optional[str] = None, **extra) -> Dict[str, Any]:
        """Build structured log entry with trace context."""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "severity": level,
            "service": self.service_name,
            "message": message,
        }

        entry.update(self._get_trace_context())

        if correlation_id:
            entry["correlation_id"] = correlation_id

        entry.update(extra)
        return entry

    def _emit(self, level: int, entry: Dict[str, Any]):
        self.logger.log(level, json.dumps(entry, default=str))

    def info(self, message: str, **kwargs):
        """Log INFO level."""
        self._emit(logging.INFO, self._build_log_entry(message, "INFO", **kwargs))

    def warning(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log WARNING level."""
        if error:
            kwargs["error"] = {"type": type(error).__name__, "message": str(error)}
        self._emit(logging.WARNING, self._build_log_entry(message, "WARNING", **kwargs))

    def error(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log ERROR level with exception details."""
        if error:
            kwargs["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "stacktrace": "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                )
            }
        self._emit(logging.ERROR, self._build_log_entry(message, "ERROR", **kwargs))

    def debug(self, message: str, **kwargs):
        """Log DEBUG level."""
        self._emit(logging.DEBUG, self._build_log_entry(message, "DEBUG", **kwargs))


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        """Format log record as JSON if not already formatted."""
        if isinstance(record.msg, str) and record.msg.startswith('{'):
            return record.msg

        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "severity": record.levelname,
            "message": record.getMessage(),
        }
        return json.dumps(log_obj)


_tracer_provider: Optional[TracerProvider] = None


def setup_tracing(service_name: str, environment: str, app=None):
    """Install the tracer provider once per process and instrument clients.

    Spans go to Google Cloud Trace unless running in local dev.
    """
    global _tracer_provider
    log = logging.getLogger(service_name)

    if _tracer_provider is None:
        _tracer_provider = TracerProvider(resource=Resource.create({
            "service.name": service_name,
            "service.namespace": "discord-bot",
            "deployment.environment": environment,
        }))
        if not Config.LOCAL_DEV:
            try:
                from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
                _tracer_provider.add_span_processor(BatchSpanProcessor(CloudTraceSpanExporter()))
            except Exception as e:
                log.warning("Could not setup Cloud Trace exporter: %s", e)
        trace.set_tracer_provider(_tracer_provider)
        HTTPXClientInstrumentor().instrument()

    if app is not None:
        FlaskInstrumentor().instrument_app(app)

    return trace.get_tracer(service_name)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(service_name: str) -> StructuredLogger:
    """Return the structured logger for a service, creating it once."""
    if service_name not in _loggers:
        _loggers[service_name] = StructuredLogger(service_name)
    return _loggers[service_name]


def init_observability(service_name: str, app=None, environment: str = None):
    """Initialize logging and tracing for a service.

    Args:
        service_name: Name of the service
        app: Flask app instance (optional)
        environment: Environment name (defaults to Config.ENVIRONMENT)

    Returns:
        tuple: (logger, tracer)
    """
    if environment is None:
        environment = Config.ENVIRONMENT

    logger = get_logger(service_name)
    tracer = setup_tracing(service_name, environment, app)

    logger.info("Observability initialized", service=service_name, environment=environment)

    return logger, tracer


def traced_function(operation_name: Optional[str] = None):
    """Decorator to trace a function or coroutine with OpenTelemetry.

    Usage:
        @traced_function("my_operation")
        async def my_function():
            ...
    """
    def decorator(func):
        op_name = operation_name or func.__name__

        def _start(span):
            span.set_attribute("function.name", func.__name__)
            span.set_attribute("function.module", func.__module__)

        def _fail(span, e):
            span.set_attribute("function.status", "error")
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.message", str(e))
            span.record_exception(e)

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                tracer = trace.get_tracer(__name__)
                with tracer.start_as_current_span(op_name) as span:
                    _start(span)
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _fail(span, e)
                        raise
                    span.set_attribute("function.status", "success")
                    return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(op_name) as span:
                _start(span)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _fail(span, e)
                    raise
                span.set_attribute("function.status", "success")
                return result

        return wrapper
    return decorator


def get_correlation_id(request=None) -> str:
    """Get or generate correlation ID from request.

    Checks for correlation ID in:
    1. X-Correlation-ID header
    2. X-Request-ID header
    3. Generates new UUID if not found
    """
    if request is not None:
        return (
            request.headers.get('X-Correlation-ID') or
            request.headers.get('X-Request-ID') or
            str(uuid.uuid4())
        )
    return str(uuid.uuid4())
