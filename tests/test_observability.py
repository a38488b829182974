"""Tests for structured logging and tracing helpers."""
import json
import logging

import pytest
from opentelemetry import trace

from picasso_sdk import observability
from picasso_sdk.config import Config
from picasso_sdk.observability import (
    get_correlation_id,
    get_logger,
    init_observability,
    setup_tracing,
    traced_function,
)


class TestStructuredLogger:
    def test_entries_are_json_with_context(self, caplog):
        logger = get_logger('picasso-test-logger')
        with caplog.at_level(logging.INFO, logger='picasso-test-logger'):
            logger.info("Processing", correlation_id='abc', interaction_id='123')

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry['severity'] == 'INFO'
        assert entry['service'] == 'picasso-test-logger'
        assert entry['correlation_id'] == 'abc'
        assert entry['interaction_id'] == '123'

    def test_error_includes_exception_details(self, caplog):
        logger = get_logger('picasso-test-logger')
        try:
            raise RuntimeError('kaboom')
        except RuntimeError as e:
            with caplog.at_level(logging.ERROR, logger='picasso-test-logger'):
                logger.error("Failed", error=e)

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry['error']['type'] == 'RuntimeError'
        assert 'kaboom' in entry['error']['stacktrace']

    def test_get_logger_is_cached(self):
        assert get_logger('picasso-test-logger') is get_logger('picasso-test-logger')


class TestTracedFunction:
    def test_sync_function(self):
        @traced_function("op")
        def add(a, b):
            return a + b

        assert add(1, 2) == 3

    @pytest.mark.asyncio
    async def test_async_function_reraises(self):
        @traced_function()
        async def fail():
            raise ValueError('bad')

        with pytest.raises(ValueError):
            await fail()


class TestCorrelationId:
    class _Request:
        def __init__(self, headers):
            self.headers = headers

    def test_prefers_correlation_header(self):
        request = self._Request({'X-Correlation-ID': 'a', 'X-Request-ID': 'b'})
        assert get_correlation_id(request) == 'a'

    def test_falls_back_to_request_id(self):
        assert get_correlation_id(self._Request({'X-Request-ID': 'b'})) == 'b'

    def test_generates_uuid(self):
        assert len(get_correlation_id()) == 36


class TestInitObservability:
    def test_provider_is_installed_once(self, monkeypatch):
        monkeypatch.setattr(Config, 'LOCAL_DEV', True)

        logger, tracer = init_observability('picasso-test-tracing')
        setup_tracing('picasso-test-tracing-again', 'test')

        assert logger is get_logger('picasso-test-tracing')
        assert tracer is not None
        assert observability._tracer_provider is not None
        assert trace.get_tracer_provider() is observability._tracer_provider
