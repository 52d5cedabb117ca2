"""
Tests for the error taxonomy and the with_fallback combinator.
"""

import logging

import pytest

from quotegateway.core.exceptions import (
    ErrorCategory,
    ErrorSeverity,
    MissingFieldError,
    QuoteGatewayError,
    RateLimitedError,
    TransportError,
    UpstreamError,
    with_fallback,
)


class TestErrorTaxonomy:
    """Tests for the exception hierarchy."""

    def test_upstream_error_carries_status_code(self):
        error = UpstreamError("Service Unavailable", status_code=503)

        assert error.status_code == 503
        assert error.category == ErrorCategory.UPSTREAM
        assert error.to_dict()["details"] == {"status_code": 503}

    def test_upstream_error_without_status_code(self):
        error = UpstreamError("Invalid API call")

        assert error.status_code is None
        assert error.details == {}

    def test_rate_limited_is_low_severity(self):
        error = RateLimitedError("5 calls per minute")

        assert error.severity == ErrorSeverity.LOW
        assert error.category == ErrorCategory.RATE_LIMITED

    def test_missing_field_records_field(self):
        error = MissingFieldError("no series", field="Time Series (Daily)")

        assert error.details["field"] == "Time Series (Daily)"

    def test_transport_error_to_dict(self):
        data = TransportError("timed out", url="https://example.com").to_dict()

        assert data["error_type"] == "TransportError"
        assert data["category"] == "transport"
        assert data["severity"] == "high"
        assert data["details"] == {"url": "https://example.com"}

    def test_all_errors_share_base(self):
        for error in (
            RateLimitedError("x"),
            UpstreamError("x"),
            MissingFieldError("x"),
            TransportError("x"),
        ):
            assert isinstance(error, QuoteGatewayError)


class TestWithFallback:
    """Tests for the with_fallback decorator."""

    def test_rejects_plain_functions(self):
        with pytest.raises(TypeError):
            @with_fallback(lambda x: -1)
            def double(x):
                return x * 2

    @pytest.mark.asyncio
    async def test_failure_uses_fallback_with_same_arguments(self):
        @with_fallback(lambda x: f"fallback:{x}")
        async def explode(x):
            raise UpstreamError("bad")

        assert await explode("AAPL") == "fallback:AAPL"

    @pytest.mark.asyncio
    async def test_async_failure_uses_fallback(self):
        @with_fallback(lambda symbol, interval="daily": [symbol, interval])
        async def explode(symbol, interval="daily"):
            raise KeyError("missing")

        assert await explode("AAPL") == ["AAPL", "daily"]
        assert await explode("AAPL", interval="weekly") == ["AAPL", "weekly"]

    @pytest.mark.asyncio
    async def test_async_fallback_is_awaited(self):
        async def produce(symbol):
            return symbol.upper()

        @with_fallback(produce)
        async def explode(symbol):
            raise TransportError("offline")

        assert await explode("msft") == "MSFT"

    @pytest.mark.asyncio
    async def test_async_success_passes_through(self):
        @with_fallback(lambda: None)
        async def fine():
            return 42

        assert await fine() == 42

    @pytest.mark.asyncio
    async def test_log_level_follows_severity(self, caplog):
        @with_fallback(lambda kind: None)
        async def explode(kind):
            raise kind("failure")

        with caplog.at_level(logging.DEBUG, logger="quotegateway.core.exceptions"):
            await explode(RateLimitedError)
            await explode(UpstreamError)
            await explode(TransportError)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.ERROR]

    @pytest.mark.asyncio
    async def test_foreign_exceptions_are_logged_as_transport(self, caplog):
        @with_fallback(lambda: None)
        async def explode():
            raise ValueError("unexpected")

        with caplog.at_level(logging.DEBUG, logger="quotegateway.core.exceptions"):
            await explode()

        assert "[transport]" in caplog.records[0].getMessage()
        assert caplog.records[0].error_details == {"original_type": "ValueError"}

    @pytest.mark.asyncio
    async def test_logging_can_be_disabled(self, caplog):
        @with_fallback(lambda: 0, log_errors=False)
        async def explode():
            raise UpstreamError("quiet")

        with caplog.at_level(logging.DEBUG, logger="quotegateway.core.exceptions"):
            assert await explode() == 0

        assert caplog.records == []
