"""
Exception Handling.

Error taxonomy for upstream failures and the ``with_fallback`` decorator
that turns any failure inside a gateway operation into a substitute
value:
- Custom exception hierarchy keyed by category and severity
- Severity-driven logging
- Result-or-fallback combinator for coroutine functions
"""

import asyncio
import functools
import inspect
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorSeverity(str, Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCategory(str, Enum):
    """Error categories."""
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"
    MISSING_FIELD = "missing_field"
    TRANSPORT = "transport"


class QuoteGatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UPSTREAM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class RateLimitedError(QuoteGatewayError):
    """The upstream answered with a rate-limit note instead of data."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.RATE_LIMITED,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class UpstreamError(QuoteGatewayError):
    """The upstream reported an error message or a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        if status_code:
            details["status_code"] = status_code

        super().__init__(
            message=message,
            category=ErrorCategory.UPSTREAM,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            **kwargs,
        )
        self.status_code = status_code


class MissingFieldError(QuoteGatewayError):
    """The response lacks the key an operation expected."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            category=ErrorCategory.MISSING_FIELD,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            **kwargs,
        )


class TransportError(QuoteGatewayError):
    """Network failure, timeout or an undecodable body."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        if url:
            details["url"] = url

        super().__init__(
            message=message,
            category=ErrorCategory.TRANSPORT,
            severity=ErrorSeverity.HIGH,
            details=details,
            **kwargs,
        )


def with_fallback(
    fallback: Callable[..., Any],
    log_errors: bool = True,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that substitutes ``fallback(*args, **kwargs)`` for any
    exception raised by the wrapped coroutine function.

    The fallback receives exactly the arguments of the failed call, so it
    can echo the requested symbol or filter by the query. The fallback may
    itself be a coroutine function; its result is awaited.

    Args:
        fallback: Producer of the substitute value
        log_errors: Whether to log the absorbed error

    Returns:
        Decorated coroutine function
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"with_fallback requires a coroutine function, got {func!r}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                _handle_error(_wrap(e), func.__qualname__, log_errors)

            result = fallback(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result

        return wrapper

    return decorator


def _wrap(error: Exception) -> QuoteGatewayError:
    if isinstance(error, QuoteGatewayError):
        return error
    return TransportError(
        message=str(error) or type(error).__name__,
        details={"original_type": type(error).__name__},
    )


def _handle_error(error: QuoteGatewayError, operation: str, log_errors: bool) -> None:
    """Log an absorbed error at a level matching its severity."""
    if not log_errors:
        return

    log_level = {
        ErrorSeverity.LOW: logging.INFO,
        ErrorSeverity.MEDIUM: logging.WARNING,
        ErrorSeverity.HIGH: logging.ERROR,
    }.get(error.severity, logging.ERROR)

    logger.log(
        log_level,
        f"[{error.category.value}] {operation}: {error.message}; using fallback data",
        extra={"error_details": error.details},
    )
