"""
Core building blocks for the gateway.

- Type conversion utilities
- Field mapping tables
- HTTP client abstraction
- Error taxonomy and the fallback combinator
- Configuration
"""

from .converters import (
    ValueConverter,
    PercentageConverter,
)
from .field_mapping import (
    FieldMapping,
    FieldMappingRule,
    FieldType,
)
from .http_client import (
    HttpClient,
    HttpResponse,
    RetryPolicy,
    RateLimitPolicy,
    HttpClientError,
)
from .config import (
    GatewayConfig,
    SourceSettings,
    LoggingSettings,
    load_config,
)
from .exceptions import (
    QuoteGatewayError,
    RateLimitedError,
    UpstreamError,
    MissingFieldError,
    TransportError,
    ErrorSeverity,
    ErrorCategory,
    with_fallback,
)

__all__ = [
    "ValueConverter",
    "PercentageConverter",
    "FieldMapping",
    "FieldMappingRule",
    "FieldType",
    "HttpClient",
    "HttpResponse",
    "RetryPolicy",
    "RateLimitPolicy",
    "HttpClientError",
    "GatewayConfig",
    "SourceSettings",
    "LoggingSettings",
    "load_config",
    "QuoteGatewayError",
    "RateLimitedError",
    "UpstreamError",
    "MissingFieldError",
    "TransportError",
    "ErrorSeverity",
    "ErrorCategory",
    "with_fallback",
]
