"""
quotegateway - Alpha Vantage quote client with deterministic fallbacks.

Fetches quotes, company profiles, price history and symbol search
results, substituting demo data whenever the upstream is unavailable,
and formats figures for display.
"""

from .formatting import (
    format_market_cap,
    format_percentage,
    format_price,
    format_volume,
)
from .gateway import QuoteGateway
from .models import HistoricalPoint, Interval, Profile, Quote, SearchHit

__version__ = "0.1.0"

__all__ = [
    "QuoteGateway",
    "Quote",
    "Profile",
    "HistoricalPoint",
    "SearchHit",
    "Interval",
    "format_market_cap",
    "format_volume",
    "format_price",
    "format_percentage",
]
