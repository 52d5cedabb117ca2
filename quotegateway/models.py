"""
Value records returned by the gateway.

All records are frozen pydantic models. Field names are snake_case;
``to_api_dict()`` renders the camelCase keys UI consumers expect
(``changePercent``, ``lastUpdated``, ``marketCap``, ...).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "N/A"


class Interval(str, Enum):
    """Sampling granularity of a historical series."""

    MIN_1 = "1min"
    MIN_5 = "5min"
    MIN_15 = "15min"
    MIN_30 = "30min"
    MIN_60 = "60min"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def is_intraday(self) -> bool:
        return self.value.endswith("min")

    @property
    def function(self) -> str:
        """Upstream ``function`` parameter for this interval."""
        if self.is_intraday:
            return "TIME_SERIES_INTRADAY"
        return f"TIME_SERIES_{self.value.upper()}"

    @property
    def series_key(self) -> str:
        """Key holding the date -> OHLCV mapping in the upstream response."""
        if self.is_intraday:
            return f"Time Series ({self.value})"
        if self is Interval.DAILY:
            return "Time Series (Daily)"
        return f"{self.value.capitalize()} Time Series"


class GatewayModel(BaseModel):
    """Base for all gateway records."""

    model_config = ConfigDict(frozen=True)

    def to_api_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Quote(GatewayModel):
    """Latest trade summary for one symbol."""

    symbol: str
    price: float = 0.0
    change: float = 0.0
    change_percent: float = Field(default=0.0, serialization_alias="changePercent")
    volume: int = 0
    last_updated: str = Field(default=NOT_AVAILABLE, serialization_alias="lastUpdated")
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    previous_close: float = Field(default=0.0, serialization_alias="previousClose")


class Profile(GatewayModel):
    """Quote figures combined with company overview attributes."""

    symbol: str
    name: str = NOT_AVAILABLE
    price: float = 0.0
    change: float = 0.0
    change_percent: float = Field(default=0.0, serialization_alias="changePercent")
    volume: int = 0
    market_cap: int = Field(default=0, serialization_alias="marketCap")
    pe_ratio: float = Field(default=0.0, serialization_alias="peRatio")
    eps: float = 0.0
    dividend: float = 0.0
    dividend_yield: float = Field(default=0.0, serialization_alias="dividendYield")
    high_52_week: float = Field(default=0.0, serialization_alias="high52Week")
    low_52_week: float = Field(default=0.0, serialization_alias="low52Week")
    avg_volume: int = Field(default=0, serialization_alias="avgVolume")
    beta: float = 0.0
    sector: str = NOT_AVAILABLE
    industry: str = NOT_AVAILABLE
    description: str = "No description available"
    employees: int = 0
    founded: str = NOT_AVAILABLE
    headquarters: str = NOT_AVAILABLE
    website: str = NOT_AVAILABLE

    def with_quote(self, quote: Quote, symbol: str | None = None) -> "Profile":
        """Copy with the live quote figures overlaid."""
        return self.model_copy(
            update={
                "symbol": symbol or quote.symbol,
                "price": quote.price,
                "change": quote.change,
                "change_percent": quote.change_percent,
                "volume": quote.volume,
            }
        )


class HistoricalPoint(GatewayModel):
    """One OHLCV bar."""

    date: str
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: int = 0


class SearchHit(GatewayModel):
    """One symbol-search match."""

    symbol: str
    name: str = NOT_AVAILABLE
    type: str = NOT_AVAILABLE
    region: str = NOT_AVAILABLE
    currency: str = NOT_AVAILABLE
    match_score: float = Field(default=0.0, serialization_alias="matchScore")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against symbol or name."""
        needle = str(query).lower()
        return needle in self.symbol.lower() or needle in self.name.lower()
