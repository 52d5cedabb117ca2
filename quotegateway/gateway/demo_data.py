"""
Static substitute data served whenever live data is unavailable.
"""

from datetime import datetime, timezone

from quotegateway.models import HistoricalPoint, Profile, Quote, SearchHit

DEMO_PROFILE = Profile(
    symbol="AAPL",
    name="Apple Inc.",
    price=175.43,
    change=2.15,
    change_percent=1.24,
    volume=45678900,
    market_cap=2750000000000,
    pe_ratio=28.5,
    eps=6.15,
    dividend=0.96,
    dividend_yield=0.55,
    high_52_week=198.23,
    low_52_week=124.17,
    avg_volume=52000000,
    beta=1.29,
    sector="Technology",
    industry="Consumer Electronics",
    description=(
        "Apple Inc. designs, manufactures, and markets smartphones, personal computers, "
        "tablets, wearables, and accessories worldwide."
    ),
    employees=164000,
    founded="1976",
    headquarters="Cupertino, CA",
    website="https://www.apple.com",
)

DEMO_HISTORY: tuple[HistoricalPoint, ...] = (
    HistoricalPoint(date="2024-01-01", open=170.00, high=175.50, low=169.80, close=175.43, volume=45678900),
    HistoricalPoint(date="2024-01-02", open=175.43, high=178.20, low=174.10, close=177.89, volume=52341200),
    HistoricalPoint(date="2024-01-03", open=177.89, high=179.45, low=176.30, close=178.12, volume=48923400),
    HistoricalPoint(date="2024-01-04", open=178.12, high=180.67, low=177.55, close=179.34, volume=51234500),
    HistoricalPoint(date="2024-01-05", open=179.34, high=181.23, low=178.90, close=180.45, volume=47856300),
)

# Served when the upstream is rate limited.
DEMO_SEARCH_HITS: tuple[SearchHit, ...] = (
    SearchHit(symbol="AAPL", name="Apple Inc.", type="Equity", region="United States", currency="USD"),
    SearchHit(symbol="GOOGL", name="Alphabet Inc.", type="Equity", region="United States", currency="USD"),
    SearchHit(symbol="MSFT", name="Microsoft Corporation", type="Equity", region="United States", currency="USD"),
    SearchHit(symbol="TSLA", name="Tesla, Inc.", type="Equity", region="United States", currency="USD"),
    SearchHit(symbol="AMZN", name="Amazon.com, Inc.", type="Equity", region="United States", currency="USD"),
)

# Served on errors and transport failures.
FALLBACK_SEARCH_HITS: tuple[SearchHit, ...] = DEMO_SEARCH_HITS[:3]


def demo_quote(symbol: str) -> Quote:
    """Fixed demo figures for *symbol*, stamped with the current UTC time."""
    return Quote(
        symbol=str(symbol or "").upper(),
        price=175.43,
        change=2.15,
        change_percent=1.24,
        volume=45678900,
        last_updated=datetime.now(timezone.utc).isoformat(),
        open=170.00,
        high=175.50,
        low=169.80,
        previous_close=173.28,
    )


def demo_profile(quote: Quote, symbol: str) -> Profile:
    """The demo company profile carrying *quote*'s live figures."""
    return DEMO_PROFILE.with_quote(quote, symbol=str(symbol or "").upper() or quote.symbol)


def demo_history() -> list[HistoricalPoint]:
    return list(DEMO_HISTORY)


def filter_hits(hits: tuple[SearchHit, ...], query: str) -> list[SearchHit]:
    return [hit for hit in hits if hit.matches(query)]
