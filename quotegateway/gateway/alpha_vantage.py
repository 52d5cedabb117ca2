"""
Alpha Vantage quote gateway.

Translates symbol and query inputs into upstream requests, normalizes
the responses through the field mappings, and substitutes demo data
whenever the upstream is rate limited, reports an error, omits the
expected payload, or cannot be reached. No operation raises to its
caller.

Usage:
    from quotegateway import QuoteGateway

    async with QuoteGateway() as gateway:
        quote = await gateway.get_quote("AAPL")
        history = await gateway.get_history("AAPL", "weekly")
"""

from typing import Any

from quotegateway.core.config import GatewayConfig, load_config
from quotegateway.core.exceptions import (
    MissingFieldError,
    RateLimitedError,
    TransportError,
    UpstreamError,
    with_fallback,
)
from quotegateway.core.http_client import HttpClient, RateLimitPolicy, RetryPolicy
from quotegateway.gateway.demo_data import (
    DEMO_SEARCH_HITS,
    FALLBACK_SEARCH_HITS,
    demo_history,
    demo_profile,
    demo_quote,
    filter_hits,
)
from quotegateway.gateway.mappings import (
    OHLCV_MAPPING,
    OVERVIEW_MAPPING,
    QUOTE_MAPPING,
    SEARCH_HIT_MAPPING,
)
from quotegateway.logging_config import get_logger
from quotegateway.models import (
    NOT_AVAILABLE,
    HistoricalPoint,
    Interval,
    Profile,
    Quote,
    SearchHit,
)

logger = get_logger(__name__)

ERROR_MESSAGE_KEY = "Error Message"
RATE_LIMIT_KEYS = ("Note", "Information")


class QuoteGateway:
    """
    Stateless façade over the Alpha Vantage query endpoint.

    The gateway keeps no data between calls; its only members are the
    settings and the HTTP client, which can be injected for testing.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        client: HttpClient | None = None,
    ) -> None:
        self.config = config or load_config()
        settings = self.config.source

        self._api_key = settings.resolve_api_key()
        self._client = client or HttpClient(
            retry_policy=RetryPolicy(
                max_retries=settings.retry_count,
                base_delay=settings.retry_delay,
            ),
            rate_limit_policy=(
                RateLimitPolicy(requests_per_minute=settings.requests_per_minute)
                if settings.requests_per_minute
                else None
            ),
            default_timeout=settings.timeout,
        )

    async def __aenter__(self) -> "QuoteGateway":
        await self._client.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    async def _query(self, function: str, **params: Any) -> dict[str, Any]:
        """
        Issue one upstream request and return its JSON object.

        Raises:
            TransportError: timeout or a body that is not a JSON object
            UpstreamError: non-2xx status or an "Error Message" field
            RateLimitedError: a "Note" or "Information" field
        """
        url = self.config.source.base_url
        response = await self._client.get(
            url,
            params={"function": function, **params, "apikey": self._api_key},
        )

        if response.timed_out:
            raise TransportError(f"{function} request timed out", url=url)

        if not response.ok:
            raise UpstreamError(
                f"{function} request failed: {response.status} {response.reason}".rstrip(),
                status_code=response.status,
            )

        payload = response.json
        if not isinstance(payload, dict):
            raise TransportError(f"{function} returned a body that is not a JSON object", url=url)

        if payload.get(ERROR_MESSAGE_KEY):
            raise UpstreamError(str(payload[ERROR_MESSAGE_KEY]))

        for key in RATE_LIMIT_KEYS:
            if payload.get(key):
                raise RateLimitedError(str(payload[key]))

        return payload

    async def search(self, query: str | None) -> list[SearchHit]:
        """
        Search symbols and company names.

        An empty or missing query returns an empty list without a request.
        A rate-limited upstream yields the five demo hits matching the
        query; any other failure yields the three fallback hits matching it.
        """
        if not query:
            return []
        return await self._search(query)

    @with_fallback(lambda self, query: filter_hits(FALLBACK_SEARCH_HITS, query))
    async def _search(self, query: str) -> list[SearchHit]:
        try:
            payload = await self._query("SYMBOL_SEARCH", keywords=query)
        except RateLimitedError as e:
            logger.info(f"Symbol search rate limited, serving demo matches: {e.message}")
            return filter_hits(DEMO_SEARCH_HITS, query)

        matches = payload.get("bestMatches") or []
        return [
            SearchHit(**SEARCH_HIT_MAPPING.apply(match))
            for match in matches
            if isinstance(match, dict)
        ]

    @with_fallback(lambda self, symbol: demo_quote(symbol))
    async def get_quote(self, symbol: str) -> Quote:
        """Latest quote for *symbol*; the demo quote on any failure."""
        payload = await self._query("GLOBAL_QUOTE", symbol=symbol)

        quote = payload.get("Global Quote")
        if not quote or not isinstance(quote, dict):
            raise MissingFieldError("Invalid symbol or no data available", field="Global Quote")

        return Quote(**QUOTE_MAPPING.apply(quote))

    async def _demo_profile_with_fresh_quote(self, symbol: str) -> Profile:
        quote = await self.get_quote(symbol)
        return demo_profile(quote, symbol)

    @with_fallback(lambda self, symbol: self._demo_profile_with_fresh_quote(symbol))
    async def get_profile(self, symbol: str) -> Profile:
        """
        Quote figures plus company overview for *symbol*.

        The quote is fetched first. When the overview is rate limited,
        carries an "Error Message" or has no usable "Symbol", the demo
        profile is returned carrying that quote's figures. Unexpected
        failures fall back to the demo profile with a newly fetched quote.
        """
        quote = await self.get_quote(symbol)

        try:
            overview = await self._query("OVERVIEW", symbol=symbol)
        except RateLimitedError as e:
            logger.info(f"Overview for {symbol} rate limited, serving demo profile: {e.message}")
            return demo_profile(quote, symbol)
        except UpstreamError as e:
            # An HTTP status means the upstream itself failed
            if e.status_code is not None:
                raise
            logger.warning(f"Overview for {symbol} rejected, serving demo profile: {e.message}")
            return demo_profile(quote, symbol)

        fields = OVERVIEW_MAPPING.apply(overview)
        if fields["symbol"] == NOT_AVAILABLE:
            logger.warning(f"No overview data for {symbol}, serving demo profile")
            return demo_profile(quote, symbol)

        return Profile(**fields).with_quote(quote, symbol=fields["symbol"])

    @with_fallback(lambda self, symbol, interval=Interval.DAILY: demo_history())
    async def get_history(
        self,
        symbol: str,
        interval: Interval | str = Interval.DAILY,
    ) -> list[HistoricalPoint]:
        """
        OHLCV series for *symbol*, newest first, capped at the configured
        history limit (100 by default).

        Args:
            symbol: Ticker symbol
            interval: One of 1min, 5min, 15min, 30min, 60min, daily,
                      weekly, monthly
        """
        interval = Interval(interval)

        params: dict[str, Any] = {"symbol": symbol}
        if interval.is_intraday:
            params["interval"] = interval.value

        payload = await self._query(interval.function, **params)

        series = payload.get(interval.series_key)
        if not isinstance(series, dict):
            raise MissingFieldError(
                f"No {interval.value} series for {symbol}",
                field=interval.series_key,
            )

        points = [
            HistoricalPoint(
                date=date,
                **OHLCV_MAPPING.apply(values if isinstance(values, dict) else {}),
            )
            for date, values in series.items()
        ]
        points.sort(key=lambda point: point.date, reverse=True)

        return points[: self.config.source.history_limit]
