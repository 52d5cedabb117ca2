"""
Alpha Vantage field mappings.

Upstream keys are verbose and numbered ("05. price", "2. name"); these
tables translate them into model fields. Every rule carries the default
used when a key is missing or does not parse, so one bad field never
sinks a whole record.
"""

from quotegateway.core.field_mapping import FieldMapping, FieldType
from quotegateway.models import NOT_AVAILABLE

SEARCH_HIT_MAPPING = (
    FieldMapping(data_type="search_hit")
    .add_rule("1. symbol", "symbol", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("2. name", "name", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("3. type", "type", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("4. region", "region", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("8. currency", "currency", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("9. matchScore", "match_score", FieldType.FLOAT, default=0.0)
)

QUOTE_MAPPING = (
    FieldMapping(data_type="global_quote")
    .add_rule("01. symbol", "symbol", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("02. open", "open", FieldType.FLOAT, default=0.0)
    .add_rule("03. high", "high", FieldType.FLOAT, default=0.0)
    .add_rule("04. low", "low", FieldType.FLOAT, default=0.0)
    .add_rule("05. price", "price", FieldType.FLOAT, default=0.0)
    .add_rule("06. volume", "volume", FieldType.INTEGER, default=0)
    .add_rule("07. latest trading day", "last_updated", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("08. previous close", "previous_close", FieldType.FLOAT, default=0.0)
    .add_rule("09. change", "change", FieldType.FLOAT, default=0.0)
    .add_rule("10. change percent", "change_percent", FieldType.PERCENTAGE, default=0.0)
)

# avg_volume is read from 50DayMovingAverage; OVERVIEW carries no average
# volume field.
OVERVIEW_MAPPING = (
    FieldMapping(data_type="overview")
    .add_rule("Symbol", "symbol", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("Name", "name", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("MarketCapitalization", "market_cap", FieldType.INTEGER, default=0)
    .add_rule("PERatio", "pe_ratio", FieldType.FLOAT, default=0.0)
    .add_rule("EPS", "eps", FieldType.FLOAT, default=0.0)
    .add_rule("DividendPerShare", "dividend", FieldType.FLOAT, default=0.0)
    .add_rule("DividendYield", "dividend_yield", FieldType.FLOAT, default=0.0)
    .add_rule("52WeekHigh", "high_52_week", FieldType.FLOAT, default=0.0)
    .add_rule("52WeekLow", "low_52_week", FieldType.FLOAT, default=0.0)
    .add_rule("50DayMovingAverage", "avg_volume", FieldType.INTEGER, default=0)
    .add_rule("Beta", "beta", FieldType.FLOAT, default=0.0)
    .add_rule("Sector", "sector", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("Industry", "industry", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("Description", "description", FieldType.STRING, default="No description available")
    .add_rule("FullTimeEmployees", "employees", FieldType.INTEGER, default=0)
    .add_rule("Address", "headquarters", FieldType.STRING, default=NOT_AVAILABLE)
    .add_rule("OfficialSite", "website", FieldType.STRING, default=NOT_AVAILABLE)
)

OHLCV_MAPPING = (
    FieldMapping(data_type="ohlcv")
    .add_rule("1. open", "open", FieldType.FLOAT, default=0.0)
    .add_rule("2. high", "high", FieldType.FLOAT, default=0.0)
    .add_rule("3. low", "low", FieldType.FLOAT, default=0.0)
    .add_rule("4. close", "close", FieldType.FLOAT, default=0.0)
    .add_rule("5. volume", "volume", FieldType.INTEGER, default=0)
)
