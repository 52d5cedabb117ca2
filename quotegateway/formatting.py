"""
Display formatters for prices, volumes, market caps and percentages.

All functions are total: any real number yields a string.
"""

_MARKET_CAP_UNITS = ((1e12, "T"), (1e9, "B"), (1e6, "M"))
_VOLUME_UNITS = ((1e9, "B"), (1e6, "M"), (1e3, "K"))


def _group(value: float) -> str:
    """Comma-grouped number with at most three fraction digits."""
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.3f}".rstrip("0").rstrip(".")
    try:
        return f"{int(value):,}"
    except (OverflowError, ValueError):
        return str(value)


def _bucket(value: float, units: tuple[tuple[float, str], ...]) -> str:
    for threshold, suffix in units:
        if value >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    return _group(value)


def format_market_cap(market_cap: float) -> str:
    """
    >>> format_market_cap(2_750_000_000_000)
    '$2.75T'
    >>> format_market_cap(950_000)
    '$950,000'
    """
    return f"${_bucket(market_cap, _MARKET_CAP_UNITS)}"


def format_volume(volume: float) -> str:
    """
    >>> format_volume(45_678_900)
    '45.68M'
    """
    return _bucket(volume, _VOLUME_UNITS)


def format_price(price: float) -> str:
    return f"${price:.2f}"


def format_percentage(percentage: float) -> str:
    """Two decimals with an explicit "+" for values >= 0."""
    if percentage == 0:
        percentage = 0.0
    sign = "+" if percentage >= 0 else ""
    return f"{sign}{percentage:.2f}%"
