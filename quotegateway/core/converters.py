"""
Type Conversion Utilities.

Total conversion functions for upstream values. Alpha Vantage returns
every number as a string ("175.4300", "1.2400%", "None", "-"), so every
field passes through one of these before it reaches a model.

Usage:
    from quotegateway.core import PercentageConverter, ValueConverter

    price = ValueConverter.to_float(quote.get("05. price"), default=0.0)
    change = PercentageConverter.to_float(quote.get("10. change percent"), default=0.0)
"""

from decimal import Decimal
from typing import Any

_EMPTY_MARKERS = ("", "-", "--", "None", "none", "null")


class ValueConverter:
    """
    Unified value conversion utilities.

    Provides static methods for safe type conversion with
    configurable default values.
    """

    @staticmethod
    def to_float(
        value: Any,
        default: float | None = None,
        precision: int | None = None,
    ) -> float | None:
        """
        Safely convert value to float.

        Args:
            value: Input value to convert
            default: Default value if conversion fails
            precision: Optional decimal precision to round to

        Returns:
            Converted float or default value

        Examples:
            >>> ValueConverter.to_float("123.45")
            123.45
            >>> ValueConverter.to_float("invalid", default=0.0)
            0.0
            >>> ValueConverter.to_float("1.24%")
            1.24
        """
        if value is None or isinstance(value, bool):
            return default

        if isinstance(value, float):
            result = value
        elif isinstance(value, (int, Decimal)):
            result = float(value)
        elif isinstance(value, str):
            cleaned = value.strip().replace(",", "").replace("%", "")
            if cleaned in _EMPTY_MARKERS:
                return default
            try:
                result = float(cleaned)
            except ValueError:
                return default
        else:
            return default

        if result != result or result in (float("inf"), float("-inf")):
            return default

        if precision is not None:
            result = round(result, precision)

        return result

    @staticmethod
    def to_int(
        value: Any,
        default: int | None = None,
    ) -> int | None:
        """
        Safely convert value to integer.

        Float strings are truncated ("123.9" -> 123).
        """
        if value is None or isinstance(value, bool):
            return default

        if isinstance(value, int):
            return value

        if isinstance(value, float):
            if value != value or value in (float("inf"), float("-inf")):
                return default
            return int(value)

        if isinstance(value, str):
            cleaned = value.strip().replace(",", "")
            if cleaned in _EMPTY_MARKERS:
                return default
            try:
                if "." in cleaned or "e" in cleaned.lower():
                    return int(float(cleaned))
                return int(cleaned)
            except (ValueError, OverflowError):
                return default

        return default

    @staticmethod
    def to_str(
        value: Any,
        default: str | None = None,
        strip: bool = True,
    ) -> str | None:
        """
        Safely convert value to string.

        Upstream sends the literal "None" for unknown text fields; that is
        treated as missing.
        """
        if value is None:
            return default

        result = value if isinstance(value, str) else str(value)

        if strip:
            result = result.strip()

        if result in _EMPTY_MARKERS:
            return default

        return result


class PercentageConverter:
    """Percentage strings as reported upstream, e.g. "1.2400%"."""

    @staticmethod
    def to_float(value: Any, default: float | None = None) -> float | None:
        """Strip the trailing "%" and parse; "1.24%" -> 1.24."""
        if isinstance(value, str):
            value = value.strip().rstrip("%")
        return ValueConverter.to_float(value, default=default)
