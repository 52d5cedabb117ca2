"""
Field Mapping Tables.

Declarative conversion of upstream JSON objects into the keyword
arguments of a model. Each rule names the upstream key, the target field,
the conversion type and the value used when the key is missing or does
not parse.

Usage:
    from quotegateway.core import FieldMapping, FieldType

    mapping = (
        FieldMapping(data_type="quote")
        .add_rule("01. symbol", "symbol", FieldType.STRING, default="N/A")
        .add_rule("05. price", "price", FieldType.FLOAT, default=0.0)
    )

    fields = mapping.apply(api_response["Global Quote"])
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .converters import PercentageConverter, ValueConverter


class FieldType(str, Enum):
    """Field data types."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class FieldMappingRule:
    """
    Single field mapping rule.

    Attributes:
        source_field: Key in the upstream object
        target_field: Field name in the target model
        field_type: Data type for conversion
        default: Value used when the key is missing or unparseable
    """
    source_field: str
    target_field: str
    field_type: FieldType
    default: Any = None

    def apply(self, source_data: dict[str, Any]) -> tuple[str, Any]:
        """Apply mapping rule to source data."""
        value = source_data.get(self.source_field)

        if value is None:
            return self.target_field, self.default

        return self.target_field, self._convert_by_type(value)

    def _convert_by_type(self, value: Any) -> Any:
        if self.field_type == FieldType.STRING:
            return ValueConverter.to_str(value, default=self.default)
        elif self.field_type == FieldType.INTEGER:
            return ValueConverter.to_int(value, default=self.default)
        elif self.field_type == FieldType.FLOAT:
            return ValueConverter.to_float(value, default=self.default)
        elif self.field_type == FieldType.PERCENTAGE:
            return PercentageConverter.to_float(value, default=self.default)

        raise ValueError(f"Unsupported field type: {self.field_type}")


@dataclass
class FieldMapping:
    """
    Complete field mapping for one upstream payload shape.

    Attributes:
        data_type: Name of the payload shape
        rules: List of field mapping rules
    """
    data_type: str
    rules: list[FieldMappingRule] = field(default_factory=list)

    def add_rule(
        self,
        source_field: str,
        target_field: str,
        field_type: FieldType,
        default: Any = None,
    ) -> "FieldMapping":
        """Add a field mapping rule."""
        self.rules.append(
            FieldMappingRule(
                source_field=source_field,
                target_field=target_field,
                field_type=field_type,
                default=default,
            )
        )
        return self

    def apply(self, source_data: dict[str, Any]) -> dict[str, Any]:
        """Apply all mapping rules to source data."""
        result: dict[str, Any] = {}

        for rule in self.rules:
            target_field, value = rule.apply(source_data)
            result[target_field] = value

        return result
