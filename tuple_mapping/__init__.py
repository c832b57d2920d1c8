"""
tuple_mapping -- populate typed objects from positional rows.

Mark fields with the index of their value in a row (a SQL result row, a CSV
record, an RPC tuple), then let the engine build the object:

    @dataclass(frozen=True)
    class Invoice:
        number: Annotated[str, TupleColumn(0)]
        issued: Annotated[date, TupleColumn(2)]

    map_to_value_type(("INV-1", "ignored", date(2024, 1, 1)), Invoice)
"""

from tuple_mapping.column import MappedField, TupleColumn, column, mapped_fields
from tuple_mapping.config import MappingConfig, load_config
from tuple_mapping.engine import map_rows, map_to_object, map_to_value_type
from tuple_mapping.exceptions import (
    ConfigurationError,
    InitializerAccessError,
    InitializerInvocationError,
    InstantiationError,
    NoMatchingInitializerError,
    PositionOutOfBoundsError,
    TupleMappingError,
)

__version__ = "0.1.0"

__all__ = [
    "TupleColumn",
    "MappedField",
    "column",
    "mapped_fields",
    "MappingConfig",
    "load_config",
    "map_to_value_type",
    "map_to_object",
    "map_rows",
    "TupleMappingError",
    "ConfigurationError",
    "NoMatchingInitializerError",
    "InitializerAccessError",
    "InstantiationError",
    "PositionOutOfBoundsError",
    "InitializerInvocationError",
]
