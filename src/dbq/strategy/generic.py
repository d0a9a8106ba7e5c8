"""
Strategy for DB-API drivers without a dedicated implementation.

Uses ``type_code`` as the reported type name when the driver supplies a
string there; any other type code leaves the column to the text fallback.
"""
from typing import Any

from dbq.adapters.column_info import Column
from dbq.strategy.base import DatabaseStrategy, register_strategy


@register_strategy('generic')
class GenericStrategy(DatabaseStrategy):
    """Column description straight from ``cursor.description``.
    """

    @property
    def dialect_name(self) -> str:
        return 'generic'

    def describe_column(self, description_item: Any, values: list[Any]) -> Column:
        type_code = description_item[1] if len(description_item) > 1 else None
        type_name = type_code if isinstance(type_code, str) else None
        internal_size = description_item[3] if len(description_item) > 3 else None
        return Column(
            name=description_item[0],
            type_name=type_name,
            nullable=self._null_ok(description_item),
            scan_type=self._scan_type(type_name, internal_size),
            type_code=type_code,
            internal_size=internal_size,
        )
