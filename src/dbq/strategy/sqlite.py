"""
SQLite-specific strategy implementation.

sqlite3 reports only column names for a result. SQLite types belong to
values, not columns, so the reported type of a result column is the storage
class shared by its non-NULL values, and ``NULL`` when every value is NULL.
A column mixing INTEGER and REAL values is REAL; any other mix is TEXT.
"""
import logging
from typing import Any

from dbq.adapters.column_info import Column
from dbq.strategy.base import DatabaseStrategy, register_strategy

logger = logging.getLogger(__name__)

STORAGE_CLASSES: dict[type, str] = {
    int: 'INTEGER',
    float: 'REAL',
    str: 'TEXT',
    bytes: 'BLOB',
}


def storage_class(values: list[Any]) -> str:
    """Get the storage class name covering every non-NULL value.

    >>> storage_class([None, 3, 4])
    'INTEGER'
    >>> storage_class([1, 2.5])
    'REAL'
    >>> storage_class([1, 'x'])
    'TEXT'
    >>> storage_class([None, None])
    'NULL'
    >>> storage_class([])
    'NULL'
    """
    classes = {STORAGE_CLASSES.get(type(value), 'TEXT')
               for value in values if value is not None}
    if not classes:
        return 'NULL'
    if len(classes) == 1:
        return classes.pop()
    if classes == {'INTEGER', 'REAL'}:
        return 'REAL'
    return 'TEXT'


@register_strategy('sqlite')
class SQLiteStrategy(DatabaseStrategy):
    """SQLite column description.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for SQLite."""
        return 'sqlite'

    def describe_column(self, description_item: Any, values: list[Any]) -> Column:
        """Build a Column from a sqlite3 description tuple.
        """
        type_name = storage_class(values)
        logger.debug(f'Column {description_item[0]!r} reported as {type_name}')
        return Column(
            name=description_item[0],
            type_name=type_name,
            nullable=self._null_ok(description_item),
        )
