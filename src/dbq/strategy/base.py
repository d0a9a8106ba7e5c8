"""
Base strategy interface for describing result columns.

Drivers disagree on what ``cursor.description`` carries: psycopg reports
type OIDs, sqlite3 reports nothing but names, other drivers may report type
names directly. Each strategy turns one driver's description into Column
descriptors so the coercion engine sees the same shape everywhere.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from dbq.adapters.column_info import Column
from dbq.adapters.type_mapping import TypeClass, resolve_type_class

logger = logging.getLogger(__name__)

# Registry of dialect name -> strategy class
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}

# Native width hint from an integer column's storage size in bytes
_SIZE_SCAN_TYPES = {1: 'int8', 2: 'int16', 4: 'int32', 8: 'int64'}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('postgresql')
        class PostgresStrategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DatabaseStrategy(ABC):
    """Base class for database-specific column description.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier."""

    def describe_columns(self, cursor: Any, rows: Sequence[Sequence[Any]]) -> list[Column]:
        """Build Column descriptors for the cursor's current result.

        Args:
            cursor: DB-API cursor after execute
            rows: Rows already fetched from the cursor

        Returns
            One Column per entry of ``cursor.description``
        """
        if cursor.description is None:
            return []
        return [
            self.describe_column(item, [row[i] for row in rows])
            for i, item in enumerate(cursor.description)
        ]

    @abstractmethod
    def describe_column(self, description_item: Any, values: list[Any]) -> Column:
        """Build a Column from one ``cursor.description`` entry.

        Args:
            description_item: One item from cursor.description
            values: The column's values, in row order
        """

    @staticmethod
    def _null_ok(description_item: Any) -> bool:
        """Read the DB-API null_ok flag, treating unknown as nullable."""
        null_ok = getattr(description_item, 'null_ok', None)
        if null_ok is None and isinstance(description_item, Sequence) and len(description_item) >= 7:
            null_ok = description_item[6]
        return True if null_ok is None else bool(null_ok)

    @staticmethod
    def _scan_type(type_name: str | None, internal_size: int | None) -> str | None:
        """Derive the native width hint of an integer column."""
        if resolve_type_class(type_name) is not TypeClass.INTEGER:
            return None
        return _SIZE_SCAN_TYPES.get(internal_size)
