"""
PostgreSQL-specific strategy implementation.

psycopg reports the type OID of every result column; the registry in
``psycopg.postgres.types`` turns it into the type name (``int4``,
``varchar``, ``timestamptz`` ...). psycopg parses json and jsonb cells
itself, so those columns are marked as already decoded.
"""
import logging
from typing import Any

from psycopg.postgres import types

from dbq.adapters.column_info import Column
from dbq.adapters.type_mapping import TypeClass, resolve_type_class
from dbq.strategy.base import DatabaseStrategy, register_strategy

logger = logging.getLogger(__name__)


def type_name_for_oid(oid: Any) -> str | None:
    """Get the PostgreSQL type name for a type OID.
    """
    info = types.get(oid) if oid is not None else None
    if info is None:
        logger.debug(f'Unknown PostgreSQL type oid {oid}')
        return None
    return info.name


@register_strategy('postgresql')
class PostgresStrategy(DatabaseStrategy):
    """PostgreSQL column description.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for PostgreSQL."""
        return 'postgresql'

    def describe_column(self, description_item: Any, values: list[Any]) -> Column:
        """Build a Column from a psycopg description item.
        """
        type_code = getattr(description_item, 'type_code', None)
        type_name = type_name_for_oid(type_code)
        internal_size = getattr(description_item, 'internal_size', None)
        return Column(
            name=getattr(description_item, 'name', None),
            type_name=type_name,
            nullable=self._null_ok(description_item),
            scan_type=self._scan_type(type_name, internal_size),
            type_code=type_code,
            internal_size=internal_size,
            decoded=resolve_type_class(type_name) is TypeClass.JSON,
        )
