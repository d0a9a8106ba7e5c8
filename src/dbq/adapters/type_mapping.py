"""
Type resolution for reported column types.

Maps the type name a driver reports for a column (``VARCHAR``, ``INT4``,
``TIMESTAMPTZ`` ...) onto a closed set of type classes. Each class has one
coercion routine in :mod:`dbq.adapters.type_conversion`. Names that are not
in the table resolve to :attr:`TypeClass.FALLBACK`.

The module focuses solely on type identification, not conversion.
"""
import logging
from enum import Enum

from dbq.config.type_mapping import TypeMappingConfig

logger = logging.getLogger(__name__)


class TypeClass(Enum):
    """Supported classes of reported column types."""
    NULL = 'null'
    TEXT = 'text'
    FLOAT = 'float'
    INTEGER = 'integer'
    BOOLEAN = 'boolean'
    DATETIME = 'datetime'
    DATE = 'date'
    TIME = 'time'
    JSON = 'json'
    FALLBACK = 'fallback'


TYPE_CLASSES: dict[str, TypeClass] = {}
for v in ['NULL']:
    TYPE_CLASSES[v] = TypeClass.NULL
for v in [
    'CHAR',
    'VARCHAR',
    'TEXT',
    'NVARCHAR',
    'MEDIUMTEXT',
    'LONGTEXT',
    'BPCHAR',
    'NAME',
]:
    TYPE_CLASSES[v] = TypeClass.TEXT
for v in [
    'FLOAT',
    'DOUBLE',
    'DECIMAL',
    'NUMERIC',
    'FLOAT4',
    'FLOAT8',
    'REAL',
]:
    TYPE_CLASSES[v] = TypeClass.FLOAT
for v in [
    'INT',
    'TINYINT',
    'INT2',
    'INT4',
    'INT8',
    'MEDIUMINT',
    'SMALLINT',
    'BIGINT',
    'INTEGER',
]:
    TYPE_CLASSES[v] = TypeClass.INTEGER
for v in ['BOOL', 'BOOLEAN']:
    TYPE_CLASSES[v] = TypeClass.BOOLEAN
for v in ['DATETIME', 'TIMESTAMP', 'TIMESTAMPTZ']:
    TYPE_CLASSES[v] = TypeClass.DATETIME
for v in ['DATE']:
    TYPE_CLASSES[v] = TypeClass.DATE
for v in ['TIME']:
    TYPE_CLASSES[v] = TypeClass.TIME
for v in ['JSON', 'JSONB']:
    TYPE_CLASSES[v] = TypeClass.JSON

# (bits, signed) for each native width hint
INTEGER_WIDTHS: dict[str, tuple[int, bool]] = {
    'int': (64, True),
    'int8': (8, True),
    'int16': (16, True),
    'int32': (32, True),
    'int64': (64, True),
    'uint': (64, False),
    'uint8': (8, False),
    'uint16': (16, False),
    'uint32': (32, False),
    'uint64': (64, False),
}
DEFAULT_INTEGER_WIDTH = INTEGER_WIDTHS['int64']


def resolve_type_class(type_name: str | None) -> TypeClass:
    """Resolve a reported type name to its type class.

    Built-in names win over configured aliases, and anything unknown falls
    back to text handling.

    >>> resolve_type_class('int4')
    <TypeClass.INTEGER: 'integer'>
    >>> resolve_type_class('TIMESTAMPTZ')
    <TypeClass.DATETIME: 'datetime'>
    >>> resolve_type_class('GEOMETRY')
    <TypeClass.FALLBACK: 'fallback'>
    >>> resolve_type_class(None)
    <TypeClass.FALLBACK: 'fallback'>
    """
    if not type_name:
        return TypeClass.FALLBACK

    type_class = TYPE_CLASSES.get(type_name.upper())
    if type_class is not None:
        return type_class

    alias = TypeMappingConfig.get_instance().get_alias(type_name)
    if alias is not None:
        try:
            return TypeClass(alias)
        except ValueError:
            logger.warning(f'Ignoring alias {type_name!r} -> {alias!r}: unknown type class')

    return TypeClass.FALLBACK


def resolve_integer_width(scan_type: str | None) -> tuple[int, bool]:
    """Resolve a native width hint to (bits, signed).

    Missing or unrecognized hints resolve to signed 64-bit.

    >>> resolve_integer_width('uint32')
    (32, False)
    >>> resolve_integer_width(None)
    (64, True)
    >>> resolve_integer_width('float32')
    (64, True)
    """
    if not scan_type:
        return DEFAULT_INTEGER_WIDTH
    return INTEGER_WIDTHS.get(scan_type.lower(), DEFAULT_INTEGER_WIDTH)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
