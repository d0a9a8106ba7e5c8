"""
Column information abstraction across database backends.
"""
import logging
from typing import Any

from dbq.adapters.type_mapping import TypeClass, resolve_integer_width
from dbq.adapters.type_mapping import resolve_type_class

logger = logging.getLogger(__name__)


class Column:
    """Representation of a result column as reported by the driver

    Technical implementation details:
    - Holds the reported type name (``VARCHAR``, ``INT4`` ...) rather than
      driver type codes, so coercion works the same for every backend
    - ``nullable`` decides whether coerced values may be None
    - ``scan_type`` is the native width hint for integer columns
      (``int8`` .. ``int64``, ``uint8`` .. ``uint64``, ``int``, ``uint``)
    - ``decoded`` marks columns whose driver already returns parsed values
      (psycopg loads json/jsonb into dicts, lists, strings ...)
    - Dialect strategies build instances from ``cursor.description``
    """

    def __init__(self,
                 name: str,
                 type_name: str | None = None,
                 nullable: bool = True,
                 scan_type: str | None = None,
                 type_code: Any = None,
                 internal_size: int | None = None,
                 decoded: bool = False):
        """
        Initialize column information

        Args:
            name: Display name of the column
            type_name: Database-reported type name
            nullable: Whether the column allows NULL values
            scan_type: Native width/signedness hint for integer columns
            type_code: Raw driver type code, kept for reference
            internal_size: Internal storage size (bytes)
            decoded: Whether the driver already parsed the values
        """
        self.name = name
        self.type_name = type_name.upper() if type_name else None
        self.nullable = nullable
        self.scan_type = scan_type
        self.type_code = type_code
        self.internal_size = internal_size
        self.decoded = decoded

    @property
    def type_class(self) -> TypeClass:
        """Type class used to coerce this column's values."""
        return resolve_type_class(self.type_name)

    @property
    def integer_width(self) -> tuple[int, bool]:
        """(bits, signed) used for integer columns."""
        return resolve_integer_width(self.scan_type)

    def __repr__(self) -> str:
        return (f'Column(name={self.name!r}, type_name={self.type_name!r}, '
                f'nullable={self.nullable!r}, scan_type={self.scan_type!r})')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.
        """
        return {
            'name': self.name,
            'type_name': self.type_name,
            'type_class': self.type_class.value,
            'nullable': self.nullable,
            'scan_type': self.scan_type,
            'internal_size': self.internal_size,
            'decoded': self.decoded,
            }
