"""
Adapters package.

- column_info: Column descriptors (reported type name, nullability, width hint)
- type_mapping: Reported type name → TypeClass resolution (no conversion)
- type_conversion: Raw cell → Python value coercion per TypeClass

Type conversion principles:
1. Cells are reduced to their raw textual form before coercion, so every
   driver goes through the same parsing rules, except for columns the
   driver has already decoded (psycopg json/jsonb)
2. Column nullability alone decides whether a value may be None
"""
from dbq.adapters.column_info import Column
from dbq.adapters.type_conversion import ParsePolicy, convert_cell, convert_row
from dbq.adapters.type_conversion import convert_value, to_raw
from dbq.adapters.type_mapping import TypeClass, resolve_integer_width
from dbq.adapters.type_mapping import resolve_type_class

__all__ = [
    'Column',
    'ParsePolicy',
    'TypeClass',
    'convert_cell',
    'convert_row',
    'convert_value',
    'resolve_integer_width',
    'resolve_type_class',
    'to_raw',
]
