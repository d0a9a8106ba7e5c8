"""
Type conversion for result cells (Database → Python direction).

Every cell is first reduced to its raw byte form (``to_raw``) and then
coerced according to the column's type class:

    raw cell + Column(type_name, nullable, scan_type) → Python value

Nullability is applied uniformly: nullable columns yield None for SQL NULL
and the coerced value otherwise, non-nullable columns yield the bare value.
SQL NULL in a non-nullable column is a broken schema contract and raises a
FatalError for every class except NULL, JSON and the text fallback.

Unparsable numeric, temporal and JSON text is handled by a ParsePolicy.
The default PERMISSIVE policy substitutes the zero value of the target
type; STRICT raises TypeConversionError instead.
"""
import datetime
import json
import logging
import re
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

import dateutil.parser
import dateutil.tz

from dbq.adapters.column_info import Column
from dbq.adapters.type_mapping import TypeClass
from dbq.exceptions import FatalError, NullValueError, TypeConversionError

logger = logging.getLogger(__name__)

ZERO_DATETIME = datetime.datetime(1, 1, 1, tzinfo=dateutil.tz.UTC)
ZERO_DATE = datetime.date.min
ZERO_TIME = datetime.time()

TRUE_STRINGS = frozenset({'true', 'TRUE', '1'})

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_SIGNED = re.compile(r'[+-]?[0-9]+')
_UNSIGNED = re.compile(r'[0-9]+')

_isoparser = dateutil.parser.isoparser()


class ParsePolicy(Enum):
    """How unparsable cell text is handled."""
    PERMISSIVE = 'permissive'
    STRICT = 'strict'


class _ParseFailure(Exception):
    """Raised by parse helpers, turned into a zero value or an error."""


def to_raw(value: Any) -> bytes | None:
    """Render a driver value as the raw bytes of its textual form.

    >>> to_raw(None) is None
    True
    >>> to_raw('abc')
    b'abc'
    >>> to_raw(True)
    b'true'
    >>> to_raw(datetime.date(2020, 1, 2))
    b'2020-01-02'
    >>> to_raw({'a': 1})
    b'{"a": 1}'
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        return value
    if isinstance(value, bytearray | memoryview):
        return bytes(value)
    if isinstance(value, str):
        return value.encode()
    if isinstance(value, bool):
        return b'true' if value else b'false'
    if isinstance(value, datetime.datetime | datetime.date | datetime.time):
        return value.isoformat().encode()
    if isinstance(value, dict | list):
        return json.dumps(value).encode()
    return str(value).encode()


def _text(raw: bytes) -> str:
    return raw.decode('utf-8', errors='replace')


def parse_float(text: str) -> float:
    """Parse base-10 float text."""
    try:
        return float(text)
    except ValueError as e:
        raise _ParseFailure(f'invalid float {text!r}') from e


def parse_signed(text: str) -> int:
    """Parse text as a signed 64-bit integer."""
    if not _SIGNED.fullmatch(text):
        raise _ParseFailure(f'invalid integer {text!r}')
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise _ParseFailure(f'integer {text!r} out of int64 range')
    return value


def parse_unsigned(text: str) -> int:
    """Parse text as an unsigned 64-bit integer."""
    if not _UNSIGNED.fullmatch(text):
        raise _ParseFailure(f'invalid unsigned integer {text!r}')
    value = int(text)
    if value > UINT64_MAX:
        raise _ParseFailure(f'integer {text!r} out of uint64 range')
    return value


def narrow(value: int, bits: int, signed: bool) -> int:
    """Truncate an integer to a two's complement width.

    >>> narrow(300, 8, False)
    44
    >>> narrow(200, 8, True)
    -56
    >>> narrow(-1, 32, True)
    -1
    """
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def parse_bool(text: str) -> bool:
    """Closed-world boolean: only true, TRUE and 1 are True."""
    return text in TRUE_STRINGS


def parse_datetime(text: str) -> datetime.datetime:
    """Parse an RFC 3339 / ISO 8601 date-time."""
    try:
        return dateutil.parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise _ParseFailure(f'invalid datetime {text!r}') from e


def parse_date(text: str) -> datetime.date:
    """Parse an ISO 8601 date."""
    try:
        return _isoparser.parse_isodate(text)
    except (ValueError, OverflowError) as e:
        raise _ParseFailure(f'invalid date {text!r}') from e


def parse_time(text: str) -> datetime.time:
    """Parse an ISO 8601 time of day."""
    try:
        return _isoparser.parse_isotime(text)
    except (ValueError, OverflowError) as e:
        raise _ParseFailure(f'invalid time {text!r}') from e


def parse_json(raw: bytes) -> Any:
    """Parse a JSON document into a value tree."""
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise _ParseFailure(f'invalid json {raw[:60]!r}') from e


def _parsed(column: Column, parse: Callable[[str], Any], text: str,
            zero: Any, policy: ParsePolicy) -> Any:
    """Run a parser, applying the policy on failure."""
    try:
        return parse(text)
    except _ParseFailure as e:
        if policy is ParsePolicy.STRICT:
            raise TypeConversionError(f'Column {column.name!r}: {e}') from e
        logger.debug(f'Column {column.name!r}: {e}, using {zero!r}')
        return zero


def _convert_text(column, raw, policy):
    return _text(raw)


def _convert_float(column, raw, policy):
    return _parsed(column, parse_float, _text(raw), 0.0, policy)


def _convert_integer(column, raw, policy):
    bits, signed = column.integer_width
    parse = parse_signed if signed else parse_unsigned
    value = _parsed(column, parse, _text(raw), 0, policy)
    return narrow(value, bits, signed)


def _convert_boolean(column, raw, policy):
    return parse_bool(_text(raw))


def _convert_datetime(column, raw, policy):
    return _parsed(column, parse_datetime, _text(raw), ZERO_DATETIME, policy)


def _convert_date(column, raw, policy):
    return _parsed(column, parse_date, _text(raw), ZERO_DATE, policy)


def _convert_time(column, raw, policy):
    return _parsed(column, parse_time, _text(raw), ZERO_TIME, policy)


def _convert_json(column, raw, policy):
    try:
        return parse_json(raw)
    except _ParseFailure as e:
        if policy is ParsePolicy.STRICT:
            raise TypeConversionError(f'Column {column.name!r}: {e}') from e
        logger.debug(f'Column {column.name!r}: {e}, using None')
        return None


_CONVERTERS: dict[TypeClass, Callable[[Column, bytes, ParsePolicy], Any]] = {
    TypeClass.TEXT: _convert_text,
    TypeClass.FLOAT: _convert_float,
    TypeClass.INTEGER: _convert_integer,
    TypeClass.BOOLEAN: _convert_boolean,
    TypeClass.DATETIME: _convert_datetime,
    TypeClass.DATE: _convert_date,
    TypeClass.TIME: _convert_time,
    TypeClass.JSON: _convert_json,
    TypeClass.FALLBACK: _convert_text,
}

# Classes whose NULL cells are None even on non-nullable columns
_NULL_TOLERANT = frozenset({TypeClass.NULL, TypeClass.JSON, TypeClass.FALLBACK})


def convert_value(column: Column, raw: bytes | None,
                  policy: ParsePolicy = ParsePolicy.PERMISSIVE) -> Any:
    """Coerce one raw cell according to its column.

    >>> convert_value(Column('n', 'INT4', nullable=False), b'1')
    1
    >>> convert_value(Column('n', 'VARCHAR', nullable=True), None) is None
    True
    >>> convert_value(Column('n', 'FLOAT8', nullable=False), b'oops')
    0.0
    """
    type_class = column.type_class
    if type_class is TypeClass.NULL:
        return None

    if raw is None:
        if column.nullable or type_class in _NULL_TOLERANT:
            return None
        raise FatalError(NullValueError(
            f'Column {column.name!r} ({column.type_name}) is not nullable but returned NULL'))

    return _CONVERTERS[type_class](column, raw, policy)


def convert_cell(column: Column, value: Any,
                 policy: ParsePolicy = ParsePolicy.PERMISSIVE) -> Any:
    """Coerce one driver value according to its column.

    Values the driver already parsed for a decoded column are kept as they
    are; raw bytes and NULL still go through ``convert_value``.

    >>> convert_cell(Column('j', 'JSONB', decoded=True), 'hello')
    'hello'
    >>> convert_cell(Column('j', 'JSONB'), b'"hello"')
    'hello'
    """
    if (column.decoded and value is not None
            and not isinstance(value, bytes | bytearray | memoryview)):
        return value
    return convert_value(column, to_raw(value), policy)


def convert_row(columns: Sequence[Column], values: Sequence[Any],
                policy: ParsePolicy = ParsePolicy.PERMISSIVE) -> dict[str, Any]:
    """Coerce one driver row into a column name → value mapping."""
    return {
        column.name: convert_cell(column, value, policy)
        for column, value in zip(columns, values, strict=True)
    }


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
