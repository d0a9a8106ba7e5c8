"""
Record decoding for row mappings.

Rows are converted into instances of a target type with ``msgspec.convert``.
Column names resolve to fields through a declared tag:

- msgspec Structs use ``msgspec.field(name='column_name')`` (or the
  Struct's ``rename`` option)
- dataclasses and attrs classes use the ``column`` key of the field
  metadata, e.g. ``dataclasses.field(metadata={'column': 'user_name'})``

Fields without a tag match the column with the same name.
"""
import dataclasses
import logging
from typing import Any

import msgspec

from dbq.exceptions import DecodeError, ProgrammingError
from dbq.options import DecoderConfig

logger = logging.getLogger(__name__)

TAG_NAME = 'column'


def is_msgspec_struct(target_type: Any) -> bool:
    return isinstance(target_type, type) and issubclass(target_type, msgspec.Struct)


def is_attrs_class(target_type: Any) -> bool:
    return hasattr(target_type, '__attrs_attrs__')


def column_renames(target_type: type) -> dict[str, str]:
    """Map tagged column names to field names for a dataclass or attrs class.
    """
    if dataclasses.is_dataclass(target_type):
        fields = dataclasses.fields(target_type)
    elif is_attrs_class(target_type):
        fields = target_type.__attrs_attrs__
    else:
        return {}
    return {
        f.metadata[TAG_NAME]: f.name
        for f in fields
        if f.metadata and TAG_NAME in f.metadata
    }


class RecordDecoder:
    """Decodes row mappings into a target record type.

    Built once per call and reused for every row. A required field with no
    matching column fails the decode with DecodeError instead of being left
    at a zero value.
    """

    def __init__(self, target_type: type, config: DecoderConfig | None = None) -> None:
        if not (is_msgspec_struct(target_type)
                or dataclasses.is_dataclass(target_type)
                or is_attrs_class(target_type)):
            raise ProgrammingError(
                f'target_type must be a msgspec Struct, dataclass or attrs class, '
                f'got {target_type!r}')
        self.target_type = target_type
        self.config = config or DecoderConfig()
        self._renames = column_renames(target_type)

    def _prepare(self, row: dict[str, Any]) -> dict[str, Any]:
        """Apply the decode hook and tag renames to a row mapping."""
        hook = self.config.decode_hook
        prepared = {}
        for name, value in row.items():
            if hook is not None:
                try:
                    value = hook(name, value)
                except Exception as e:
                    raise DecodeError(f'decode_hook failed for {name!r}: {e}') from e
            prepared[self._renames.get(name, name)] = value
        return prepared

    def decode(self, row: dict[str, Any]) -> Any:
        """Decode one row mapping into a new target instance.

        Raises
            DecodeError: If the hook fails or the row does not fit the type
        """
        prepared = self._prepare(row)
        try:
            return msgspec.convert(
                prepared,
                type=self.target_type,
                strict=not self.config.weakly_typed_input,
            )
        except (msgspec.ValidationError, TypeError, ValueError) as e:
            raise DecodeError(f'Cannot decode row into {self.target_type.__name__}: {e}') from e

    def decode_all(self, rows: list[dict[str, Any]]) -> list[Any]:
        """Decode every row, aborting on the first failure."""
        records = [self.decode(row) for row in rows]
        logger.debug(f'Decoded {len(records)} rows into {self.target_type.__name__}')
        return records
