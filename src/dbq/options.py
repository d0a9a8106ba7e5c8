from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dbq.adapters.type_conversion import ParsePolicy

__all__ = [
    'DecoderConfig',
    'Options',
    'SINGLE_RESULT',
    'PANIC',
]


@dataclass(frozen=True)
class DecoderConfig:
    """Decoder configuration

    - decode_hook: called as ``decode_hook(name, value)`` for every entry of
      a row mapping before conversion; its return value replaces the entry.
      An exception raised by the hook fails the decode.
    - weakly_typed_input: allow weak conversions during decoding (numeric
      strings to numbers, ``"true"``/``"1"`` to bool, ...).
    """
    decode_hook: Callable[[str, Any], Any] | None = None
    weakly_typed_input: bool = False


@dataclass(frozen=True)
class Options:
    """Options

    - target_type: record type each row is decoded into (msgspec Struct,
      dataclass or attrs class). Rows are plain dicts when unset.
    - decoder_config: DecoderConfig for the decoder, requires target_type
    - single_result: return the first row directly, or None when there are
      no rows, instead of a list
    - panic: raise FatalError instead of the recoverable error
    - strict_parse: raise TypeConversionError on unparsable numeric,
      temporal or JSON cells instead of using the zero value
    """
    target_type: type | None = None
    decoder_config: DecoderConfig | None = None
    single_result: bool = False
    panic: bool = False
    strict_parse: bool = False

    def __post_init__(self):
        if self.decoder_config is not None and self.target_type is None:
            raise ValueError('decoder_config requires target_type')
        if self.target_type is not None and not isinstance(self.target_type, type):
            raise ValueError(f'target_type must be a class, got {self.target_type!r}')

    @property
    def parse_policy(self) -> ParsePolicy:
        """ParsePolicy selected by strict_parse."""
        return ParsePolicy.STRICT if self.strict_parse else ParsePolicy.PERMISSIVE


SINGLE_RESULT = Options(single_result=True)
PANIC = Options(panic=True)
