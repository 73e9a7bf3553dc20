"""KnxValue — a raw KNX payload with typed accessors.

A value is built either from the bytes delivered for a group address or
from a native Python value, which is normalised to the bytes the bus would
carry. Accessors derive typed views from those bytes; nothing mutates
after construction.

    KnxValue(True).raw_data                  # b'\\x01'
    KnxValue(66.7).as_percent()              # Percent(knx_raw_value=170)
    KnxValue(b'\\xaa').get_typed_value("4/2/17")   # Percent → 66.7%
    KnxValue(b'\\x01').get_typed_value("4/3/17")   # True
"""

from __future__ import annotations

import enum
import logging
import math
from datetime import datetime
from typing import Any, Optional

from .address_types import AddressTypeMap, KnxDataType, default_map
from .codec import ConversionError, DPTCodec
from .percent import Percent

logger = logging.getLogger("knxvalue.dpt.value")

_TRUE_LITERALS = ("1", "true")
_FALSE_LITERALS = ("0", "false")


class ValueShape(enum.Enum):
    """Target shapes accepted by KnxValue.auto_convert()."""

    PERCENT = "percent"
    BYTE = "byte"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    TEXT = "text"


def _encode_native(value: Any) -> bytes:
    """Encode a native Python value to its canonical KNX bytes."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return DPTCodec.encode("1.001", value)

    if isinstance(value, Percent):
        return value.to_bytes()

    if isinstance(value, int):
        if 0 <= value <= 0xFF:
            return bytes([value])
        if 0 <= value <= 0xFFFF:
            return DPTCodec.encode("7.001", value)
        if -(2**31) <= value < 2**31:
            return DPTCodec.encode("13.001", value)
        raise ConversionError(f"Integer {value} does not fit a KNX datapoint")

    if isinstance(value, float):
        if math.isnan(value):
            raise ConversionError("Cannot encode NaN as a KNX percentage")
        return DPTCodec.encode("5.001", value)

    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_LITERALS:
            return DPTCodec.encode("1.001", True)
        if text in _FALSE_LITERALS:
            return DPTCodec.encode("1.001", False)
        try:
            number = float(text)
        except ValueError:
            raise ConversionError(f"Text '{value}' is neither a boolean nor a number") from None
        return _encode_native(number)

    raise ConversionError(f"Cannot convert {type(value).__name__} to KNX data")


class KnxValue:
    """A KNX value that converts to the type its context expects."""

    __slots__ = ("_raw_value", "_raw_data", "_timestamp")

    def __init__(self, raw_value: Any = None, raw_data: Optional[bytes] = None):
        if isinstance(raw_value, (bytes, bytearray)) and raw_data is None:
            raw_data, raw_value = raw_value, None

        if raw_data is not None:
            data = bytes(raw_data)
        elif raw_value is not None:
            data = _encode_native(raw_value)
        else:
            raise ConversionError("KnxValue needs a native value or raw data")

        self._raw_value = raw_value
        self._raw_data = data
        self._timestamp = datetime.now()

    @classmethod
    def from_bytes(cls, data: bytes) -> KnxValue:
        return cls(raw_data=data)

    # -- properties ---------------------------------------------------------

    @property
    def raw_value(self) -> Any:
        return self._raw_value

    @property
    def raw_data(self) -> bytes:
        return self._raw_data

    @property
    def data_length(self) -> int:
        return len(self._raw_data)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    # -- typed accessors ----------------------------------------------------

    def as_boolean(self) -> bool:
        """True if the payload is non-zero (1-bit switches, locks)."""
        if self._raw_value is True:
            return True
        if not self._raw_data:
            return False
        return int.from_bytes(self._raw_data, "big") != 0

    def as_percent(self) -> Percent:
        """First byte on the 1-byte scale (dimmer level, shutter position)."""
        if not self._raw_data:
            return Percent(0)
        return Percent(self._raw_data[0])

    def as_percentage_value(self) -> float:
        return self.as_percent().value

    def as_byte(self) -> int:
        return self._raw_data[0] if self._raw_data else 0

    def as_int(self) -> int:
        """Unsigned big-endian integer of the whole payload."""
        return int.from_bytes(self._raw_data, "big") if self._raw_data else 0

    def as_string(self) -> str:
        if self._raw_value is not None:
            return str(self._raw_value)
        return self._raw_data.hex(" ")

    def decode(self, dpt_id: str) -> Any:
        """Decode the payload as the given DPT (e.g. "9.001")."""
        return DPTCodec.decode(dpt_id, self._raw_data)

    # -- inference ----------------------------------------------------------

    def auto_convert(self, target):
        """Convert to ``Percent``, ``bool``, ``int`` (the byte), ``str`` or a ValueShape."""
        if isinstance(target, ValueShape):
            shape = target
        else:
            try:
                shape = _TYPE_SHAPES.get(target)
            except TypeError:
                shape = None
        if shape is None:
            name = getattr(target, "__name__", repr(target))
            raise ConversionError(f"Unsupported conversion target: {name}")
        return _SHAPE_CONVERTERS[shape](self)

    def get_typed_value(self, address=None, type_map: Optional[AddressTypeMap] = None):
        """Decode according to what the address carries.

        The type comes from the address-type table, never from the payload:
        the same byte is a Percent on a position address and a bool on a
        lock address. Without an address, or for an address of unknown
        type, the data length decides.
        """
        if address is None:
            return self._typed_by_length()

        data_type = (type_map or default_map).get_expected_type(address)
        decoder = _TYPED_DECODERS.get(data_type)
        if decoder is None:
            logger.debug("No data type for %s, using data length", address)
            return self._typed_by_length()
        return decoder(self)

    def _typed_by_length(self):
        if not self._raw_data:
            return False
        if self.data_length == 1:
            if self._raw_data[0] <= 1:
                return self.as_boolean()
            return self.as_percent()
        if self.data_length == 2:
            return self.as_int()
        return self._raw_data

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other) -> bool:
        # Same bytes, and the same truth: a native True wins over zero bytes
        if isinstance(other, KnxValue):
            return self._raw_data == other._raw_data and self.as_boolean() == other.as_boolean()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._raw_data)

    def __repr__(self) -> str:
        return f"KnxValue(raw_value={self._raw_value!r}, raw_data={self._raw_data!r})"

    def __str__(self) -> str:
        typed = self.get_typed_value()
        if isinstance(typed, Percent):
            display = str(typed)
        elif isinstance(typed, bool):
            display = "ON" if typed else "OFF"
        elif isinstance(typed, bytes):
            display = typed.hex(" ")
        else:
            display = str(typed)
        return f"{display} (Raw: {self.as_int()}, Length: {self.data_length})"


_TYPE_SHAPES = {
    Percent: ValueShape.PERCENT,
    bool: ValueShape.BOOLEAN,
    int: ValueShape.BYTE,
    str: ValueShape.TEXT,
}

_SHAPE_CONVERTERS = {
    ValueShape.PERCENT: KnxValue.as_percent,
    ValueShape.BYTE: KnxValue.as_byte,
    ValueShape.BOOLEAN: KnxValue.as_boolean,
    ValueShape.INTEGER: KnxValue.as_int,
    ValueShape.TEXT: KnxValue.as_string,
}

_TYPED_DECODERS = {
    KnxDataType.BOOLEAN: KnxValue.as_boolean,
    KnxDataType.PERCENT: KnxValue.as_percent,
    KnxDataType.BYTE: KnxValue.as_byte,
    KnxDataType.TWO_BYTE_UNSIGNED: KnxValue.as_int,
    KnxDataType.TEMPERATURE: lambda v: v.decode(KnxDataType.TEMPERATURE.dpt),
    KnxDataType.DATE_TIME: lambda v: v.decode(KnxDataType.DATE_TIME.dpt),
    KnxDataType.TEXT: lambda v: v.decode(KnxDataType.TEXT.dpt),
}
