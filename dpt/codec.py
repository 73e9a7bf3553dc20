"""Datapoint types used by the installation: bytes on the bus ↔ Python values.

Encoding is chosen per DPT family (the part before the dot); a subtype only
carries its own codec where its scale differs from the family, as 5.001
does. Subtype metadata (name, unit, range) is used for display.

    encode("5.001", 66.7)        # b'\\xaa'
    decode("9.001", b'\\x0c\\x1a') # 21.0
    get_dpt_info("9.001")        # {"id": "9.001", "name": "Temperature", "unit": "°C", ...}

Supported families: 1 (boolean), 5 (unsigned 8-bit, 5.001 scaling),
7 (unsigned 16-bit), 9 (2-byte float), 10 (time of day), 13 (signed
32-bit) and 16 (14-character text).
"""

from __future__ import annotations

import struct
from typing import Any, Callable, NamedTuple, Optional


class ConversionError(ValueError):
    """A value cannot be represented as, or converted to, the requested type."""


class DPTInfo(NamedTuple):
    id: str
    name: str
    unit: str = ""
    size: int = 1
    min_val: Any = None
    max_val: Any = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "unit": self.unit,
            "min": self.min_val,
            "max": self.max_val,
            "encoding_size": self.size,
        }


Encoder = Callable[[Any], bytes]
Decoder = Callable[[bytes], Any]


# -- families ---------------------------------------------------------------


def _encode_bool(value) -> bytes:
    return b"\x01" if value else b"\x00"


def _decode_bool(data: bytes) -> bool:
    return bool(data[0] & 0x01) if data else False


def _encode_u8(value) -> bytes:
    return bytes([min(max(int(value), 0), 0xFF)])


def _decode_u8(data: bytes) -> int:
    return data[0] if data else 0


def _encode_scaling(percentage) -> bytes:
    """0..100 % onto 0..255, clamped."""
    clamped = min(max(float(percentage), 0.0), 100.0)
    return bytes([round(clamped / 100.0 * 255.0)])


def _decode_scaling(data: bytes) -> float:
    return data[0] / 255.0 * 100.0 if data else 0.0


def _encode_u16(value) -> bytes:
    return struct.pack(">H", min(max(int(value), 0), 0xFFFF))


def _decode_u16(data: bytes) -> int:
    return struct.unpack(">H", data[:2])[0] if len(data) >= 2 else 0


def _encode_float16(value) -> bytes:
    """KNX 2-byte float: ``0.01 * M * 2**E`` packed as ``MEEEEMMM MMMMMMMM``.

    M is an 11-bit two's complement mantissa whose sign also sits in the top
    bit; E is 0..15.
    """
    number = float(value)
    exponent = 0
    mantissa = round(number * 100)
    while not -2048 <= mantissa <= 2047:
        exponent += 1
        if exponent > 15:
            raise ConversionError(f"{number} is out of range for a KNX 2-byte float")
        mantissa = round(number * 100 / (1 << exponent))

    sign = 0x80 if mantissa < 0 else 0x00
    bits = mantissa & 0x7FF
    return bytes([sign | exponent << 3 | bits >> 8, bits & 0xFF])


def _decode_float16(data: bytes) -> float:
    if len(data) < 2:
        return 0.0
    word = data[0] << 8 | data[1]
    mantissa = word & 0x7FF
    if word & 0x8000:
        mantissa -= 0x800
    exponent = word >> 11 & 0x0F
    return round(mantissa * (1 << exponent) / 100.0, 2)


_TIME_FIELDS = ("day", "hour", "minute", "second")


def _encode_time_of_day(value: dict) -> bytes:
    day, hour, minute, second = (int(value.get(field, 0)) for field in _TIME_FIELDS)
    return bytes([(day & 0x07) << 5 | hour & 0x1F, minute & 0x3F, second & 0x3F])


def _decode_time_of_day(data: bytes) -> dict:
    if len(data) < 3:
        return dict.fromkeys(_TIME_FIELDS, 0)
    return dict(zip(_TIME_FIELDS, (data[0] >> 5, data[0] & 0x1F, data[1] & 0x3F, data[2] & 0x3F)))


def _encode_s32(value) -> bytes:
    return struct.pack(">i", min(max(int(value), -(2**31)), 2**31 - 1))


def _decode_s32(data: bytes) -> int:
    return struct.unpack(">i", data[:4])[0] if len(data) >= 4 else 0


_TEXT_SIZE = 14


def _encode_text(value) -> bytes:
    return str(value).encode("ascii", errors="replace")[:_TEXT_SIZE].ljust(_TEXT_SIZE, b"\x00")


def _decode_text(data: bytes) -> str:
    return data[:_TEXT_SIZE].split(b"\x00", 1)[0].decode("ascii", errors="replace")


_FAMILY_CODECS: dict[str, tuple[Encoder, Decoder]] = {
    "1": (_encode_bool, _decode_bool),
    "5": (_encode_u8, _decode_u8),
    "7": (_encode_u16, _decode_u16),
    "9": (_encode_float16, _decode_float16),
    "10": (_encode_time_of_day, _decode_time_of_day),
    "13": (_encode_s32, _decode_s32),
    "16": (_encode_text, _decode_text),
}

# Subtypes whose scale differs from their family
_SUBTYPE_CODECS: dict[str, tuple[Encoder, Decoder]] = {
    "5.001": (_encode_scaling, _decode_scaling),
}

_INFO: dict[str, DPTInfo] = {
    info.id: info
    for info in (
        DPTInfo("1", "Boolean", "", 1, False, True),
        DPTInfo("1.001", "Switch", "", 1, False, True),
        DPTInfo("1.002", "Boolean", "", 1, False, True),
        DPTInfo("1.003", "Enable", "", 1, False, True),
        DPTInfo("1.008", "Up/Down", "", 1, False, True),
        DPTInfo("1.010", "Start/Stop", "", 1, False, True),
        DPTInfo("1.017", "Trigger", "", 1, False, True),
        DPTInfo("5", "Unsigned 8-bit", "", 1, 0, 255),
        DPTInfo("5.001", "Scaling", "%", 1, 0, 100),
        DPTInfo("7", "Unsigned 16-bit", "", 2, 0, 65535),
        DPTInfo("7.001", "Pulses", "", 2, 0, 65535),
        DPTInfo("9", "2-byte Float", "", 2, -671088.64, 670760.96),
        DPTInfo("9.001", "Temperature", "°C", 2, -273, 670760),
        DPTInfo("10", "Time", "", 3),
        DPTInfo("10.001", "Time of Day", "", 3),
        DPTInfo("13", "Signed 32-bit", "", 4, -(2**31), 2**31 - 1),
        DPTInfo("13.001", "Counter Pulses", "", 4, -(2**31), 2**31 - 1),
        DPTInfo("16", "String", "", _TEXT_SIZE),
        DPTInfo("16.000", "ASCII String", "", _TEXT_SIZE),
    )
}


def _family(dpt_id: str) -> str:
    return str(dpt_id).split(".", 1)[0]


def _codec_for(dpt_id: str) -> tuple[Encoder, Decoder]:
    codec = _SUBTYPE_CODECS.get(dpt_id) or _FAMILY_CODECS.get(_family(dpt_id))
    if codec is None:
        raise ConversionError(f"Unknown DPT: {dpt_id}")
    return codec


class DPTCodec:
    """Encode and decode by DPT id; unknown subtypes fall back to their family."""

    @staticmethod
    def encode(dpt_id: str, value: Any) -> bytes:
        return _codec_for(dpt_id)[0](value)

    @staticmethod
    def decode(dpt_id: str, data: bytes) -> Any:
        return _codec_for(dpt_id)[1](bytes(data))

    @staticmethod
    def get_info(dpt_id: str) -> Optional[DPTInfo]:
        if not DPTCodec.is_supported(dpt_id):
            return None
        return _INFO.get(dpt_id) or _INFO[_family(dpt_id)]

    @staticmethod
    def list_dpts() -> list[dict]:
        return [_INFO[dpt_id].to_dict() for dpt_id in sorted(_INFO)]

    @staticmethod
    def is_supported(dpt_id: str) -> bool:
        return dpt_id in _SUBTYPE_CODECS or _family(dpt_id) in _FAMILY_CODECS


def encode(dpt_id: str, value: Any) -> bytes:
    return DPTCodec.encode(dpt_id, value)


def decode(dpt_id: str, data: bytes) -> Any:
    return DPTCodec.decode(dpt_id, data)


def get_dpt_info(dpt_id: str) -> Optional[dict]:
    info = DPTCodec.get_info(dpt_id)
    return info.to_dict() if info else None
