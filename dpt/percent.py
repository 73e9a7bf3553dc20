"""Percent — the KNX 1-byte scaled percentage (DPT 5.001).

The raw byte is the source of truth; ``value`` is derived from it at full
precision and only the string form rounds to one decimal.
"""

from __future__ import annotations

_SCALE = 255.0


class Percent:
    """Immutable 0–100% value backed by a single KNX raw byte."""

    __slots__ = ("_raw",)

    def __init__(self, knx_raw_value: int = 0):
        raw = int(knx_raw_value)
        if not 0 <= raw <= 255:
            raise ValueError(f"KNX raw value must be 0-255, got {knx_raw_value}")
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_percentage(cls, percentage: float) -> Percent:
        """Build a Percent from 0–100, quantised to the nearest raw step."""
        if percentage < 0 or percentage > 100:
            raise ValueError(f"Percentage must be between 0 and 100, got {percentage}")
        return cls(round(percentage / 100.0 * _SCALE))

    @property
    def knx_raw_value(self) -> int:
        return self._raw

    @property
    def value(self) -> float:
        return self._raw / _SCALE * 100.0

    def to_bytes(self) -> bytes:
        return bytes([self._raw])

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other) -> bool:
        if isinstance(other, Percent):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Percent", self._raw))

    def __repr__(self) -> str:
        return f"Percent(knx_raw_value={self._raw})"

    def __str__(self) -> str:
        return f"{self.value:.1f}%"
