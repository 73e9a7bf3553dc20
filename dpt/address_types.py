"""Expected data types for group addresses, looked up by address pattern.

Installations group their addresses by function: ``4/2/x`` is shutter
position, ``4/3/x`` shutter lock, and so on. The table below maps
``"main"`` and ``"main/middle"`` patterns to the data type a value on that
address carries. Installations that deviate can override single addresses
or whole ranges, either in code or from a YAML file:

    address_types:
      "4/2": percent
      "7/1/5": temperature
"""

from __future__ import annotations

import enum
import logging
from typing import Optional

import yaml

from .group_address import parse_group_address

logger = logging.getLogger("knxvalue.dpt.address_types")


class KnxDataType(enum.Enum):
    """Data type expected on an address, with the DPT used to decode it."""

    BOOLEAN = "1.001"
    PERCENT = "5.001"
    TEMPERATURE = "9.001"
    BYTE = "5"
    TWO_BYTE_UNSIGNED = "7.001"
    DATE_TIME = "10.001"
    TEXT = "16.000"
    UNKNOWN = ""

    @property
    def dpt(self) -> Optional[str]:
        return self.value or None


DEFAULT_ADDRESS_TYPES: dict[str, KnxDataType] = {
    # General purpose
    "0": KnxDataType.UNKNOWN,
    # Lighting
    "1": KnxDataType.BOOLEAN,
    "1/1": KnxDataType.BOOLEAN,  # light switches
    "1/2": KnxDataType.PERCENT,  # dimmer levels
    "1/3": KnxDataType.BOOLEAN,  # scenes
    # HVAC
    "2": KnxDataType.TEMPERATURE,
    "2/1": KnxDataType.TEMPERATURE,
    "2/2": KnxDataType.BOOLEAN,
    "2/3": KnxDataType.PERCENT,
    # Security
    "3": KnxDataType.BOOLEAN,
    "3/1": KnxDataType.BOOLEAN,
    "3/2": KnxDataType.BOOLEAN,
    "3/3": KnxDataType.BOOLEAN,
    # Blinds/shutters
    "4": KnxDataType.BOOLEAN,
    "4/0": KnxDataType.BOOLEAN,  # movement up/down
    "4/1": KnxDataType.BOOLEAN,  # stop
    "4/2": KnxDataType.PERCENT,  # position
    "4/3": KnxDataType.BOOLEAN,  # lock
    "4/4": KnxDataType.BOOLEAN,  # sun protection
    # Counters/meters
    "5": KnxDataType.TWO_BYTE_UNSIGNED,
    "5/1": KnxDataType.TWO_BYTE_UNSIGNED,
    "5/2": KnxDataType.TWO_BYTE_UNSIGNED,
    # Time/date
    "6": KnxDataType.DATE_TIME,
    "6/1": KnxDataType.DATE_TIME,
    "6/2": KnxDataType.DATE_TIME,
}

_DESCRIPTIONS = {
    "1/1": "Light Switch",
    "1/2": "Dimmer Level",
    "2/1": "Temperature",
    "2/2": "HVAC Control",
    "3/1": "Security Alarm",
    "3/2": "Door Lock",
    "4/0": "Shutter Movement",
    "4/1": "Shutter Stop",
    "4/2": "Shutter Position",
    "4/3": "Shutter Lock",
    "4/4": "Sun Protection",
}


def parse_data_type(name) -> KnxDataType:
    """Accept a KnxDataType, its name ("percent") or its DPT id ("5.001")."""
    if isinstance(name, KnxDataType):
        return name
    text = str(name).strip()
    try:
        return KnxDataType[text.upper()]
    except KeyError:
        pass
    try:
        return KnxDataType(text)
    except ValueError:
        raise ValueError(f"Unknown KNX data type: {name}") from None


def _split(address: str) -> Optional[tuple[str, str]]:
    parts = address.strip().split("/")
    if len(parts) < 2:
        return None
    return parts[0], f"{parts[0]}/{parts[1]}"


class AddressTypeMap:
    """Default pattern table plus installation-specific overrides."""

    def __init__(self, defaults: Optional[dict] = None):
        self._defaults = dict(DEFAULT_ADDRESS_TYPES if defaults is None else defaults)
        self._custom: dict[str, KnxDataType] = {}

    def get_expected_type(self, address) -> KnxDataType:
        """Expected data type for a full address such as "4/2/17"."""
        if not address:
            return KnxDataType.UNKNOWN

        address = str(address).strip()
        split = _split(address)
        if split is None:
            return KnxDataType.UNKNOWN
        main, main_middle = split

        for key in (address, main_middle, main):
            if key in self._custom:
                logger.debug("%s → %s (custom %s)", address, self._custom[key].name, key)
                return self._custom[key]

        for key in (main_middle, main):
            if key in self._defaults:
                return self._defaults[key]

        return KnxDataType.UNKNOWN

    def set_custom_type(self, address_pattern: str, data_type) -> None:
        """Add or replace an override for "4", "4/2" or "4/2/17"."""
        pattern = str(address_pattern).strip()
        if pattern.count("/") == 2:
            pattern = str(parse_group_address(pattern))
        self._custom[pattern] = parse_data_type(data_type)

    def clear_custom_types(self) -> None:
        self._custom.clear()

    def get_all_mappings(self) -> dict[str, KnxDataType]:
        combined = dict(self._defaults)
        combined.update(self._custom)
        return combined

    def is_address_of_type(self, address, expected: KnxDataType) -> bool:
        return self.get_expected_type(address) is expected

    def get_address_description(self, address) -> str:
        """Human-readable role of an address ("Shutter Position")."""
        if not address:
            return "Unknown"
        split = _split(str(address))
        if split is None:
            return "Invalid address"
        main, main_middle = split
        middle = main_middle.split("/")[1]
        return _DESCRIPTIONS.get(main_middle, f"Group {main} Function {middle}")

    def load_yaml(self, path: str) -> int:
        """Load overrides from a YAML file. Returns the number applied.

        Entries with an unknown type are logged and skipped.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("address_types", {}) if isinstance(data, dict) else {}
        if not isinstance(entries, dict):
            raise ValueError(f"{path}: 'address_types' must be a mapping")

        count = 0
        for pattern, type_name in entries.items():
            try:
                self.set_custom_type(str(pattern), type_name)
            except ValueError as e:
                logger.warning("Skipping address type %s in %s: %s", pattern, path, e)
                continue
            count += 1

        logger.info("Loaded %d address type override(s) from %s", count, path)
        return count


# Process-wide table used by KnxValue when no map is passed explicitly
default_map = AddressTypeMap()


def get_expected_type(address) -> KnxDataType:
    return default_map.get_expected_type(address)


def set_custom_type(address_pattern: str, data_type) -> None:
    default_map.set_custom_type(address_pattern, data_type)


def get_all_mappings() -> dict[str, KnxDataType]:
    return default_map.get_all_mappings()


def is_address_of_type(address, expected: KnxDataType) -> bool:
    return default_map.is_address_of_type(address, expected)


def get_address_description(address) -> str:
    return default_map.get_address_description(address)
