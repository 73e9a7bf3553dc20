"""KNX Datapoint Type codec and value conversion package."""

from .address_types import AddressTypeMap, KnxDataType
from .codec import DPTCodec, decode, encode, get_dpt_info
from .group_address import GroupAddress, feedback_address, parse_group_address
from .percent import Percent
from .value import ConversionError, KnxValue, ValueShape

__all__ = [
    "AddressTypeMap",
    "ConversionError",
    "DPTCodec",
    "GroupAddress",
    "KnxDataType",
    "KnxValue",
    "Percent",
    "ValueShape",
    "decode",
    "encode",
    "feedback_address",
    "get_dpt_info",
    "parse_group_address",
]
