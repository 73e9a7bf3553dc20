"""KnxValue console check — manual test for float → KNX conversion.

Converts a few float inputs (or the ones given on the command line) and
prints every view KnxValue offers, then confirms that 0.0 survives the
percentage round trip as exactly 0.0.

Environment:
  KNXVALUE_ADDRESS       — group address the values are typed for (e.g. 4/2/17)
  KNXVALUE_ADDRESS_TYPES — YAML file with address type overrides
  KNXVALUE_LOG_LEVEL     — log level (default INFO)
"""

import logging
import os
import sys

import yaml

DEFAULT_INPUTS = (0.0, 1.0, 50.0, 100.0)


def load_address_types(path: str) -> int:
    """Apply address type overrides from YAML to the process-wide table."""
    from dpt.address_types import default_map

    return default_map.load_yaml(path)


def describe(value, address=None) -> list[str]:
    """Lines describing one KnxValue, typed for ``address`` when given."""
    typed = value.get_typed_value(address)
    raw_type = type(value.raw_value).__name__ if value.raw_value is not None else "None"
    return [
        f"Input: {value.raw_value!r}",
        f"RawData: [{', '.join(str(b) for b in value.raw_data)}]",
        f"DataLength: {value.data_length}",
        f"RawValueType: {raw_type}",
        f"AsBoolean(): {value.as_boolean()}",
        f"AsPercentageValue(): {value.as_percentage_value()}",
        f"TypedValue: {typed} (Type: {type(typed).__name__})"
        + (f" for {address}" if address else ""),
        f"ToString(): {value}",
    ]


def check_zero_percentage() -> bool:
    from dpt.value import KnxValue

    return KnxValue(0.0).as_percentage_value() == 0.0


def main(argv=None) -> int:
    logging.basicConfig(
        level=os.environ.get("KNXVALUE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("knxvalue")

    from dpt.group_address import parse_group_address
    from dpt.value import ConversionError, KnxValue

    config_path = os.environ.get("KNXVALUE_ADDRESS_TYPES")
    if config_path:
        logger.info("Loading address types from %s", config_path)
        try:
            load_address_types(config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error("Cannot load address types from %s: %s", config_path, e)
            return 2

    address = os.environ.get("KNXVALUE_ADDRESS") or None
    if address:
        try:
            address = str(parse_group_address(address))
        except ValueError as e:
            logger.error("%s", e)
            return 2

    args = sys.argv[1:] if argv is None else list(argv)
    inputs = []
    for arg in args:
        try:
            inputs.append(float(arg))
        except ValueError:
            logger.error("Not a number: %s", arg)
            return 2
    if not inputs:
        inputs = list(DEFAULT_INPUTS)

    for number in inputs:
        try:
            value = KnxValue(number)
        except ConversionError as e:
            logger.error("Cannot convert %s: %s", number, e)
            return 2
        print("\n".join(describe(value, address)))
        print()

    if check_zero_percentage():
        print("KnxValue(0.0) correctly returns 0.0 as percentage")
        return 0

    print(f"KnxValue(0.0) returns {KnxValue(0.0).as_percentage_value()} instead of 0.0")
    return 1


if __name__ == "__main__":
    sys.exit(main())
