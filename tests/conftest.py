"""Pytest configuration and shared fixtures for KnxValue tests."""

from __future__ import annotations

import os
import sys

import pytest

_TESTS_DIR = os.path.dirname(__file__)
_PROJECT_ROOT = os.path.abspath(os.path.join(_TESTS_DIR, ".."))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)


@pytest.fixture(autouse=True)
def _reset_address_types():
    """Drop custom address types so tests never see each other's overrides."""
    from dpt.address_types import default_map

    default_map.clear_custom_types()
    yield
    default_map.clear_custom_types()


@pytest.fixture
def type_map():
    """A fresh AddressTypeMap with the default table."""
    from dpt.address_types import AddressTypeMap

    return AddressTypeMap()


@pytest.fixture
def light():
    from devices.light_switch import LightSwitch

    return LightSwitch.for_sub_group("light-11", 11)


@pytest.fixture
def dimmer():
    from devices.light_dimmer import LightDimmer

    return LightDimmer.for_sub_group("dimmer-1", 1)


@pytest.fixture
def shutter():
    from devices.blind import Blind

    return Blind.for_sub_group("shutter-17", 17)


@pytest.fixture
def thresholds():
    from devices.threshold_simulator import ThresholdSimulator

    return ThresholdSimulator("thresholds")


@pytest.fixture
def address_types_file(tmp_path):
    """Write a YAML override file and return its path."""
    path = tmp_path / "address_types.yaml"
    path.write_text(
        "address_types:\n"
        '  "7": percent\n'
        '  "7/1": boolean\n'
        '  "7/1/5": "9.001"\n'
        '  "8/0": not_a_type\n'
    )
    return str(path)
