"""Tests for KnxValue construction, accessors and type inference."""

from __future__ import annotations

import pytest

from dpt.address_types import KnxDataType
from dpt.percent import Percent
from dpt.value import ConversionError, KnxValue, ValueShape


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "native, raw",
    [
        (True, b"\x01"),
        (False, b"\x00"),
        ("1", b"\x01"),
        ("0", b"\x00"),
        (" TRUE ", b"\x01"),
        ("false", b"\x00"),
        (170, b"\xaa"),
        (0, b"\x00"),
        (1000, b"\x03\xe8"),
        (-5, b"\xff\xff\xff\xfb"),
        (50.0, b"\x80"),
        ("66.7", b"\xaa"),
        (Percent(42), b"\x2a"),
    ],
)
def test_native_values_encode_to_canonical_bytes(native, raw):
    value = KnxValue(native)
    assert value.raw_data == raw
    assert value.raw_value == native
    assert value.data_length == len(raw)


def test_bytes_are_stored_verbatim_without_native_value():
    value = KnxValue(b"\x01\x02")
    assert value.raw_data == b"\x01\x02"
    assert value.raw_value is None
    assert KnxValue.from_bytes(bytearray([7])).raw_data == b"\x07"


def test_explicit_raw_data_wins_over_native_value():
    value = KnxValue("on bus", raw_data=b"\x05")
    assert value.raw_data == b"\x05"
    assert value.raw_value == "on bus"


def test_float_percentage_is_clamped():
    assert KnxValue(150.0).raw_data == b"\xff"
    assert KnxValue(-3.0).raw_data == b"\x00"


@pytest.mark.parametrize("bad", ["abc", "", "1/2", float("nan"), object(), [1], 2**40])
def test_unrepresentable_input_raises(bad):
    with pytest.raises(ConversionError):
        KnxValue(bad)


def test_conversion_error_is_a_value_error():
    with pytest.raises(ValueError):
        KnxValue("not a number")


def test_value_needs_something_to_hold():
    with pytest.raises(ConversionError):
        KnxValue()


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def test_boolean_conversion_from_different_types():
    assert KnxValue(True).as_boolean() is True
    assert KnxValue("1").as_boolean() is True
    assert KnxValue(1).as_boolean() is True
    assert KnxValue("0").as_boolean() is False
    assert KnxValue(b"\x00\x01").as_boolean() is True


def test_percent_conversion():
    assert KnxValue(170).as_percent().value == pytest.approx(66.7, abs=0.1)
    assert KnxValue("66.7").as_percent().value == pytest.approx(66.7, abs=0.1)


def test_zero_percentage_is_exact():
    value = KnxValue(0.0)
    assert value.raw_data == b"\x00"
    assert value.as_percent().value == 0.0
    assert value.as_percentage_value() == 0.0
    assert value.as_boolean() is False


def test_hundred_percent_within_one_step():
    assert KnxValue(100.0).as_percent().value == pytest.approx(100.0, abs=0.4)


def test_empty_raw_data_yields_defaults():
    value = KnxValue(b"")
    assert value.as_boolean() is False
    assert value.as_percent() == Percent(0)
    assert value.as_byte() == 0
    assert value.as_int() == 0
    assert value.get_typed_value() is False
    assert value.get_typed_value("4/2/17") == Percent(0)
    assert str(value) == "OFF (Raw: 0, Length: 0)"


def test_byte_int_and_string_accessors():
    value = KnxValue(b"\x03\xe8")
    assert value.as_byte() == 3
    assert value.as_int() == 1000
    assert value.as_string() == "03 e8"
    assert KnxValue(True).as_string() == "True"


def test_decode_through_dpt():
    assert KnxValue(b"\x0c\x1a").decode("9.001") == pytest.approx(21.0, abs=0.05)


def test_rich_to_string():
    text = str(KnxValue(170))
    assert "66.7" in text
    assert "Raw: 170" in text
    assert "Length: 1" in text
    assert str(KnxValue(True)) == "ON (Raw: 1, Length: 1)"


# ---------------------------------------------------------------------------
# Type inference
# ---------------------------------------------------------------------------


def test_auto_detect_type_from_address():
    position = KnxValue(170).get_typed_value("4/2/17")
    assert isinstance(position, Percent)
    assert position.value == pytest.approx(66.7, abs=0.1)

    lock = KnxValue(1).get_typed_value("4/3/17")
    assert lock is True


def test_same_byte_decodes_by_address_not_content():
    value = KnxValue(b"\x01")
    position = value.get_typed_value("4/2/17")
    assert isinstance(position, Percent)
    assert position.value == pytest.approx(0.4, abs=0.01)
    assert value.get_typed_value("4/3/17") is True


def test_typed_value_for_other_table_types():
    assert KnxValue(b"\x0c\x1a").get_typed_value("2/1/5") == pytest.approx(21.0, abs=0.05)
    assert KnxValue(b"\x03\xe8").get_typed_value("5/1/1") == 1000
    assert KnxValue(b"\x8e\x1e\x00").get_typed_value("6/1/1") == {
        "day": 4,
        "hour": 14,
        "minute": 30,
        "second": 0,
    }


def test_unknown_address_falls_back_to_data_length():
    assert KnxValue(b"\x01").get_typed_value("0/0/1") is True
    assert isinstance(KnxValue(b"\xaa").get_typed_value("0/0/1"), Percent)
    assert KnxValue(b"\x03\xe8").get_typed_value("9/9/9") == 1000
    assert KnxValue(b"\x01\x02\x03").get_typed_value() == b"\x01\x02\x03"


def test_typed_value_uses_given_type_map(type_map):
    type_map.set_custom_type("4/2/17", KnxDataType.BOOLEAN)
    value = KnxValue(b"\xaa")
    assert value.get_typed_value("4/2/17", type_map=type_map) is True
    # The process-wide table is untouched
    assert isinstance(value.get_typed_value("4/2/17"), Percent)


def test_generic_conversion():
    value = KnxValue(170)
    assert value.auto_convert(Percent).value == pytest.approx(66.7, abs=0.1)
    assert value.auto_convert(int) == 170
    assert value.auto_convert(bool) is True
    assert value.auto_convert(str) == "170"


def test_generic_conversion_by_shape():
    value = KnxValue(b"\x03\xe8")
    assert value.auto_convert(ValueShape.INTEGER) == 1000
    assert value.auto_convert(ValueShape.BYTE) == 3
    assert value.auto_convert(ValueShape.TEXT) == "03 e8"


@pytest.mark.parametrize("target, name", [(list, "list"), (float, "float"), ({}, "{}")])
def test_generic_conversion_rejects_unsupported_targets(target, name):
    with pytest.raises(ConversionError, match="Unsupported conversion target") as exc:
        KnxValue(170).auto_convert(target)
    assert name in str(exc.value)


def test_values_compare_by_raw_data():
    assert KnxValue(True) == KnxValue(b"\x01")
    assert KnxValue(50.0) != KnxValue(51.0)
    assert hash(KnxValue(True)) == hash(KnxValue(1))


def test_native_true_over_zero_bytes_is_not_equal_to_zero_bytes():
    forced = KnxValue(True, raw_data=b"\x00")
    assert forced.as_boolean()
    assert forced != KnxValue(b"\x00")
    assert forced == KnxValue(True, raw_data=b"\x00")
