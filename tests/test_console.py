"""Tests for the knxvalue console check."""

from __future__ import annotations

import pytest

import knxvalue
from dpt.address_types import KnxDataType, default_map
from dpt.value import KnxValue


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("KNXVALUE_ADDRESS", raising=False)
    monkeypatch.delenv("KNXVALUE_ADDRESS_TYPES", raising=False)
    monkeypatch.delenv("KNXVALUE_LOG_LEVEL", raising=False)


def test_default_inputs_confirm_zero_regression(capsys):
    assert knxvalue.main([]) == 0

    out = capsys.readouterr().out
    assert "Input: 0.0" in out
    assert "Input: 100.0" in out
    assert "RawData: [0]" in out
    assert "RawData: [255]" in out
    assert "correctly returns 0.0" in out


def test_describe_lists_every_view():
    lines = knxvalue.describe(KnxValue(50.0))
    assert "RawData: [128]" in lines
    assert "DataLength: 1" in lines
    assert "RawValueType: float" in lines
    assert "AsBoolean(): True" in lines
    assert "TypedValue: 50.2% (Type: Percent)" in lines
    assert "ToString(): 50.2% (Raw: 128, Length: 1)" in lines


def test_describe_zero():
    lines = knxvalue.describe(KnxValue(0.0))
    assert "AsPercentageValue(): 0.0" in lines
    assert "ToString(): OFF (Raw: 0, Length: 1)" in lines


def test_invalid_argument_returns_error(capsys):
    assert knxvalue.main(["abc"]) == 2
    assert capsys.readouterr().out == ""


def test_address_types_loaded_from_environment(monkeypatch, address_types_file, capsys):
    monkeypatch.setenv("KNXVALUE_ADDRESS", "7/0/1")
    assert knxvalue.main(["0.4"]) == 0
    assert "TypedValue: True (Type: bool) for 7/0/1" in capsys.readouterr().out

    monkeypatch.setenv("KNXVALUE_ADDRESS_TYPES", address_types_file)
    assert knxvalue.main(["0.4"]) == 0
    assert default_map.get_expected_type("7/0/1") is KnxDataType.PERCENT
    assert "TypedValue: 0.4% (Type: Percent) for 7/0/1" in capsys.readouterr().out


def test_address_selects_typed_value(monkeypatch, capsys):
    monkeypatch.setenv("KNXVALUE_ADDRESS", "4/3/17")
    assert knxvalue.main(["50"]) == 0
    assert "TypedValue: True (Type: bool) for 4/3/17" in capsys.readouterr().out


def test_invalid_address_returns_error(monkeypatch, capsys):
    monkeypatch.setenv("KNXVALUE_ADDRESS", "4/2")
    assert knxvalue.main(["50"]) == 2
    assert capsys.readouterr().out == ""


def test_missing_address_types_file_returns_error(monkeypatch, tmp_path, caplog, capsys):
    monkeypatch.setenv("KNXVALUE_ADDRESS_TYPES", str(tmp_path / "missing.yaml"))
    assert knxvalue.main(["50"]) == 2
    assert "Cannot load address types" in caplog.text
    assert capsys.readouterr().out == ""


def test_check_zero_percentage():
    assert knxvalue.check_zero_percentage() is True
