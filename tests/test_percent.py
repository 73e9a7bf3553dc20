"""Tests for the Percent value type."""

from __future__ import annotations

import pytest

from dpt.percent import Percent


def test_value_is_full_precision():
    assert Percent(170).value == pytest.approx(66.666666, abs=1e-5)
    assert str(Percent(170)) == "66.7%"


def test_byte_roundtrip_within_one_step():
    """Every raw byte survives decode -> re-encode within one step."""
    for raw in range(256):
        again = Percent.from_percentage(Percent(raw).value)
        assert abs(again.knx_raw_value - raw) <= 1


def test_boundaries_are_exact():
    assert Percent.from_percentage(0.0).value == 0.0
    assert Percent.from_percentage(100.0).value == 100.0


@pytest.mark.parametrize("percentage", [-0.1, 100.5])
def test_from_percentage_rejects_out_of_range(percentage: float):
    with pytest.raises(ValueError):
        Percent.from_percentage(percentage)


def test_raw_value_must_fit_a_byte():
    with pytest.raises(ValueError):
        Percent(256)


def test_percent_is_immutable_and_hashable():
    p = Percent(10)
    with pytest.raises(AttributeError):
        p.foo = 1
    assert p == Percent(10)
    assert {p, Percent(10)} == {p}
    assert float(Percent(255)) == 100.0
