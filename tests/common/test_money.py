import math

import pytest

from src.station_hr.station_hr.common.money import format_money, parse_money, round2


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.234,56", 1234.56),
        ("1234.56", 1234.56),
        ("1.234.567,89", 1234567.89),
        ("1.234.567.89", 1234567.89),
        ("$ 1.500", 1.5),
        ("-250,5", -250.5),
        ("  42 ", 42.0),
    ],
)
def test_parse_money_notations(text, expected):
    assert parse_money(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", None, "abc", "--", ",", "1-2"])
def test_parse_money_malformed_reads_as_zero(text):
    assert parse_money(text) == 0


def test_parse_money_passes_numbers_through():
    assert parse_money(12.5) == 12.5
    assert parse_money(7) == 7.0
    assert parse_money(float("nan")) == 0
    assert parse_money(True) == 0
    assert not math.isnan(parse_money("1e400"))


def test_round2_and_format():
    assert round2(1000.004) == 1000.0
    assert round2(None) == 0
    assert format_money(1234.5) == "1.234,50"
    assert format_money(-1500) == "-1.500,00"
