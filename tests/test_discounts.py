from decimal import Decimal

import pytest

from pricing_table.calculators import calc_tier_price, round_percent

D = Decimal


def test_percentage_discount_as_given():
    pct, unit = calc_tier_price("percentage_discount", D("100"), D("20"), 10)
    assert pct == D("20")
    assert unit == D("8")


def test_fixed_price():
    pct, unit = calc_tier_price("fixed_price", D("100"), D("80"), 5)
    assert pct == D("20")
    assert unit == D("16")


def test_price_discount():
    pct, unit = calc_tier_price("price_discount", D("100"), D("30"), 4)
    assert pct == D("30")
    assert unit == D("17.5")


def test_zero_base_price_gives_zero_percent():
    pct, unit = calc_tier_price("fixed_price", D("0"), D("12"), 3)
    assert pct == D("0")
    assert unit == D("4")

    pct, unit = calc_tier_price("price_discount", D("0"), D("5"), 1)
    assert pct == D("0")
    assert unit == D("-5")


def test_percent_rounds_half_away_from_zero():
    assert round_percent(D("12.5")) == D("13")
    assert round_percent(D("12.4999")) == D("12")
    assert round_percent(D("-12.5")) == D("-13")


def test_fixed_price_above_base_is_negative_discount():
    pct, _ = calc_tier_price("fixed_price", D("40"), D("45"), 1)
    assert pct == D("-13")  # -12.5 -> -13


def test_unknown_type_raises():
    with pytest.raises(KeyError):
        calc_tier_price("buy_x_get_y", D("100"), D("1"), 1)
