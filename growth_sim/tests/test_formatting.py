from __future__ import annotations

import pytest

from growth_sim.core.formatting import (
    format_currency,
    format_percentage,
    format_period_label,
    validate_number,
)


@pytest.mark.parametrize(
    "value, locale, currency, expected",
    [
        (1628894.6, "ja-JP", "JPY", "￥1,628,895"),
        (1628894.6, "ja", "JPY", "￥1,628,895"),
        (2.5, "ja-JP", "JPY", "￥3"),
        (0.4, "ja-JP", "JPY", "￥0"),
        (-1500.5, "ja-JP", "JPY", "-￥1,501"),
        (1234567.89, "en-US", "USD", "$1,234,568"),
        (1234567, "en", "JPY", "¥1,234,567"),
        (999, "zh-TW", "TWD", "$999"),
        (1000, "en-US", "TWD", "NT$1,000"),
    ],
)
def test_format_currency(value, locale, currency, expected):
    assert format_currency(value, locale, currency) == expected


def test_format_currency_defaults_to_yen():
    assert format_currency(7_000_000) == "￥7,000,000"


def test_format_percentage():
    assert format_percentage(42.3456) == "42.35%"
    assert format_percentage(42.3456, decimals=0) == "42%"
    assert format_percentage(0) == "0.00%"


@pytest.mark.parametrize(
    "year, expected",
    [
        (0, "Start"),
        (0.5, "6 months"),
        (1, "Year 1"),
        (10.0, "Year 10"),
        (2.25, "2 years 3 months"),
    ],
)
def test_format_period_label(year, expected):
    assert format_period_label(year) == expected


def test_validate_number():
    assert validate_number(5, 0, 100)
    assert validate_number(0, 0, 100)
    assert not validate_number(100.1, 0, 100)
    assert not validate_number(float("nan"), 0, 100)


def test_format_currency_handles_non_finite_values():
    assert format_currency(float("inf")) == "￥∞"
    assert format_currency(float("-inf"), "en-US", "USD") == "-$∞"
    assert format_currency(float("nan")) == "NaN"


def test_format_currency_keeps_every_digit_of_huge_totals():
    assert format_currency(1.5e30, "en-US", "USD") == "$1,500" + ",000" * 9
