"""Tests for amount formatting and parsing."""

from __future__ import annotations

import pytest

from finanzasimple.services.money import (
    digits_only,
    format_amount_input,
    format_currency,
    format_signed,
    parse_formatted_amount,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("150000", "$150,000"),
        ("$1,50a0,00", "$150,000"),
        ("", ""),
        ("abc", ""),
        ("0", "$0"),
    ],
)
def test_format_amount_input(raw, expected):
    assert format_amount_input(raw) == expected


def test_parse_reads_digits_only():
    assert parse_formatted_amount("$150,000") == 150000
    assert parse_formatted_amount("") is None
    assert parse_formatted_amount(None) is None


def test_display_then_parse_keeps_value():
    display = format_amount_input("1234567")
    assert display == "$1,234,567"
    assert parse_formatted_amount(display) == 1234567


def test_format_signed():
    assert format_signed(25000) == "+$25,000"
    assert format_signed(-25000) == "-$25,000"
    assert format_signed(0) == "+$0"


def test_helpers():
    assert digits_only("a1b2") == "12"
    assert format_currency(999) == "$999"
