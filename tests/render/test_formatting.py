"""Tests for the won display helpers."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from render.formatting import (
    format_currency,
    format_currency_short,
    format_percent,
    format_signed_percent,
)


@pytest.mark.parametrize("value,expected", [
    (150000000, "₩150,000,000"),
    (2500.4, "₩2,500"),
    (2500.5, "₩2,501"),
    (0, "₩0"),
    (-5476601.38, "-₩5,476,601"),
    (-0.2, "₩0"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


@pytest.mark.parametrize("value,expected", [
    (150000000, "1.5억"),
    (265815523, "2.7억"),
    (37500000, "3,750만"),
    (21104950.92, "2,110만"),
    (10000, "1만"),
    (2500, "2,500원"),
    (0, "0원"),
    (-5476601.38, "-548만"),
])
def test_format_currency_short(value, expected):
    assert format_currency_short(value) == expected


def test_format_percent():
    assert format_percent(-13.043478) == "-13.0%"
    assert format_percent(25, 0) == "25%"
    assert format_percent(12.3456, 2) == "12.35%"


def test_format_signed_percent():
    assert format_signed_percent(30) == "+30%"
    assert format_signed_percent(0) == "0%"
    assert format_signed_percent(-10) == "-10%"
