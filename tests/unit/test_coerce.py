# tests/unit/test_coerce.py
from __future__ import annotations

import pytest

from listing_wizard.core.transform.coerce import as_bool, as_str_list, as_text, clean_num, cut_date, section


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,000,000", 1000000),
        ("1.000.000", 1000000),
        ("$2,500.50", 2500.5),
        ("12 VND", 12),
        ("3.500.000.000 ₫", 3500000000),
        (" 450 ", 450),
        ("-15", -15),
        ("2.5", 2.5),
        (85.0, 85),
        (7, 7),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        ("inf", 0),
        ([1], 0),
    ],
)
def test_clean_num(raw, expected):
    out = clean_num(raw)
    assert out == expected
    assert type(out) is type(expected)


def test_as_text():
    assert as_text("x") == "x"
    assert as_text(None) == ""
    assert as_text(12.0) == "12"
    assert as_text({"a": 1}, default="?") == "?"


def test_cut_date():
    assert cut_date("2024-05-01T00:00:00.000Z") == "2024-05-01"
    assert cut_date("2024-05-01") == "2024-05-01"
    assert cut_date(None) == ""


def test_as_str_list():
    assert as_str_list(["a", "", 3, "b"]) == ["a", "b"]
    assert as_str_list("one") == ["one"]
    assert as_str_list({"a": 1}) == []
    assert as_str_list(None) == []


def test_section_and_as_bool():
    assert section({"a": {"b": 1}}, "a") == {"b": 1}
    assert section({"a": [1]}, "a") == {}
    assert section("nope", "a") == {}
    assert as_bool("yes") is True
    assert as_bool(None, default=True) is True
    assert as_bool(0) is False
    assert as_bool([], default=True) is True
