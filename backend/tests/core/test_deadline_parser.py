"""Deadline Parser — fixed-order formats, yearless dates, fallback to today."""

from datetime import date

import pytest

from applixy.core.deadline_parser import (
    format_deadline, parse_deadline, try_parse_deadline,
)

TODAY = date(2025, 3, 10)


@pytest.mark.parametrize("text, expected", [
    ("2025-12-01", date(2025, 12, 1)),
    ("12/01/2025", date(2025, 12, 1)),
    ("December 1, 2025", date(2025, 12, 1)),
    ("December 1", date(2025, 12, 1)),
    ("  2026-01-15  ", date(2026, 1, 15)),
])
def test_supported_formats(text, expected):
    assert parse_deadline(text, TODAY) == expected


def test_yearless_date_takes_current_year():
    assert parse_deadline("November 13", TODAY) == date(2025, 11, 13)
    assert parse_deadline("November 13", date(2031, 1, 1)) == date(2031, 11, 13)


def test_yearless_leap_day_in_leap_year():
    assert parse_deadline("February 29", date(2028, 1, 1)) == date(2028, 2, 29)


@pytest.mark.parametrize("text", ["2024-01-31", "2025-12-01", "2028-02-29", "1999-07-04"])
def test_iso_strings_round_trip_unchanged(text):
    assert format_deadline(parse_deadline(text, TODAY)) == text


@pytest.mark.parametrize("text", [None, "", "   ", "next week", "2025-13-45", "31/12/2025"])
def test_unparseable_input_falls_back_to_today(text):
    assert try_parse_deadline(text, TODAY) is None
    assert parse_deadline(text, TODAY) == TODAY


def test_fallback_without_injected_today_is_current_date():
    assert parse_deadline("nonsense") == date.today()
