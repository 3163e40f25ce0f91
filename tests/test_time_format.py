from datetime import date

import pytest

from app.system_services.exceptions import InvalidFormatError
from app.system_services.time_format import (
    parse_date,
    to_12_hour,
    validate_time_12h,
    validate_time_24h,
)


@pytest.mark.parametrize(
    "time24h, expected",
    [
        ("00:00", "12:00 AM"),
        ("00:30", "12:30 AM"),
        ("09:15", "09:15 AM"),
        ("11:59", "11:59 AM"),
        ("12:00", "12:00 PM"),
        ("13:05", "01:05 PM"),
        ("23:59", "11:59 PM"),
    ],
)
def test_to_12_hour_boundaries(time24h, expected):
    assert to_12_hour(time24h) == expected


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "1200", "", "ab:cd", "10:00 AM"])
def test_invalid_24h_times_rejected(value):
    with pytest.raises(InvalidFormatError):
        validate_time_24h(value)


def test_parse_date_accepts_iso_day():
    assert parse_date("2025-06-01") == date(2025, 6, 1)


@pytest.mark.parametrize("value", ["2025-6-1", "01-06-2025", "2025-13-01", "2025-02-30", "", "2025-06-01T10:00"])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(InvalidFormatError):
        parse_date(value)


@pytest.mark.parametrize("value", ["10:00 AM", "12:00 PM", "01:05 PM"])
def test_valid_12h_slots(value):
    assert validate_time_12h(value) == value


@pytest.mark.parametrize("value", ["10:00", "00:00 AM", "13:00 PM", "10:00 am", "1:00 PM"])
def test_invalid_12h_slots(value):
    with pytest.raises(InvalidFormatError):
        validate_time_12h(value)
