# app/system_services/time_format.py
import re
from datetime import date
from typing import Optional

from app.system_services.exceptions import InvalidFormatError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_24H_PATTERN = re.compile(r"^\d{2}:\d{2}$")
TIME_12H_PATTERN = re.compile(r"^(0[1-9]|1[0-2]):[0-5]\d (AM|PM)$")


def parse_date(value: Optional[str]) -> date:
    """Parse a strict YYYY-MM-DD string into a calendar date."""
    if not value or not DATE_PATTERN.match(value):
        raise InvalidFormatError("Invalid date format. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidFormatError("Invalid date format. Use YYYY-MM-DD.")


def validate_time_24h(value: Optional[str]) -> str:
    if not value or not TIME_24H_PATTERN.match(value):
        raise InvalidFormatError("Invalid time format. Use HH:MM.")
    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise InvalidFormatError("Invalid time format. Use HH:MM.")
    return value


def validate_time_12h(value: str) -> str:
    if not value or not TIME_12H_PATTERN.match(value):
        raise InvalidFormatError(f"Invalid slot time '{value}'. Use HH:MM AM/PM.")
    return value


def to_12_hour(time24h: str) -> str:
    """
    Convert "HH:MM" to the display form used in availability.

    00:00 -> "12:00 AM", 12:00 -> "12:00 PM", 13:05 -> "01:05 PM"
    """
    validate_time_24h(time24h)
    hours, minutes = time24h.split(":")
    hour = int(hours)
    period = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12:02d}:{minutes} {period}"
