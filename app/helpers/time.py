# app/helpers/time.py
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    """Local calendar date used for past-date checks."""
    return date.today()
