"""Identifier generation and calendar-day helpers."""

from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo


def generate_id() -> str:
    """Return an opaque identifier unique within the process."""
    return uuid4().hex


def format_date(value: date) -> str:
    """Format a date or datetime as YYYY-MM-DD."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def normalize_date(value: date | str) -> str:
    """Return the calendar day of a date, datetime or ISO string."""
    if isinstance(value, str):
        cleaned = value.strip()
        try:
            return date.fromisoformat(cleaned).isoformat()
        except ValueError:
            return datetime.fromisoformat(cleaned).date().isoformat()
    return format_date(value)


def today(timezone_name: str = "UTC") -> str:
    """Return today's calendar day in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date().isoformat()


def is_future_date(value: date | str, reference: date | str | None = None) -> bool:
    """Return True when the calendar day is after the reference day."""
    day = date.fromisoformat(normalize_date(value))
    reference_day = date.fromisoformat(normalize_date(reference or today()))
    return day > reference_day


def now_timestamp() -> str:
    """Return the current UTC time as an ISO timestamp."""
    return datetime.now(tz=UTC).isoformat()
