# backend/octo_mock/services/availability/dates.py
"""
Date helpers for availability ids.

Slot ids are calendar strings in one fixed profile:
  START_TIME     "YYYY-MM-DDTHH:MM:SS+HH:MM"  (offset of the product timezone)
  OPENING_HOURS  "YYYY-MM-DD"
They are parsed strictly on every use; "Z" or offsets without a colon are
not accepted.
"""

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from ...errors import InvalidAvailabilityIdError, InvalidRangeError
from ..catalog.models import AvailabilityType

DATE_ID_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATETIME_ID_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}$")


def format_availability_key(timestamp: datetime | date, time_zone: str) -> str:
    """Calendar day ("YYYY-MM-DD") of a timestamp in the given timezone.

    Naive datetimes are taken as UTC. Plain dates are already calendar days.
    """
    if not isinstance(timestamp, datetime):
        return timestamp.isoformat()
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=ZoneInfo("UTC"))
    return timestamp.astimezone(ZoneInfo(time_zone)).date().isoformat()


def parse_local_date(value: str) -> date:
    """Parse a "YYYY-MM-DD" string. Raises ValueError."""
    if not DATE_ID_RE.match(value):
        raise ValueError(f"Date must be in YYYY-MM-DD format, got {value!r}")
    return date.fromisoformat(value)


def enumerate_days(start: date, end: date) -> list[date]:
    """All calendar days in [start, end], both ends included."""
    if start > end:
        raise InvalidRangeError(start.isoformat(), end.isoformat())

    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def parse_availability_id(
    availability_id: str,
    availability_type: AvailabilityType,
) -> datetime | date:
    """
    Strictly parse an availability id for a product of the given type.

    Returns an aware datetime for START_TIME products and a date for
    OPENING_HOURS products. Raises InvalidAvailabilityIdError on any
    deviation from the profile, including impossible calendar values.
    """
    if availability_type == AvailabilityType.START_TIME:
        pattern = DATETIME_ID_RE
        parse = datetime.fromisoformat
    else:
        pattern = DATE_ID_RE
        parse = date.fromisoformat

    if not isinstance(availability_id, str) or not pattern.match(availability_id):
        raise InvalidAvailabilityIdError(availability_id)
    try:
        return parse(availability_id)
    except ValueError:
        raise InvalidAvailabilityIdError(availability_id) from None


def availability_id_date(availability_id: str) -> str:
    """Date portion ("YYYY-MM-DD") of an availability id."""
    return availability_id.split("T")[0]


def format_slot_id(day: date, start: str | None, time_zone: str) -> str:
    """Build a slot id for a calendar day and optional local "HH:MM" start."""
    if start is None:
        return day.isoformat()
    return local_datetime(day, start, time_zone).isoformat()


def local_datetime(day: date, hhmm: str, time_zone: str) -> datetime:
    """Aware datetime for a local "HH:MM" on a calendar day."""
    return datetime.combine(day, parse_hhmm(hhmm), tzinfo=ZoneInfo(time_zone))


def parse_hhmm(value: str) -> time:
    hour, minute = value.split(":")
    return time(int(hour), int(minute))
