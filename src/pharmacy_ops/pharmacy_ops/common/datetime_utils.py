from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DATE_FORMAT, MISSING_DATE_LABEL


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def utc_midnight(day: date) -> datetime:
    """Timestamp stored for a date picked in a form (UTC midnight of that date)."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Naive datetimes are treated as UTC so they compare with stored timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def now_utc() -> datetime:
    """Current time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def local_date(now: datetime, tz_name: str) -> date:
    """Tenant-local calendar date of an instant."""
    return ensure_aware(now).astimezone(ZoneInfo(tz_name)).date()


def date_key(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def format_date(value: Optional[date | datetime]) -> str:
    if value is None:
        return MISSING_DATE_LABEL
    return value.strftime(DATE_FORMAT)
