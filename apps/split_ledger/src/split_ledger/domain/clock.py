"""Timestamp helpers bound to the configured application timezone."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from split_ledger.core.settings import get_settings


def app_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().app_timezone)


def utc_now() -> datetime:
    """Return the current timezone-aware UTC timestamp."""

    return datetime.now(tz=UTC)


def local_today(now: datetime | None = None) -> date:
    """Return today's calendar date in the application timezone."""

    reference = now or utc_now()
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)
    return reference.astimezone(app_timezone()).date()


def parse_calendar_date(value: object) -> date | None:
    """Parse a date, datetime or ISO-8601 string into a calendar date."""

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(app_timezone()).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_calendar_date(datetime.fromisoformat(value.strip()))
        except ValueError:
            return None
    return None
