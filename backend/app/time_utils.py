"""Helpers for session dates and timezone-aware datetimes."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo


def session_label(day: date) -> str:
    """Return the human label for a session date, e.g. ``Mon Oct 28 2024``."""

    return f"{day:%a} {day:%b} {day.day:02d} {day.year}"


def today(tz: tzinfo | None = None) -> date:
    """Return the current calendar date in ``tz`` (UTC when omitted)."""

    return datetime.now(tz or timezone.utc).date()


def coerce_utc(value: datetime | None) -> datetime | None:
    """Return a UTC-normalized datetime, assuming naive values are already UTC."""

    if value is None:
        return None

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc)
