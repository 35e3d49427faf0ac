"""
Timezone utilities for DriveDesk.

Bookings are stored as UTC instants; everything the instructor sees (calendar
axis bounds, day/week/month windows) is expressed in the instructor's own zone.
"""

from datetime import date, datetime, time
from typing import TYPE_CHECKING, Optional

import pytz

from .config import settings

if TYPE_CHECKING:
    from ..models.profile import Profile


def resolve_timezone(name: Optional[str]) -> pytz.BaseTzInfo:
    """
    Return a pytz zone for ``name``, falling back to the configured default.

    Unknown zone names are treated as the default rather than failing the request.
    """
    try:
        return pytz.timezone(name or settings.default_timezone)
    except pytz.UnknownTimeZoneError:
        return pytz.timezone(settings.default_timezone)


def get_profile_timezone(profile: Optional["Profile"]) -> pytz.BaseTzInfo:
    """Get the instructor's timezone preference."""
    return resolve_timezone(getattr(profile, "timezone", None))


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and normalise aware ones."""
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def to_local(dt: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """
    Convert a stored instant to naive wall-clock time in ``tz``.

    Args:
        dt: Datetime to convert (naive values are assumed to be UTC)
        tz: Target timezone

    Returns:
        Naive datetime in the target zone
    """
    return ensure_utc(dt).astimezone(tz).replace(tzinfo=None)


def local_to_utc(naive_local: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Interpret a naive wall-clock datetime in ``tz`` and return the UTC instant."""
    return tz.localize(naive_local).astimezone(pytz.UTC)


def get_local_today(tz: pytz.BaseTzInfo) -> date:
    """Get 'today' in the given timezone."""
    return datetime.now(tz).date()


def start_of_local_day(day: date, tz: pytz.BaseTzInfo) -> datetime:
    """UTC instant of local midnight on ``day``."""
    return local_to_utc(datetime.combine(day, time.min), tz)
