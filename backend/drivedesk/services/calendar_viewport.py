# backend/drivedesk/services/calendar_viewport.py
"""
Calendar viewport calculations for the schedule screen.

Two pure functions drive the calendar:

- ``compute_viewport`` decides which hours of the day the day/week grid shows.
  The grid defaults to 09:00-18:00 and widens to whole hours so no booking in
  the visible week is clipped.
- ``compute_fetch_window`` decides which date range has to be loaded from
  storage for the current view.

Both are plain functions of their arguments: no settings, no sessions, no
clock. Callers re-run them whenever the anchor date, the view mode or the
loaded bookings change (navigation, view switch, and after any booking
mutation).

All datetimes handled here are naive wall-clock values in the instructor's
zone. Aware booking instants are converted when ``tz`` is supplied.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
import logging
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from ..core.enums import ViewMode

logger = logging.getLogger(__name__)

DEFAULT_MIN_HOUR = 9
DEFAULT_MAX_HOUR = 18  # 6 PM
DEFAULT_AGENDA_LOOKAHEAD_MONTHS = 2
AGENDA_LENGTH_DAYS = 30

_END_OF_DAY = time(23, 59, 59, 999999)

AnchorLike = Union[date, datetime]


class TimedEvent(Protocol):
    """Anything with a start and an end, e.g. a ``Booking`` row or a DTO."""

    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class Viewport:
    """Visible time-of-day range on the day/week axis, anchored on a calendar day."""

    min_time: datetime
    max_time: datetime

    @property
    def min_hour(self) -> int:
        return self.min_time.hour

    @property
    def max_hour(self) -> int:
        # A max of 24:00 is stored as the following midnight.
        if self.max_time.date() > self.min_time.date():
            return 24
        return self.max_time.hour


@dataclass(frozen=True)
class FetchWindow:
    """Inclusive date-time range to request from storage."""

    start: datetime
    end: datetime

    def covers(self, start: datetime, end: datetime) -> bool:
        """True when [start, end] lies entirely inside this window."""
        return self.start <= start and end <= self.end

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return start <= self.end and end >= self.start


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


def _as_date(anchor: AnchorLike) -> date:
    return anchor.date() if isinstance(anchor, datetime) else anchor


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, _END_OF_DAY)


def week_bounds(day: date) -> Tuple[datetime, datetime]:
    """Monday 00:00 through Sunday 23:59:59.999999 of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return start_of_day(monday), end_of_day(monday + timedelta(days=6))


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_bounds(day: date) -> Tuple[datetime, datetime]:
    """First instant and last instant of the month containing ``day``."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return start_of_day(day.replace(day=1)), end_of_day(day.replace(day=last_day))


def _wall_clock(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """
    Express ``value`` as a naive wall-clock time.

    With ``tz`` the instant is converted into that zone (naive input is read as
    UTC, which is how SQLite hands back stored instants). Without ``tz`` an
    aware value keeps its own offset's wall-clock time.
    """
    if tz is None:
        return value.replace(tzinfo=None)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz).replace(tzinfo=None)


# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------


def default_viewport(
    anchor_date: AnchorLike,
    *,
    default_min_hour: int = DEFAULT_MIN_HOUR,
    default_max_hour: int = DEFAULT_MAX_HOUR,
) -> Viewport:
    """The fixed default window on ``anchor_date``."""
    midnight = start_of_day(_as_date(anchor_date))
    return Viewport(
        min_time=midnight + timedelta(hours=default_min_hour),
        max_time=midnight + timedelta(hours=default_max_hour),
    )


def events_in_week(
    anchor_date: AnchorLike,
    events: Iterable[TimedEvent],
    *,
    tz: Optional[tzinfo] = None,
) -> List[Tuple[datetime, datetime]]:
    """
    Return (start, end) wall-clock pairs of events touching the anchor's Monday-start week.

    An event counts when it starts inside the week, ends inside the week, or
    spans the whole week. Both week edges are inclusive. Events whose start is
    after their end are skipped.
    """
    week_start, week_end = week_bounds(_as_date(anchor_date))
    selected: List[Tuple[datetime, datetime]] = []

    for event in events:
        start = _wall_clock(event.start_time, tz)
        end = _wall_clock(event.end_time, tz)
        if start > end:
            logger.debug(
                "Skipping event with start after end: %s > %s (id=%s)",
                start,
                end,
                getattr(event, "id", None),
            )
            continue

        if (
            week_start <= start <= week_end
            or week_start <= end <= week_end
            or (start < week_start and end > week_end)
        ):
            selected.append((start, end))

    return selected


def compute_viewport(
    anchor_date: AnchorLike,
    view_mode: Union[ViewMode, str],
    events: Iterable[TimedEvent],
    *,
    tz: Optional[tzinfo] = None,
    default_min_hour: int = DEFAULT_MIN_HOUR,
    default_max_hour: int = DEFAULT_MAX_HOUR,
) -> Viewport:
    """
    Compute the visible hour range for the calendar grid.

    Month and agenda views have no time axis and always get the default
    window. Day and week views both look at every event in the anchor's
    Monday-start week and widen the default window to fit them:

    - min hour is the earlier of the default and the earliest event start hour
    - max hour moves past the default only if the latest event ends after it.
      It rounds up when the end has minutes, so an end of 19:30 gives 20:00
      while an end of exactly 19:00 gives 19:00.

    Args:
        anchor_date: Day the calendar is navigated to
        view_mode: Active view; unknown names behave like agenda
        events: Loaded bookings (anything with ``start_time``/``end_time``)
        tz: Zone to read aware instants in; ``None`` uses the values as given
        default_min_hour: First hour shown when nothing is earlier
        default_max_hour: Last hour shown when nothing is later

    Returns:
        Viewport with both bounds on ``anchor_date`` at whole hours
    """
    day = _as_date(anchor_date)
    mode = ViewMode.parse(view_mode)

    if mode not in (ViewMode.DAY, ViewMode.WEEK):
        return default_viewport(
            day, default_min_hour=default_min_hour, default_max_hour=default_max_hour
        )

    in_week = events_in_week(day, events, tz=tz)
    if not in_week:
        return default_viewport(
            day, default_min_hour=default_min_hour, default_max_hour=default_max_hour
        )

    earliest_start = min(start for start, _ in in_week)
    latest_end = max(end for _, end in in_week)

    min_hour = min(default_min_hour, earliest_start.hour)

    max_hour = default_max_hour
    latest_hour = latest_end.hour
    latest_minute = latest_end.minute
    if latest_hour > default_max_hour or (latest_hour == default_max_hour and latest_minute > 0):
        max_hour = latest_hour + (1 if latest_minute > 0 else 0)

    midnight = start_of_day(day)
    return Viewport(
        min_time=midnight + timedelta(hours=min_hour),
        max_time=midnight + timedelta(hours=max_hour),
    )


def viewport_source_window(
    anchor_date: AnchorLike, view_mode: Union[ViewMode, str]
) -> Optional[FetchWindow]:
    """
    Range whose events can move the viewport, or ``None`` when none can.

    Day and week views are both sized from the anchor's whole Monday-start
    week, so a day view has to see more bookings than it lists.
    """
    mode = ViewMode.parse(view_mode)
    if mode not in (ViewMode.DAY, ViewMode.WEEK):
        return None
    start, end = week_bounds(_as_date(anchor_date))
    return FetchWindow(start=start, end=end)


# ---------------------------------------------------------------------------
# Fetch window
# ---------------------------------------------------------------------------


def compute_fetch_window(
    anchor_date: AnchorLike,
    view_mode: Union[ViewMode, str],
    *,
    agenda_lookahead_months: int = DEFAULT_AGENDA_LOOKAHEAD_MONTHS,
) -> FetchWindow:
    """
    Date range to load for ``view_mode`` around ``anchor_date``.

    - day: the anchor day
    - week: Monday through Sunday of the anchor's week
    - month: the anchor's calendar month
    - agenda (and anything unrecognised): start of the anchor's month through
      the end of the month ``agenda_lookahead_months`` later
    """
    day = _as_date(anchor_date)
    mode = ViewMode.parse(view_mode)

    if mode is ViewMode.DAY:
        return FetchWindow(start=start_of_day(day), end=end_of_day(day))
    if mode is ViewMode.WEEK:
        start, end = week_bounds(day)
        return FetchWindow(start=start, end=end)
    if mode is ViewMode.MONTH:
        start, end = month_bounds(day)
        return FetchWindow(start=start, end=end)

    start, _ = month_bounds(day)
    _, end = month_bounds(add_months(day, agenda_lookahead_months))
    return FetchWindow(start=start, end=end)


def displayed_range(
    anchor_date: AnchorLike, view_mode: Union[ViewMode, str]
) -> Tuple[datetime, datetime]:
    """
    The date range the grid actually paints for ``view_mode``.

    Month padding days from neighbouring months are rendered empty and are not
    part of the range.
    """
    day = _as_date(anchor_date)
    mode = ViewMode.parse(view_mode)
    if mode is ViewMode.DAY:
        return start_of_day(day), end_of_day(day)
    if mode is ViewMode.WEEK:
        return week_bounds(day)
    if mode is ViewMode.MONTH:
        return month_bounds(day)
    # Agenda lists AGENDA_LENGTH_DAYS days starting at the anchor.
    return start_of_day(day), end_of_day(day + timedelta(days=AGENDA_LENGTH_DAYS - 1))
