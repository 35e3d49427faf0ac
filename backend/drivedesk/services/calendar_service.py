# backend/drivedesk/services/calendar_service.py
"""
Calendar Service for DriveDesk

Glues the pure viewport calculator to storage:

1. Work out the fetch window for the anchor date and view, in the
   instructor's own time zone.
2. Load the bookings overlapping that window (converted to UTC). Day views
   load their whole Monday-start week, since the hour range is sized from it.
3. Compute the visible hour range, then trim the listed bookings back to
   the fetch window.

The caller's ``request_seq`` is echoed back untouched so a client that
navigates quickly can discard responses that arrive out of order.
"""

from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import List, Optional, Sequence, Tuple, Union

import pytz
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import ViewMode
from ..core.timezone_utils import get_profile_timezone, local_to_utc, to_local
from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.profile_repository import ProfileRepository
from .base import BaseService
from .calendar_viewport import (
    FetchWindow,
    TimedEvent,
    Viewport,
    compute_fetch_window,
    compute_viewport,
    displayed_range,
    viewport_source_window,
)

logger = logging.getLogger(__name__)


@dataclass
class CalendarView:
    """Everything the schedule screen needs for one navigation step."""

    anchor_date: date
    view_mode: ViewMode
    timezone: str
    fetch_window: FetchWindow
    viewport: Viewport
    bookings: List[Booking]
    displayed_start: datetime
    displayed_end: datetime
    request_seq: Optional[int] = None


class CalendarService(BaseService):
    """Service that resolves calendar views for an instructor."""

    def __init__(
        self,
        db: Session,
        booking_repository: Optional[BookingRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
    ):
        super().__init__(db)
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )

    def fetch_window_for(self, anchor_date: date, view_mode: Union[ViewMode, str]) -> FetchWindow:
        """Local-time fetch window using the configured agenda look-ahead."""
        return compute_fetch_window(
            anchor_date, view_mode, agenda_lookahead_months=settings.agenda_lookahead_months
        )

    def viewport_for(
        self,
        anchor_date: date,
        view_mode: Union[ViewMode, str],
        events: Sequence[TimedEvent],
        tz: Optional[pytz.BaseTzInfo] = None,
    ) -> Viewport:
        """Visible hour range using the configured default window."""
        return compute_viewport(
            anchor_date,
            view_mode,
            events,
            tz=tz,
            default_min_hour=settings.calendar_default_min_hour,
            default_max_hour=settings.calendar_default_max_hour,
        )

    @staticmethod
    def window_to_utc(window: FetchWindow, tz: pytz.BaseTzInfo) -> Tuple[datetime, datetime]:
        """Interpret a local fetch window in ``tz`` and return its UTC bounds."""
        return local_to_utc(window.start, tz), local_to_utc(window.end, tz)

    @BaseService.measure_operation("get_calendar_view")
    def get_calendar_view(
        self,
        user_id: str,
        anchor_date: date,
        view_mode: Union[ViewMode, str],
        request_seq: Optional[int] = None,
    ) -> CalendarView:
        """
        Resolve the fetch window, bookings and viewport for one calendar state.

        Args:
            user_id: Instructor id from the access token
            anchor_date: Day the calendar is navigated to
            view_mode: day/week/month/agenda (anything else behaves as agenda)
            request_seq: Optional client sequence number, echoed back

        Returns:
            CalendarView for the instructor's time zone
        """
        mode = ViewMode.parse(view_mode)
        profile = self.profile_repository.get_or_create(user_id, settings.default_timezone)
        tz = get_profile_timezone(profile)

        window = self.fetch_window_for(anchor_date, mode)
        load_window = viewport_source_window(anchor_date, mode) or window
        range_start, range_end = self.window_to_utc(load_window, tz)
        loaded = self.booking_repository.get_bookings_in_range(user_id, range_start, range_end)
        viewport = self.viewport_for(anchor_date, mode, loaded, tz=tz)

        bookings = loaded
        if not window.covers(load_window.start, load_window.end):
            bookings = [
                b
                for b in loaded
                if window.overlaps(to_local(b.start_time, tz), to_local(b.end_time, tz))
            ]
        displayed_start, displayed_end = displayed_range(anchor_date, mode)
        prometheus_metrics.inc_calendar_view(mode.value)

        self.logger.debug(
            "Calendar view for %s: %s %s -> %d of %d bookings, %02d:00-%02d:00",
            user_id,
            mode.value,
            anchor_date,
            len(bookings),
            len(loaded),
            viewport.min_hour,
            viewport.max_hour,
        )

        return CalendarView(
            anchor_date=anchor_date,
            view_mode=mode,
            timezone=tz.zone,
            fetch_window=window,
            viewport=viewport,
            bookings=bookings,
            displayed_start=displayed_start,
            displayed_end=displayed_end,
            request_seq=request_seq,
        )
