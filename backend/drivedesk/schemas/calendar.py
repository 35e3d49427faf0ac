# backend/drivedesk/schemas/calendar.py
"""Combined calendar view payload."""

from datetime import date, datetime
from typing import List, Optional

from .base import StandardizedModel
from .booking import BookingResponse
from .viewport import FetchWindowResponse, ViewportResponse


class CalendarViewResponse(StandardizedModel):
    anchor_date: date
    view_mode: str
    timezone: str
    request_seq: Optional[int] = None
    fetch_window: FetchWindowResponse
    displayed_start: datetime
    displayed_end: datetime
    viewport: ViewportResponse
    bookings: List[BookingResponse]
