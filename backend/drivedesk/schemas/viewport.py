# backend/drivedesk/schemas/viewport.py
"""Fetch-window and viewport schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class FetchWindowResponse(StandardizedModel):
    """Inclusive local-time range the client should load."""

    start: datetime
    end: datetime


class ViewportResponse(StandardizedModel):
    """Visible hour range for the day/week grid."""

    min_time: datetime
    max_time: datetime
    min_hour: int
    max_hour: int


class EventInterval(StrictRequestModel):
    start_time: datetime
    end_time: datetime


class ViewportRequest(StrictRequestModel):
    """Bookings the client already holds, for a local recomputation."""

    anchor_date: date
    view_mode: str = "week"
    events: List[EventInterval] = Field(default_factory=list)
    timezone: Optional[str] = Field(
        None, description="Zone to read aware instants in; defaults to the profile zone"
    )
