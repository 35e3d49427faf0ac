# backend/drivedesk/routes/v1/calendar.py
"""
Calendar routes - API v1

Endpoints:
    GET /             - Bookings, fetch window and viewport for one calendar state
    GET /fetch-window - Date range to load for an anchor date and view
    POST /viewport    - Visible hour range over bookings the client already holds
"""

import asyncio
from datetime import date
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_calendar_service, get_current_profile, get_current_user_id
from ...core.timezone_utils import get_profile_timezone, resolve_timezone, to_local
from ...models.profile import Profile
from ...schemas.booking import BookingResponse
from ...schemas.calendar import CalendarViewResponse
from ...schemas.viewport import (
    EventInterval,
    FetchWindowResponse,
    ViewportRequest,
    ViewportResponse,
)
from ...services.calendar_service import CalendarService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["calendar-v1"])


@router.get("", response_model=CalendarViewResponse)
async def get_calendar_view(
    anchor_date: date = Query(..., description="Day the calendar is navigated to"),
    view_mode: str = Query("week", description="day, week, month or agenda"),
    request_seq: Optional[int] = Query(
        None, ge=0, description="Client sequence number echoed back for staleness checks"
    ),
    user_id: str = Depends(get_current_user_id),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> CalendarViewResponse:
    view = await asyncio.to_thread(
        calendar_service.get_calendar_view, user_id, anchor_date, view_mode, request_seq
    )
    return CalendarViewResponse(
        anchor_date=view.anchor_date,
        view_mode=view.view_mode.value,
        timezone=view.timezone,
        request_seq=view.request_seq,
        fetch_window=FetchWindowResponse.model_validate(view.fetch_window),
        displayed_start=view.displayed_start,
        displayed_end=view.displayed_end,
        viewport=ViewportResponse.model_validate(view.viewport),
        bookings=[BookingResponse.model_validate(b) for b in view.bookings],
    )


@router.get("/fetch-window", response_model=FetchWindowResponse)
async def get_fetch_window(
    anchor_date: date = Query(...),
    view_mode: str = Query("week"),
    user_id: str = Depends(get_current_user_id),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> FetchWindowResponse:
    """Local-time range; unknown view names get the agenda window."""
    return FetchWindowResponse.model_validate(
        calendar_service.fetch_window_for(anchor_date, view_mode)
    )


@router.post("/viewport", response_model=ViewportResponse)
async def compute_viewport(
    payload: ViewportRequest,
    profile: Profile = Depends(get_current_profile),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> ViewportResponse:
    """
    Recompute the hour range without touching storage.

    Times with an offset are converted to the requested zone (or the
    profile's); times without one are taken as local wall-clock already.
    """
    tz = resolve_timezone(payload.timezone) if payload.timezone else get_profile_timezone(profile)
    events = [
        EventInterval(
            start_time=to_local(e.start_time, tz) if e.start_time.tzinfo else e.start_time,
            end_time=to_local(e.end_time, tz) if e.end_time.tzinfo else e.end_time,
        )
        for e in payload.events
    ]
    viewport = calendar_service.viewport_for(payload.anchor_date, payload.view_mode, events)
    return ViewportResponse.model_validate(viewport)
