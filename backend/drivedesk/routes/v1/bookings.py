# backend/drivedesk/routes/v1/bookings.py
"""
Booking routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to BookingService.

Write endpoints accept the caller's current ``anchor_date`` and ``view_mode``
as query parameters and answer with the fetch window to reload.

Endpoints:
    GET /               - Bookings overlapping a range
    GET /upcoming       - Scheduled bookings from now on
    GET /driving-tests  - Driving-test bookings
    GET /completed      - Completed lessons
    GET /notes          - Bookings with lesson notes or targets
    POST /              - Create a booking or a repeating series
    GET /{booking_id}   - Booking details
    PATCH /{booking_id} - Update a booking
    POST /{booking_id}/status - Change status (drives pre-paid hours)
    DELETE /{booking_id} - Delete a booking
"""

import asyncio
from datetime import date, datetime
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_booking_service, get_current_user_id
from ...core.enums import BookingStatus
from ...schemas.booking import (
    BookingCreate,
    BookingDeleteResponse,
    BookingMutationResponse,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from ...schemas.viewport import FetchWindowResponse
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])


def _window(
    booking_service: BookingService, anchor_date: Optional[date], view_mode: Optional[str]
) -> Optional[FetchWindowResponse]:
    window = booking_service.fetch_window_after_mutation(anchor_date, view_mode)
    return FetchWindowResponse.model_validate(window) if window is not None else None


# ============================================================================
# SECTION 1: Static routes (no path parameters)
# ============================================================================


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    start: datetime = Query(..., description="Range start; no offset means local time"),
    end: datetime = Query(..., description="Range end; no offset means local time"),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    bookings = await asyncio.to_thread(booking_service.get_bookings_in_range, user_id, start, end)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/upcoming", response_model=List[BookingResponse])
async def get_upcoming_bookings(
    limit: Optional[int] = Query(None, ge=1, le=200),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    """Scheduled bookings starting from now, soonest first."""
    bookings = await asyncio.to_thread(booking_service.get_upcoming_lessons, user_id, limit)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/driving-tests", response_model=List[BookingResponse])
async def get_driving_test_bookings(
    student_id: Optional[str] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    bookings = await asyncio.to_thread(
        booking_service.get_driving_test_bookings, user_id, student_id, status_filter
    )
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/completed", response_model=List[BookingResponse])
async def get_completed_lessons(
    student_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    bookings = await asyncio.to_thread(booking_service.get_completed_lessons, user_id, student_id)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/notes", response_model=List[BookingResponse])
async def get_lesson_notes(
    student_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    bookings = await asyncio.to_thread(
        booking_service.get_lesson_notes, user_id, student_id, search
    )
    return [BookingResponse.model_validate(b) for b in bookings]


@router.post("", response_model=BookingMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_bookings(
    payload: BookingCreate,
    anchor_date: Optional[date] = Query(None),
    view_mode: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingMutationResponse:
    """Create one booking, or ``repeat_count`` bookings one or two weeks apart."""
    bookings = await asyncio.to_thread(booking_service.create_bookings, user_id, payload)
    return BookingMutationResponse(
        bookings=[BookingResponse.model_validate(b) for b in bookings],
        fetch_window=_window(booking_service, anchor_date, view_mode),
    )


# ============================================================================
# SECTION 2: Routes with a booking id
# ============================================================================


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = await asyncio.to_thread(booking_service.get_booking, user_id, booking_id)
    return BookingResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingMutationResponse)
async def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    anchor_date: Optional[date] = Query(None),
    view_mode: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingMutationResponse:
    booking = await asyncio.to_thread(
        booking_service.update_booking, user_id, booking_id, payload
    )
    return BookingMutationResponse(
        bookings=[BookingResponse.model_validate(booking)],
        fetch_window=_window(booking_service, anchor_date, view_mode),
    )


@router.post("/{booking_id}/status", response_model=BookingMutationResponse)
async def change_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    anchor_date: Optional[date] = Query(None),
    view_mode: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingMutationResponse:
    booking = await asyncio.to_thread(
        booking_service.change_status, user_id, booking_id, payload.status
    )
    return BookingMutationResponse(
        bookings=[BookingResponse.model_validate(booking)],
        fetch_window=_window(booking_service, anchor_date, view_mode),
    )


@router.delete("/{booking_id}", response_model=BookingDeleteResponse)
async def delete_booking(
    booking_id: str,
    anchor_date: Optional[date] = Query(None),
    view_mode: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingDeleteResponse:
    await asyncio.to_thread(booking_service.delete_booking, user_id, booking_id)
    return BookingDeleteResponse(
        deleted_id=booking_id,
        fetch_window=_window(booking_service, anchor_date, view_mode),
    )
