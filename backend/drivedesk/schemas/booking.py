# backend/drivedesk/schemas/booking.py
"""
Booking schemas for DriveDesk.

Start times posted without an offset are read as wall-clock time in the
instructor's zone; the service converts them to UTC before storage.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from ..core.enums import BookingStatus, LessonLength, LessonType, RepeatFrequency
from ._strict_base import StrictRequestModel
from .base import StandardizedModel, UtcDatetime
from .viewport import FetchWindowResponse


class BookingCreate(StrictRequestModel):
    """Create one booking, or a weekly/fortnightly series of them."""

    student_id: Optional[str] = Field(None, description="Student the lesson is with")
    lesson_type: LessonType = LessonType.DRIVING_LESSON
    lesson_length: LessonLength = Field(
        LessonLength.SIXTY, description="Lesson length in minutes (60, 90 or 120)"
    )
    start_time: datetime
    title: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    targets_for_next_session: Optional[str] = Field(None, max_length=5000)
    repeat: RepeatFrequency = RepeatFrequency.NONE
    repeat_count: int = Field(1, ge=1, le=12, description="Number of bookings in the series")

    @model_validator(mode="after")
    def _student_required_for_lessons(self) -> "BookingCreate":
        if self.lesson_type is not LessonType.PERSONAL and not self.student_id:
            raise ValueError("student_id is required for lessons and driving tests")
        return self


class BookingUpdate(StrictRequestModel):
    """Partial update; only the fields sent are changed."""

    student_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    lesson_type: Optional[LessonType] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    lesson_length: Optional[LessonLength] = None
    targets_for_next_session: Optional[str] = Field(None, max_length=5000)
    status: Optional[BookingStatus] = None

    @model_validator(mode="after")
    def _one_way_to_set_end(self) -> "BookingUpdate":
        if self.end_time is not None and self.lesson_length is not None:
            raise ValueError("Send either end_time or lesson_length, not both")
        return self


class BookingStatusUpdate(StrictRequestModel):
    status: BookingStatus


class BookingResponse(StandardizedModel):
    id: str
    student_id: Optional[str] = None
    student_name: Optional[str] = None
    title: str
    description: Optional[str] = None
    lesson_type: str
    targets_for_next_session: Optional[str] = None
    start_time: UtcDatetime
    end_time: UtcDatetime
    status: str
    duration_hours: float

    @field_validator("duration_hours")
    @classmethod
    def _round_hours(cls, v: float) -> float:
        return round(v, 2)


class BookingMutationResponse(StandardizedModel):
    """
    Result of a booking write.

    ``fetch_window`` is filled when the caller passes its current anchor date
    and view so it can reload the visible range.
    """

    bookings: List[BookingResponse]
    fetch_window: Optional[FetchWindowResponse] = None


class BookingDeleteResponse(StandardizedModel):
    success: bool = True
    deleted_id: str
    fetch_window: Optional[FetchWindowResponse] = None

